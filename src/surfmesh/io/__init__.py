"""Mesh exporters."""

from .obj import write_obj
from .stl import write_stl

__all__ = ['write_obj', 'write_stl']

"""Exceptions raised by surfmesh."""


class SurfaceMeshError(Exception):
    """Base class for all surfmesh errors."""


class ConfigurationError(SurfaceMeshError, ValueError):
    """Raised for invalid subdivisions, domains, or settings.

    Subclasses ``ValueError`` so callers that only care about bad input can
    keep catching the builtin.
    """


class HostWiringError(ConfigurationError):
    """Raised when a host entity lacks a collaborator the adapter needs."""


__all__ = ["SurfaceMeshError", "ConfigurationError", "HostWiringError"]

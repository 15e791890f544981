"""Small vector helpers shared by surfaces, meshes and exporters."""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

epsilon = 1e-12


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle representation in XYZ space."""

    normal: Vec3
    v0: Vec3
    v1: Vec3
    v2: Vec3


def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a float tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(a: Vec3) -> float:
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def normalize(a: Vec3) -> Vec3:
    """Return ``a`` scaled to unit length; zero vectors raise ``ValueError``."""

    mag = length(a)
    if mag < epsilon:
        raise ValueError("cannot normalize a zero-length vector")
    return a[0] / mag, a[1] / mag, a[2] / mag


def perpendicular(axis: Vec3) -> Vec3:
    """Return a unit vector perpendicular to the unit vector ``axis``."""

    # pick the construction that stays well conditioned near the z axis
    if abs(axis[2]) < 0.9:
        ref = (axis[1], -axis[0], 0.0)
    else:
        ref = (0.0, axis[2], -axis[1])
    return normalize(ref)


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    a = (v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2])
    b = (v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2])
    n = cross(a, b)
    mag = length(n)
    if mag <= epsilon:
        return None
    return (n[0] / mag, n[1] / mag, n[2] / mag)


__all__ = [
    "Triangle",
    "Vec2",
    "Vec3",
    "epsilon",
    "to_vec3",
    "cross",
    "length",
    "normalize",
    "perpendicular",
    "triangle_normal",
]

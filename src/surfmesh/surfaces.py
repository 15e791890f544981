"""Parametric surface functions.

A surface function maps a parameter pair ``(u, v)`` taken from a declared
domain to a point in 3D space. The tessellator only relies on the three
operations of :class:`SurfaceFunction`; everything else in this module is a
library of ready-made surfaces.

Surface types:
- PlaneSurface: affine plane spanned by two axes through an origin
- SphereSurface: sphere around a center, polar angle measured from +z
- CylinderSurface: cylinder around an axis, v is the axial distance
- ConeSurface: cone opening from an apex, v is the axial distance
- TorusSurface: torus around an axis with major/minor radii
- FunctionSurface: wraps any pure callable

Every concrete surface is a frozen dataclass. Evaluation is a pure function
of ``(u, v)``: identical parameters always yield an identical point.

Copyright (c) 2025 surfmesh contributors
MIT License
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from math import cos, isfinite, pi, sin, tan
from typing import Any, Callable, Dict, Tuple, Type

from surfmesh.errors import ConfigurationError
from surfmesh.geometry_utils import Vec3, cross, normalize, perpendicular, to_vec3

Range = Tuple[float, float]


class SurfaceFunction(ABC):
    """
    Capability interface for anything that can be tessellated.

    Implementations declare their parameter domain and evaluate points
    inside it. ``evaluate`` is assumed total over the declared domain.
    """

    @abstractmethod
    def domain_u(self) -> Range:
        """Return ``(min, max)`` of the u parameter."""
        pass

    @abstractmethod
    def domain_v(self) -> Range:
        """Return ``(min, max)`` of the v parameter."""
        pass

    @abstractmethod
    def evaluate(self, u: float, v: float) -> Vec3:
        """Return the 3D point at parameters ``(u, v)``."""
        pass


def _as_range(value, label: str) -> Range:
    try:
        lo, hi = value
        lo, hi = float(lo), float(hi)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must be a pair of numbers, got {value!r}") from exc
    return lo, hi


def _as_vec3(value, label: str) -> Vec3:
    try:
        return to_vec3(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must have three components, got {value!r}") from exc


def _as_unit(value, label: str) -> Vec3:
    try:
        return normalize(_as_vec3(value, label))
    except ValueError as exc:
        if isinstance(exc, ConfigurationError):
            raise
        raise ConfigurationError(f"{label} cannot be zero") from exc


def _number(value, label: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must be a number, got {value!r}") from exc


def _positive(value, label: str) -> float:
    value = _number(value, label)
    if not value > 0:
        raise ConfigurationError(f"{label} must be positive")
    return value


def check_domain(surface: SurfaceFunction) -> Tuple[Range, Range]:
    """Return the surface's ``(u_range, v_range)`` as float pairs.

    Raises :class:`ConfigurationError` when a bound is not finite or an
    interval is inverted (``min > max``). Zero-width intervals are allowed.
    """

    ranges = []
    for label, getter in (("u", surface.domain_u), ("v", surface.domain_v)):
        lo, hi = _as_range(getter(), f"domain {label}")
        if not (isfinite(lo) and isfinite(hi)):
            raise ConfigurationError(f"domain {label} bounds must be finite, got ({lo}, {hi})")
        if lo > hi:
            raise ConfigurationError(f"domain {label} is inverted: min {lo} > max {hi}")
        ranges.append((lo, hi))
    return ranges[0], ranges[1]


class _RangedSurface(SurfaceFunction):
    """Serves the domain from ``u_range`` / ``v_range`` fields."""

    u_range: Range
    v_range: Range

    def domain_u(self) -> Range:
        return self.u_range

    def domain_v(self) -> Range:
        return self.v_range

    def _freeze_ranges(self) -> None:
        object.__setattr__(self, "u_range", _as_range(self.u_range, "u_range"))
        object.__setattr__(self, "v_range", _as_range(self.v_range, "v_range"))


# -----------------------------------------------------------------------------
# Plane Surface
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PlaneSurface(_RangedSurface):
    """Plane ``origin + u*u_axis + v*v_axis``.

    With the defaults this is ``(u, 0, v)`` over the unit square.
    """

    origin: Vec3 = (0.0, 0.0, 0.0)
    u_axis: Vec3 = (1.0, 0.0, 0.0)
    v_axis: Vec3 = (0.0, 0.0, 1.0)
    u_range: Range = (0.0, 1.0)
    v_range: Range = (0.0, 1.0)

    def __post_init__(self):
        object.__setattr__(self, "origin", _as_vec3(self.origin, "origin"))
        object.__setattr__(self, "u_axis", _as_vec3(self.u_axis, "u_axis"))
        object.__setattr__(self, "v_axis", _as_vec3(self.v_axis, "v_axis"))
        self._freeze_ranges()

    @classmethod
    def from_normal(cls, origin, normal, *, u_range=(-1.0, 1.0), v_range=(-1.0, 1.0)):
        """Build a plane through ``origin`` perpendicular to ``normal``.

        The in-plane axes are unit vectors chosen so that
        ``u_axis x v_axis`` points along ``normal``.
        """
        norm = _as_unit(normal, "normal")
        u_axis = perpendicular(norm)
        v_axis = cross(norm, u_axis)
        return cls(origin=origin, u_axis=u_axis, v_axis=v_axis,
                   u_range=u_range, v_range=v_range)

    def evaluate(self, u, v):
        o, a, b = self.origin, self.u_axis, self.v_axis
        return (
            o[0] + u * a[0] + v * b[0],
            o[1] + u * a[1] + v * b[1],
            o[2] + u * a[2] + v * b[2],
        )


# -----------------------------------------------------------------------------
# Sphere Surface
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SphereSurface(_RangedSurface):
    """Sphere parameterized by azimuth ``u`` and polar angle ``v``.

    ``v`` is measured from the +z pole, so ``v_range=(0, pi)`` covers the
    sphere exactly once. A range of ``(0, 2*pi)`` traces every point twice.
    """

    radius: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)
    u_range: Range = (0.0, 2 * pi)
    v_range: Range = (0.0, pi)

    def __post_init__(self):
        object.__setattr__(self, "radius", _positive(self.radius, "radius"))
        object.__setattr__(self, "center", _as_vec3(self.center, "center"))
        self._freeze_ranges()

    def evaluate(self, u, v):
        c, r = self.center, self.radius
        sin_v = sin(v)
        return (
            c[0] + r * cos(u) * sin_v,
            c[1] + r * sin(u) * sin_v,
            c[2] + r * cos(v),
        )


# -----------------------------------------------------------------------------
# Axis-aligned surfaces of revolution
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class _AxialSurface(_RangedSurface):
    """Shared frame set-up for surfaces revolving around ``axis``."""

    def _build_frame(self) -> None:
        axis = _as_unit(self.axis, "axis")
        ref = perpendicular(axis)
        object.__setattr__(self, "axis", axis)
        object.__setattr__(self, "_ref", ref)
        object.__setattr__(self, "_side", cross(axis, ref))

    def _radial(self, u: float) -> Vec3:
        # ref * cos(u) + (axis x ref) * sin(u)
        ref, side = self._ref, self._side
        cos_u, sin_u = cos(u), sin(u)
        return (
            ref[0] * cos_u + side[0] * sin_u,
            ref[1] * cos_u + side[1] * sin_u,
            ref[2] * cos_u + side[2] * sin_u,
        )


@dataclass(frozen=True)
class CylinderSurface(_AxialSurface):
    """Cylinder of ``radius`` around ``axis``; ``v`` is the axial offset."""

    radius: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)
    axis: Vec3 = (0.0, 0.0, 1.0)
    u_range: Range = (0.0, 2 * pi)
    v_range: Range = (0.0, 1.0)
    _ref: Vec3 = field(default=(1.0, 0.0, 0.0), init=False, repr=False, compare=False)
    _side: Vec3 = field(default=(0.0, 1.0, 0.0), init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "radius", _positive(self.radius, "radius"))
        object.__setattr__(self, "center", _as_vec3(self.center, "center"))
        self._build_frame()
        self._freeze_ranges()

    def evaluate(self, u, v):
        c, a, r = self.center, self.axis, self.radius
        d = self._radial(u)
        return (
            c[0] + v * a[0] + r * d[0],
            c[1] + v * a[1] + r * d[1],
            c[2] + v * a[2] + r * d[2],
        )


@dataclass(frozen=True)
class ConeSurface(_AxialSurface):
    """Cone opening from ``apex`` along ``axis``.

    At axial distance ``v`` the radius is ``v * tan(half_angle)``.
    """

    half_angle: float = pi / 4
    apex: Vec3 = (0.0, 0.0, 0.0)
    axis: Vec3 = (0.0, 0.0, 1.0)
    u_range: Range = (0.0, 2 * pi)
    v_range: Range = (0.0, 1.0)
    _ref: Vec3 = field(default=(1.0, 0.0, 0.0), init=False, repr=False, compare=False)
    _side: Vec3 = field(default=(0.0, 1.0, 0.0), init=False, repr=False, compare=False)

    def __post_init__(self):
        half_angle = _number(self.half_angle, "half_angle")
        if not 0 < half_angle < pi / 2:
            raise ConfigurationError("half_angle must be between 0 and pi/2")
        object.__setattr__(self, "half_angle", half_angle)
        object.__setattr__(self, "apex", _as_vec3(self.apex, "apex"))
        self._build_frame()
        self._freeze_ranges()

    def evaluate(self, u, v):
        p, a = self.apex, self.axis
        r = v * tan(self.half_angle)
        d = self._radial(u)
        return (
            p[0] + v * a[0] + r * d[0],
            p[1] + v * a[1] + r * d[1],
            p[2] + v * a[2] + r * d[2],
        )


@dataclass(frozen=True)
class TorusSurface(_AxialSurface):
    """Torus around ``axis``; ``u`` runs the major circle, ``v`` the tube."""

    major_radius: float = 2.0
    minor_radius: float = 0.5
    center: Vec3 = (0.0, 0.0, 0.0)
    axis: Vec3 = (0.0, 0.0, 1.0)
    u_range: Range = (0.0, 2 * pi)
    v_range: Range = (0.0, 2 * pi)
    _ref: Vec3 = field(default=(1.0, 0.0, 0.0), init=False, repr=False, compare=False)
    _side: Vec3 = field(default=(0.0, 1.0, 0.0), init=False, repr=False, compare=False)

    def __post_init__(self):
        major = _positive(self.major_radius, "major_radius")
        minor = _positive(self.minor_radius, "minor_radius")
        if minor >= major:
            raise ConfigurationError("minor_radius must be less than major_radius")
        object.__setattr__(self, "major_radius", major)
        object.__setattr__(self, "minor_radius", minor)
        object.__setattr__(self, "center", _as_vec3(self.center, "center"))
        self._build_frame()
        self._freeze_ranges()

    def evaluate(self, u, v):
        c, a = self.center, self.axis
        r = self.minor_radius
        d = self._radial(u)
        # center + (R + r*cos(v))*d + r*sin(v)*axis
        factor = self.major_radius + r * cos(v)
        lift = r * sin(v)
        return (
            c[0] + factor * d[0] + lift * a[0],
            c[1] + factor * d[1] + lift * a[1],
            c[2] + factor * d[2] + lift * a[2],
        )


# -----------------------------------------------------------------------------
# Callable-backed surface
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FunctionSurface(_RangedSurface):
    """Adapt a plain ``func(u, v) -> (x, y, z)`` to :class:`SurfaceFunction`.

    ``func`` must be pure; the tessellator may call it from worker threads.
    """

    func: Callable[[float, float], Any] = None
    u_range: Range = (0.0, 1.0)
    v_range: Range = (0.0, 1.0)

    def __post_init__(self):
        if not callable(self.func):
            raise ConfigurationError("func must be callable")
        self._freeze_ranges()

    def evaluate(self, u, v):
        return to_vec3(self.func(u, v))


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

SURFACES: Dict[str, Type[SurfaceFunction]] = {
    "plane": PlaneSurface,
    "sphere": SphereSurface,
    "cylinder": CylinderSurface,
    "cone": ConeSurface,
    "torus": TorusSurface,
}


def make_surface(kind: str, **params) -> SurfaceFunction:
    """Instantiate a registered surface by name.

    >>> make_surface("sphere", radius=3.0).radius
    3.0
    """
    try:
        cls = SURFACES[kind]
    except KeyError:
        known = ", ".join(sorted(SURFACES))
        raise ConfigurationError(f"unknown surface '{kind}' (expected one of: {known})") from None
    try:
        return cls(**params)
    except TypeError as exc:
        raise ConfigurationError(f"bad parameters for {kind}: {exc}") from exc


__all__ = [
    "SurfaceFunction",
    "PlaneSurface",
    "SphereSurface",
    "CylinderSurface",
    "ConeSurface",
    "TorusSurface",
    "FunctionSurface",
    "SURFACES",
    "check_domain",
    "make_surface",
]

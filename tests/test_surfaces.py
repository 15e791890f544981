"""Tests for the surface function library."""

import dataclasses
import pytest
from math import nan, pi, sqrt, tan

from surfmesh.errors import ConfigurationError
from surfmesh.geometry_utils import cross
from surfmesh.surfaces import (
    SURFACES, ConeSurface, CylinderSurface, FunctionSurface, PlaneSurface,
    SphereSurface, SurfaceFunction, TorusSurface, check_domain, make_surface,
)
from surfmesh.tessellator import generate


def _close(a, b, tol=1e-10):
    return all(abs(x - y) < tol for x, y in zip(a, b))


class TestSurfaceFunction:
    """The abstract interface."""

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            SurfaceFunction()

    def test_custom_subclass_tessellates(self):
        class Saddle(SurfaceFunction):
            def domain_u(self):
                return (-1.0, 1.0)

            def domain_v(self):
                return (-1.0, 1.0)

            def evaluate(self, u, v):
                return (u, v, u * u - v * v)

        mesh = generate((4, 4), Saddle())
        assert mesh.vertices[0] == (-1.0, -1.0, 0.0)
        assert mesh.vertices[12] == (0.0, 0.0, 0.0)

    def test_surfaces_are_frozen(self):
        s = SphereSurface(radius=2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.radius = 3.0


class TestPlaneSurface:
    """Test plane surface operations."""

    def test_default_plane(self):
        p = PlaneSurface()
        assert p.domain_u() == (0.0, 1.0)
        assert p.domain_v() == (0.0, 1.0)
        assert p.evaluate(0.25, 0.75) == (0.25, 0.0, 0.75)

    def test_plane_from_normal(self):
        p = PlaneSurface.from_normal([0, 0, 5], [0, 0, 2])
        for u, v in ((0, 0), (0.5, -0.5), (1, 1)):
            assert abs(p.evaluate(u, v)[2] - 5.0) < 1e-10
        assert _close(cross(p.u_axis, p.v_axis), (0.0, 0.0, 1.0))
        assert p.domain_u() == (-1.0, 1.0)

    def test_plane_from_tilted_normal(self):
        n = (1 / sqrt(2), 1 / sqrt(2), 0.0)
        p = PlaneSurface.from_normal((0, 0, 0), n)
        pt = p.evaluate(0.3, 0.7)
        assert abs(pt[0] * n[0] + pt[1] * n[1] + pt[2] * n[2]) < 1e-10

    def test_zero_normal(self):
        with pytest.raises(ConfigurationError):
            PlaneSurface.from_normal((0, 0, 0), (0, 0, 0))

    def test_short_origin(self):
        with pytest.raises(ValueError):
            PlaneSurface(origin=(1, 2))


class TestSphereSurface:
    """Test sphere surface operations."""

    def test_default_domain(self):
        s = SphereSurface()
        assert s.domain_u() == (0.0, 2 * pi)
        assert s.domain_v() == (0.0, pi)

    def test_sphere_evaluation(self):
        s = SphereSurface(radius=3.0)
        assert _close(s.evaluate(0, 0), (0.0, 0.0, 3.0))
        assert _close(s.evaluate(0, pi / 2), (3.0, 0.0, 0.0))
        assert _close(s.evaluate(pi / 2, pi / 2), (0.0, 3.0, 0.0))
        assert _close(s.evaluate(1.0, pi), (0.0, 0.0, -3.0))

    def test_sphere_center(self):
        s = SphereSurface(radius=1.0, center=[1, 2, 3])
        assert _close(s.evaluate(0, 0), (1.0, 2.0, 4.0))

    def test_points_on_sphere(self):
        s = SphereSurface(radius=2.0)
        for u, v in ((0.1, 0.2), (1.0, 2.0), (4.0, 3.0)):
            x, y, z = s.evaluate(u, v)
            assert abs(sqrt(x * x + y * y + z * z) - 2.0) < 1e-10

    def test_full_turn_polar_range_double_covers(self):
        s = SphereSurface(v_range=(0.0, 2 * pi))
        u, v = 0.7, 4.0
        assert _close(s.evaluate(u, v), s.evaluate(u + pi, 2 * pi - v))

    @pytest.mark.parametrize("radius", [0, -1.0, "abc"])
    def test_bad_radius(self, radius):
        with pytest.raises(ConfigurationError):
            SphereSurface(radius=radius)


class TestCylinderSurface:
    """Test cylinder surface operations."""

    def test_cylinder_evaluation(self):
        c = CylinderSurface(radius=2.0, v_range=(0.0, 5.0))
        for u in (0.0, 1.0, 3.0):
            x, y, z = c.evaluate(u, 1.5)
            assert abs(sqrt(x * x + y * y) - 2.0) < 1e-10
            assert abs(z - 1.5) < 1e-10

    def test_cylinder_axis(self):
        c = CylinderSurface(radius=1.0, axis=(3, 0, 0))
        assert c.axis == (1.0, 0.0, 0.0)
        x, y, z = c.evaluate(0.4, 2.0)
        assert abs(x - 2.0) < 1e-10
        assert abs(sqrt(y * y + z * z) - 1.0) < 1e-10

    def test_zero_axis(self):
        with pytest.raises(ConfigurationError):
            CylinderSurface(axis=(0, 0, 0))


class TestConeSurface:
    """Test cone surface operations."""

    def test_cone_evaluation(self):
        c = ConeSurface(half_angle=pi / 4, v_range=(0.0, 2.0))
        x, y, z = c.evaluate(0.3, 1.0)
        assert abs(sqrt(x * x + y * y) - 1.0) < 1e-10
        assert abs(z - 1.0) < 1e-10

    def test_cone_apex(self):
        c = ConeSurface(half_angle=0.3, apex=(1, 1, 1))
        assert _close(c.evaluate(2.0, 0.0), (1.0, 1.0, 1.0))
        x, y, z = c.evaluate(0.0, 1.0)
        assert abs(sqrt((x - 1) ** 2 + (y - 1) ** 2) - tan(0.3)) < 1e-10

    @pytest.mark.parametrize("angle", [0.0, pi / 2, -0.1])
    def test_bad_half_angle(self, angle):
        with pytest.raises(ConfigurationError):
            ConeSurface(half_angle=angle)


class TestTorusSurface:
    """Test torus surface operations."""

    def test_torus_evaluation(self):
        t = TorusSurface(major_radius=3.0, minor_radius=1.0)
        x, y, z = t.evaluate(0.5, 0.0)
        assert abs(sqrt(x * x + y * y) - 4.0) < 1e-10
        assert abs(z) < 1e-10
        x, y, z = t.evaluate(0.5, pi / 2)
        assert abs(sqrt(x * x + y * y) - 3.0) < 1e-10
        assert abs(z - 1.0) < 1e-10

    def test_minor_not_less_than_major(self):
        with pytest.raises(ConfigurationError):
            TorusSurface(major_radius=1.0, minor_radius=1.0)


class TestFunctionSurface:
    """Test callable-backed surfaces."""

    def test_wraps_callable(self):
        f = FunctionSurface(lambda u, v: [u, v, 1], u_range=(0, 2))
        assert f.domain_u() == (0.0, 2.0)
        assert f.evaluate(1, 2) == (1.0, 2.0, 1.0)

    def test_requires_callable(self):
        with pytest.raises(ConfigurationError):
            FunctionSurface(42)

    def test_bad_range(self):
        with pytest.raises(ConfigurationError):
            FunctionSurface(lambda u, v: (u, v, 0), u_range=(1,))


class TestCheckDomain:
    """Domain validation."""

    def test_returns_float_pairs(self):
        f = FunctionSurface(lambda u, v: (u, v, 0), u_range=(0, 3), v_range=(1, 1))
        assert check_domain(f) == ((0.0, 3.0), (1.0, 1.0))

    def test_inverted(self):
        f = FunctionSurface(lambda u, v: (u, v, 0), u_range=(2, 1))
        with pytest.raises(ConfigurationError, match="domain u"):
            check_domain(f)

    def test_not_finite(self):
        f = FunctionSurface(lambda u, v: (u, v, 0), v_range=(0, nan))
        with pytest.raises(ConfigurationError, match="finite"):
            check_domain(f)


class TestRegistry:
    """Surface registry."""

    def test_known_kinds(self):
        assert set(SURFACES) == {"plane", "sphere", "cylinder", "cone", "torus"}

    def test_make_surface(self):
        t = make_surface("torus", major_radius=3.0, minor_radius=0.5, center=[0, 0, 1])
        assert isinstance(t, TorusSurface)
        assert t.center == (0.0, 0.0, 1.0)

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="unknown surface"):
            make_surface("klein_bottle")

    def test_unknown_parameter(self):
        with pytest.raises(ConfigurationError, match="bad parameters"):
            make_surface("sphere", diameter=2.0)


def test_core_modules_carry_license_trailer():
    import surfmesh.surfaces
    import surfmesh.tessellator

    for module in (surfmesh.surfaces, surfmesh.tessellator):
        assert module.__doc__.rstrip().endswith('MIT License')

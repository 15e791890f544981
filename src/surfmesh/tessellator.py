"""Grid tessellation of parametric surfaces.

:func:`generate` samples a surface function on a regular ``(m+1) x (n+1)``
grid of parameter values and stitches neighbouring samples into two
triangles per grid cell.

Buffer layout
-------------
Grid node ``(x, y)`` with ``0 <= x <= m`` and ``0 <= y <= n`` lives at
index ``x + (m + 1) * y`` of both the vertex and the UV buffer. Rows are
laid out one after another, ``y`` outermost.

For the cell whose top-left node is ``base`` the triangles are::

    (base, base + m + 1, base + 1)
    (base + 1, base + m + 1, base + m + 2)

This winding is what renderers use to decide which side of the surface
faces the camera, so it must not change.

Copyright (c) 2025 surfmesh contributors
MIT License
"""

from __future__ import annotations

import logging
import operator
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from surfmesh.errors import ConfigurationError
from surfmesh.geometry_utils import Vec2, Vec3, to_vec3
from surfmesh.mesh import Mesh
from surfmesh.surfaces import Range, SurfaceFunction, check_domain

logger = logging.getLogger(__name__)


def grid_index(x: int, y: int, m: int) -> int:
    """Return the buffer slot of grid node ``(x, y)`` for ``m`` u-cells."""
    return x + (m + 1) * y


def check_subdivisions(subdivisions: Sequence[int]) -> Tuple[int, int]:
    """Validate ``(m, n)`` and return it as a tuple of ints.

    Both counts must be integers of at least 1. There is no upper bound
    here; :class:`surfmesh.config.TessellationSettings` caps them for
    interactive use.
    """
    try:
        m, n = subdivisions
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"subdivisions must be a pair (m, n), got {subdivisions!r}") from exc

    counts = []
    for label, value in (("m", m), ("n", n)):
        if isinstance(value, bool):
            raise ConfigurationError(f"subdivision count {label} must be an integer, got {value!r}")
        try:
            value = operator.index(value)
        except TypeError as exc:
            raise ConfigurationError(
                f"subdivision count {label} must be an integer, got {value!r}") from exc
        if value < 1:
            raise ConfigurationError(f"subdivision count {label} must be at least 1, got {value}")
        counts.append(value)
    return counts[0], counts[1]


def grid_triangles(m: int, n: int) -> List[int]:
    """Return the triangle index buffer for an ``m`` by ``n`` cell grid.

    >>> grid_triangles(1, 1)
    [0, 2, 1, 1, 2, 3]
    """
    triangles = [0] * (6 * m * n)
    for i in range(m * n):
        base = (i % m) + (i // m) * (m + 1)
        k = i * 6

        triangles[k] = base
        triangles[k + 1] = base + m + 1
        triangles[k + 2] = base + 1

        triangles[k + 3] = base + 1
        triangles[k + 4] = base + m + 1
        triangles[k + 5] = base + m + 2
    return triangles


def _sample_row(surface: SurfaceFunction, y: int, m: int, n: int,
                u_range: Range, v_range: Range) -> Tuple[List[Vec3], List[Vec2]]:
    u_min, u_max = u_range
    v_min, v_max = v_range
    u_delta = u_max - u_min
    v_delta = v_max - v_min

    v = y / n
    scaled_v = v * v_delta + v_min
    points = []
    uvs = []
    for x in range(m + 1):
        u = x / m
        scaled_u = u * u_delta + u_min
        points.append(to_vec3(surface.evaluate(scaled_u, scaled_v)))
        uvs.append((u, v))
    return points, uvs


def generate(subdivisions: Sequence[int], surface: SurfaceFunction, *,
             workers: Optional[int] = None) -> Mesh:
    """Tessellate ``surface`` into an ``m`` by ``n`` cell grid mesh.

    Parameters
    ----------
    subdivisions : (int, int)
        Number of cells along u (``m``) and v (``n``); both at least 1.
    surface : SurfaceFunction
        The surface to sample. Its domain must not be inverted.
    workers : int, optional
        When greater than 1, rows are evaluated on a thread pool of that
        size. The result is identical to the serial path.

    Returns
    -------
    Mesh
        A new mesh with ``(m+1)*(n+1)`` vertices and UVs and ``6*m*n``
        triangle indices.

    Raises
    ------
    ConfigurationError
        If the subdivisions or the surface's domain are invalid.
    """
    m, n = check_subdivisions(subdivisions)
    u_range, v_range = check_domain(surface)
    if workers is not None:
        if isinstance(workers, bool) or not isinstance(workers, int):
            raise ConfigurationError(f"workers must be an integer, got {workers!r}")
        if workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {workers}")

    row_size = m + 1
    count = row_size * (n + 1)
    vertices: List[Optional[Vec3]] = [None] * count
    uvs: List[Optional[Vec2]] = [None] * count

    logger.debug("tessellating %s on a %dx%d grid (%d vertices)",
                 type(surface).__name__, m, n, count)

    def fill(y: int) -> None:
        points, row_uvs = _sample_row(surface, y, m, n, u_range, v_range)
        start = grid_index(0, y, m)
        vertices[start:start + row_size] = points
        uvs[start:start + row_size] = row_uvs

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() re-raises the first exception from a worker
            list(pool.map(fill, range(n + 1)))
    else:
        for y in range(n + 1):
            fill(y)

    triangles = grid_triangles(m, n)

    return Mesh(
        vertices=tuple(vertices),
        uvs=tuple(uvs),
        triangles=tuple(triangles),
        subdivisions=(m, n),
    )


__all__ = ["generate", "grid_triangles", "grid_index", "check_subdivisions"]

"""The mesh value produced by the tessellator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from surfmesh.geometry_utils import Vec2, Vec3, triangle_normal

Face = Tuple[int, int, int]
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass(frozen=True)
class Mesh:
    """Vertex, UV and triangle index buffers for one tessellated surface.

    ``vertices[x + (m + 1) * y]`` holds grid node ``(x, y)`` and ``uvs``
    follows the same indexing. ``triangles`` is a flat list of vertex
    indices, three per triangle, two triangles per grid cell. Normals,
    tangents and bounds are left to whichever engine consumes the mesh.
    """

    vertices: Tuple[Vec3, ...]
    uvs: Tuple[Vec2, ...]
    triangles: Tuple[int, ...]
    subdivisions: Tuple[int, int]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3

    def faces(self) -> Iterator[Face]:
        """Yield the triangle index buffer as ``(i, j, k)`` triples."""
        tris = self.triangles
        for k in range(0, len(tris), 3):
            yield tris[k], tris[k + 1], tris[k + 2]

    def mesh_view(self) -> Iterator[TriTuple]:
        """Yield triangles as ``(normal, v0, v1, v2)``.

        Normals follow the stored winding. Triangles with zero area, such
        as those collapsing onto a sphere's pole, are skipped.
        """
        verts = self.vertices
        for i, j, k in self.faces():
            v0, v1, v2 = verts[i], verts[j], verts[k]
            normal = triangle_normal(v0, v1, v2)
            if normal is None:
                continue
            yield normal, v0, v1, v2

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(vertices, uvs, faces)`` as numpy arrays.

        Shapes are ``(V, 3)`` float64, ``(V, 2)`` float64 and ``(T, 3)``
        uint32, the layout most GPU and geometry libraries accept directly.
        """
        vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        uvs = np.asarray(self.uvs, dtype=np.float64).reshape(-1, 2)
        faces = np.asarray(self.triangles, dtype=np.uint32).reshape(-1, 3)
        return vertices, uvs, faces


__all__ = ["Mesh", "Face", "TriTuple"]

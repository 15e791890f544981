"""Wavefront OBJ export.

Unlike STL, OBJ keeps the shared vertex buffer, the UV buffer and the
triangle order, so a mesh written here can be loaded by an engine
without re-indexing.
"""

from __future__ import annotations

from surfmesh.mesh import Mesh


def write_obj(mesh: Mesh, path_or_file, *, name: str = 'surfmesh') -> None:
    """Write ``mesh`` as OBJ text with ``v``, ``vt`` and ``f v/vt`` records.

    Indices are written 1-based in buffer order; degenerate triangles are
    kept.
    """

    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    try:
        m, n = mesh.subdivisions
        print(f"# surfmesh {m}x{n} grid", file=stream)
        print(f"o {name}", file=stream)
        for x, y, z in mesh.vertices:
            print(f"v {x:.9g} {y:.9g} {z:.9g}", file=stream)
        for u, v in mesh.uvs:
            print(f"vt {u:.9g} {v:.9g}", file=stream)
        for i, j, k in mesh.faces():
            a, b, c = i + 1, j + 1, k + 1
            print(f"f {a}/{a} {b}/{b} {c}/{c}", file=stream)
    finally:
        if close_when_done:
            stream.close()


__all__ = ['write_obj']

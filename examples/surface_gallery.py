"""Surface gallery: tessellates one of each built-in surface to OBJ and STL.

Writes ``<name>.obj`` (with UVs) and ``<name>.stl`` for every registered
surface type, plus the double-covered sphere whose polar angle runs over a
full turn, so the two spheres can be compared side by side in a viewer.

Usage:
    python surface_gallery.py --output build/gallery -m 48 -n 24
"""

import argparse
from math import pi
from pathlib import Path

from surfmesh.io import write_obj, write_stl
from surfmesh.surfaces import SURFACES, SphereSurface
from surfmesh.tessellator import generate


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--output', default='build/gallery', help='Output directory')
    parser.add_argument('-m', type=int, default=33, help='Subdivisions along u')
    parser.add_argument('-n', type=int, default=33, help='Subdivisions along v')
    args = parser.parse_args()

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)

    surfaces = {kind: cls() for kind, cls in SURFACES.items()}
    surfaces['sphere_double_cover'] = SphereSurface(v_range=(0.0, 2 * pi))

    for name, surface in surfaces.items():
        mesh = generate((args.m, args.n), surface)
        write_obj(mesh, out_dir / f"{name}.obj", name=name)
        write_stl(mesh, out_dir / f"{name}.stl", name=name)
        print(f"  {name:<20} {mesh.vertex_count:>6} vertices {mesh.triangle_count:>6} triangles")

    print(f"Wrote {len(surfaces)} surfaces to {out_dir}")


if __name__ == "__main__":
    main()

"""
Command line front end for surfmesh.

Usage:
    surfmesh generate [KIND] [-m M] [-n N] [-p NAME=VALUE ...] [--config FILE]
                      [--workers N] [-o FILE] [--ascii] [-v]
    surfmesh list

Examples:
    # Summarize a default 33x33 sphere
    surfmesh generate sphere

    # Torus to binary STL
    surfmesh generate torus -m 64 -n 32 -p major_radius=3 -p minor_radius=1 -o torus.stl

    # Sphere with UVs to OBJ, settings from YAML
    surfmesh generate --config sphere.yaml -o sphere.obj

Flags given on the command line override values from ``--config``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from surfmesh import __version__
from surfmesh.config import TessellationSettings, load_settings, settings_from_dict
from surfmesh.errors import SurfaceMeshError
from surfmesh.io import write_obj, write_stl
from surfmesh.surfaces import SURFACES
from surfmesh.tessellator import generate

logger = logging.getLogger(__name__)


def parse_scalar(value_str: str) -> Any:
    if value_str.lower() == 'true':
        return True
    elif value_str.lower() == 'false':
        return False

    try:
        return int(value_str)
    except ValueError:
        pass

    try:
        return float(value_str)
    except ValueError:
        pass

    # Strip quotes if present
    if (value_str.startswith('"') and value_str.endswith('"')) or \
       (value_str.startswith("'") and value_str.endswith("'")):
        value_str = value_str[1:-1]

    return value_str


def parse_param(param_str: str) -> tuple:
    """Parse ``name=value`` into ``(name, typed_value)``.

    Comma separated values become lists, so ``center=0,0,1`` works for
    vector parameters.
    """
    if '=' not in param_str:
        raise ValueError(f"Invalid parameter format: {param_str} (expected name=value)")

    name, value_str = param_str.split('=', 1)
    name = name.strip()
    value_str = value_str.strip()

    if ',' in value_str:
        return (name, [parse_scalar(part.strip()) for part in value_str.split(',')])
    return (name, parse_scalar(value_str))


def build_settings(args) -> TessellationSettings:
    """Merge ``--config`` with command line overrides."""
    if args.config:
        data: Dict[str, Any] = load_settings(args.config).to_dict()
    else:
        data = {}

    if args.kind is not None:
        if args.kind != data.get('surface'):
            data['params'] = {}
        data['surface'] = args.kind
    if args.m is not None:
        data['m'] = args.m
    if args.n is not None:
        data['n'] = args.n
    if args.workers is not None:
        data['workers'] = args.workers

    params = dict(data.get('params') or {})
    for param_str in args.param or []:
        try:
            name, value = parse_param(param_str)
        except ValueError as e:
            raise SurfaceMeshError(str(e)) from e
        params[name] = value
    data['params'] = params

    return settings_from_dict(data)


def cmd_generate(args):
    try:
        settings = build_settings(args)
        surface = settings.make_surface()
        mesh = generate(settings.subdivisions, surface, workers=settings.workers)
    except SurfaceMeshError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.output:
        m, n = mesh.subdivisions
        print(f"{settings.surface}: {m}x{n} grid, "
              f"{mesh.vertex_count} vertices, {mesh.triangle_count} triangles")
        return 0

    output_path = Path(args.output)
    suffix = output_path.suffix.lower()
    name = output_path.stem
    if suffix in ('.stl', '.obj'):
        output_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == '.stl':
        write_stl(mesh, output_path, binary=not args.ascii, name=name)
    elif suffix == '.obj':
        write_obj(mesh, output_path, name=name)
    else:
        print(f"Error: Unknown output format: {suffix} (expected .stl or .obj)", file=sys.stderr)
        return 1

    logger.info("wrote %s", output_path)
    print(f"Exported to: {output_path}")
    return 0


def cmd_list(args):
    print("Available surfaces:")
    for kind in sorted(SURFACES):
        doc = (SURFACES[kind].__doc__ or '').strip().splitlines()
        summary = doc[0] if doc else ''
        print(f"  {kind:<10} {summary}")
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog='surfmesh',
        description='Tessellate parametric surfaces into triangle meshes',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # generate command
    gen_parser = subparsers.add_parser('generate', help='Tessellate a surface')
    gen_parser.add_argument('kind', nargs='?', choices=sorted(SURFACES),
                            help='Surface type (default: from --config, else sphere)')
    gen_parser.add_argument('-m', type=int, help='Subdivisions along u (1-256)')
    gen_parser.add_argument('-n', type=int, help='Subdivisions along v (1-256)')
    gen_parser.add_argument('-p', '--param', action='append', metavar='NAME=VALUE',
                            help='Surface parameter (can be repeated)')
    gen_parser.add_argument('-c', '--config', metavar='FILE', help='YAML settings file')
    gen_parser.add_argument('-w', '--workers', type=int, help='Evaluate rows on N threads')
    gen_parser.add_argument('-o', '--output', metavar='FILE',
                            help='Output file (.stl or .obj)')
    gen_parser.add_argument('--ascii', action='store_true', help='Write ASCII instead of binary STL')

    # list command
    subparsers.add_parser('list', help='List available surface types')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.action == 'generate':
        return cmd_generate(args)
    elif args.action == 'list':
        return cmd_list(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())

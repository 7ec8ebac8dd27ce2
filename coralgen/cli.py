"""
Command-Line Interface

CLI for generating coral skeletons and meshes from the command line.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .api import design_from_spec, export_mesh, write_json
from .analysis import skeleton_metrics
from .backends import get_available_backends
from .specs import CoralSpec


def _load_spec(args) -> CoralSpec:
    if args.config:
        spec = CoralSpec.load(args.config)
    else:
        spec = CoralSpec()
    if args.generator and args.generator != spec.generator:
        # parameter sets are generator-specific; only the seed carries over
        spec = CoralSpec.from_dict({**spec.to_dict(), "generator": args.generator, "params": {"seed": spec.seed}})
    if args.seed is not None:
        spec.params.seed = args.seed
    return spec


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="coral-forge",
        description="Coral Forge - procedural coral and tree skeletons and printable meshes",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="CoralSpec JSON file",
    )
    common.add_argument(
        "--generator", "-g",
        type=str,
        choices=get_available_backends(),
        default=None,
        help="Generator (overrides the config)",
    )
    common.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides the config)",
    )

    skel_parser = subparsers.add_parser("skeleton", parents=[common], help="Generate a skeleton")
    skel_parser.add_argument(
        "--branches",
        action="store_true",
        help="Dump every branch instead of the summary",
    )
    skel_parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write JSON to this file instead of stdout",
    )

    mesh_parser = subparsers.add_parser("mesh", parents=[common], help="Build and export a mesh")
    mesh_parser.add_argument(
        "--output", "-o",
        type=str,
        default="coral.stl",
        help="Mesh file (format from extension: .stl, .obj, .ply; default: coral.stl)",
    )
    mesh_parser.add_argument(
        "--up-axis",
        type=str,
        choices=["y", "z"],
        default="y",
        help="Up axis of the exported mesh (default: y)",
    )
    mesh_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write the operation report JSON to this file",
    )

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        spec = _load_spec(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.command == "skeleton":
        return run_skeleton(spec, args)
    elif args.command == "mesh":
        return run_mesh(spec, args)


def run_skeleton(spec: CoralSpec, args):
    """Generate a skeleton and print or write it as JSON."""
    result, report = design_from_spec(spec, build_surface=False)

    if args.branches:
        payload = result.skeleton.to_dict()
    else:
        payload = {
            "generator": spec.generator,
            "params": spec.params.to_dict(),
            "metrics": skeleton_metrics(result.skeleton),
            "warnings": report.warnings,
        }

    if args.output:
        write_json(payload, args.output)
        print(f"Wrote {args.output}")
    else:
        print(json.dumps(payload, indent=2))
    return 0


def run_mesh(spec: CoralSpec, args):
    """Build a mesh and export it."""
    print(f"Building {spec.generator} coral (seed {spec.seed})...")
    result, report = design_from_spec(spec)

    for warning in report.warnings:
        print(f"Warning: {warning}")

    if args.report:
        write_json(report, args.report)

    if result.mesh is None:
        print("No mesh produced", file=sys.stderr)
        return 1

    path = export_mesh(result.mesh, Path(args.output), up_axis=args.up_axis)
    print(f"Wrote {path} ({result.mesh.vertex_count} vertices, {result.mesh.face_count} faces)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

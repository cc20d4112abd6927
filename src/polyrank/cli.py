"""Polyrank command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional, Sequence

from .io import load_polytope, save_polytope
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

_POLYGON_SHAPES = ("polygon", "grunbaumian", "semiregular", "antiprism", "cupola", "cuploid", "cupolaic-blend")
_RANK_SHAPES = ("hypercube", "simplex", "cross")
SHAPES = ("nullitope", "point", "dyad") + _POLYGON_SHAPES + _RANK_SHAPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Polyrank CLI")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log more detail to stderr (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument("--log-file", dest="log_file")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a canonical polytope")
    build.add_argument("shape", choices=SHAPES)
    build.add_argument("--n", type=int, help="Number of sides of the base polygon")
    build.add_argument("--d", type=int, default=1, help="Winding number of the base polygon")
    build.add_argument("--rank", type=int, help="Rank of a hypercube, simplex or cross-polytope")
    build.add_argument("--length", type=float, default=1.0, help="Edge length (dyad, polygons)")
    build.add_argument("--out", dest="output_path", required=True)

    product = sub.add_parser("product", help="Multiply polytopes together")
    product.add_argument("kind", choices=["prism", "tegum", "pyramid"])
    product.add_argument("--in", dest="input_paths", action="append", required=True)
    product.add_argument("--offset", type=float, default=1.0, help="Pyramid apex offset")
    product.add_argument("--out", dest="output_path", required=True)

    extrude = sub.add_parser("extrude", help="Extrude a polytope into a pyramid or prism")
    extrude.add_argument("--in", dest="input_path", required=True)
    extrude.add_argument("--out", dest="output_path", required=True)
    mode = extrude.add_mutually_exclusive_group(required=True)
    mode.add_argument("--pyramid", type=float, metavar="HEIGHT")
    mode.add_argument("--prism", type=float, metavar="HEIGHT")

    validate = sub.add_parser("validate", help="Validate a polytope file")
    validate.add_argument("--in", dest="input_path", required=True)
    validate.add_argument("--strict", action="store_true", help="Also require dyadic cells")

    info = sub.add_parser("info", help="Print a diagnostics summary")
    info.add_argument("--in", dest="input_path", required=True)
    info.add_argument("--json", action="store_true", help="Print the report as JSON")

    convert = sub.add_parser("convert", help="Convert between .json and .off")
    convert.add_argument("--in", dest="input_path", required=True)
    convert.add_argument("--out", dest="output_path", required=True)

    render = sub.add_parser("render", help="Render a wireframe projection to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--axes", type=int, nargs=2, default=[0, 1], metavar=("I", "J"))
    render.add_argument("--dpi", type=int, default=150)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        if args.command == "build":
            _cmd_build(args)
        elif args.command == "product":
            _cmd_product(args)
        elif args.command == "extrude":
            _cmd_extrude(args)
        elif args.command == "validate":
            _cmd_validate(args)
        elif args.command == "info":
            _cmd_info(args)
        elif args.command == "convert":
            save_polytope(load_polytope(args.input_path), args.output_path)
            print(f"Saved {args.output_path}")
        elif args.command == "render":
            from .visualize import render_png
            polytope = load_polytope(args.input_path)
            render_png(polytope, args.output_path, axes=tuple(args.axes), dpi=args.dpi)
            print(f"Saved {args.output_path}")
    except (ValueError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}")
        raise SystemExit(1)


def _cmd_build(args) -> None:
    from . import builders

    shape = args.shape
    if shape in _POLYGON_SHAPES and args.n is None:
        raise ValueError(f"{shape} needs --n")
    if shape in _RANK_SHAPES and args.rank is None:
        raise ValueError(f"{shape} needs --rank")

    if shape == "nullitope":
        polytope = builders.nullitope()
    elif shape == "point":
        polytope = builders.point()
    elif shape == "dyad":
        polytope = builders.dyad(args.length)
    elif shape == "polygon":
        polytope = builders.regular_polygon(args.n, args.d, args.length)
    elif shape == "grunbaumian":
        polytope = builders.grunbaumian_polygon(args.n, args.d, args.length)
    elif shape == "semiregular":
        polytope = builders.semiregular_polygon(args.n, args.d, args.length, args.length)
    elif shape == "antiprism":
        polytope = builders.uniform_antiprism(args.n, args.d)
    elif shape == "cupola":
        polytope = builders.cupola(args.n, args.d)
    elif shape == "cuploid":
        polytope = builders.cuploid(args.n, args.d)
    elif shape == "cupolaic-blend":
        polytope = builders.cupolaic_blend(args.n, args.d)
    elif shape == "hypercube":
        polytope = builders.hypercube(args.rank)
    elif shape == "simplex":
        polytope = builders.simplex(args.rank)
    else:
        polytope = builders.cross(args.rank)

    save_polytope(polytope, args.output_path)
    print(f"Saved {args.output_path}")


def _cmd_product(args) -> None:
    from .products import prism, pyramid, tegum

    operands = [load_polytope(path) for path in args.input_paths]
    if args.kind == "prism":
        result = prism(*operands)
    elif args.kind == "tegum":
        result = tegum(*operands)
    else:
        result = pyramid(*operands, offset=args.offset)
    save_polytope(result, args.output_path)
    print(f"Saved {args.output_path}")


def _cmd_extrude(args) -> None:
    from .products import extrude_to_prism

    polytope = load_polytope(args.input_path)
    if args.pyramid is not None:
        result = polytope.extrude_to_pyramid(args.pyramid)
    else:
        result = extrude_to_prism(polytope, args.prism)
    save_polytope(result, args.output_path)
    print(f"Saved {args.output_path}")


def _cmd_validate(args) -> None:
    from .diagnostics import dyadic_errors

    polytope = load_polytope(args.input_path)
    errors = polytope.validate()
    if args.strict and not errors:
        errors = dyadic_errors(polytope)
    if errors:
        for error in errors:
            print(error)
        raise SystemExit(1)
    print("OK")


def _cmd_info(args) -> None:
    from .diagnostics import diagnostics_report

    report = diagnostics_report(load_polytope(args.input_path))
    if args.json:
        print(json.dumps(report, indent=2))
        return
    for key, value in report.items():
        print(f"{key}: {value}")

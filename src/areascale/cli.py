"""
cli.py

Command line entry point (`areascale`).

    areascale inspect parcels.zip
    areascale scale parcels.zip --target 12500.00 -o parcels_scaled.zip

Exit codes: 0 ok, 1 bad input, 2 area could not be matched.
"""
import argparse
import logging
import sys
import zipfile
from pathlib import Path
from typing import List, Optional

from areascale.area import collection_area
from areascale.config import DEFAULT_DECIMALS, DEFAULT_MAX_ITER
from areascale.io import load_collection, save_collection
from areascale.matcher import (
    ConvergenceError,
    DegenerateGeometryError,
    InvalidTargetError,
    match_area,
)
from areascale.stats import build_stats, format_report

log = logging.getLogger("areascale")

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_NO_MATCH = 2


def configure_logging(verbose: bool = False) -> None:
    if not log.handlers:                                  # avoid dupes on repeated main()
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="areascale",
        description="Inspect polygon datasets and rescale them to an exact EPSG:3857 (OSS) area.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_inspect = sub.add_parser("inspect", help="print dataset statistics")
    p_inspect.add_argument("path", type=Path, help="zipped shapefile or GeoJSON")

    p_scale = sub.add_parser("scale", help="rescale to an exact OSS area")
    p_scale.add_argument("path", type=Path, help="zipped shapefile or GeoJSON")
    p_scale.add_argument("--target", type=float, required=True, help="target OSS area (m²)")
    p_scale.add_argument("--decimals", type=int, default=DEFAULT_DECIMALS, help="rounding precision")
    p_scale.add_argument("--max-iter", type=int, default=DEFAULT_MAX_ITER, help="iteration cap")
    p_scale.add_argument("-o", "--output", type=Path, required=True, help="output .zip or .geojson")
    return parser


def _cmd_inspect(args) -> int:
    collection, prj_text = load_collection(args.path)
    result = build_stats(args.path.name, collection, prj_text)
    print(format_report(result))
    return EXIT_OK


def _cmd_scale(args) -> int:
    collection, _ = load_collection(args.path)
    before = collection_area(collection)
    log.info("current OSS area: %.*f m²", args.decimals, before)
    try:
        scaled = match_area(collection, args.target, decimals=args.decimals, max_iter=args.max_iter)
    except (ConvergenceError, DegenerateGeometryError) as exc:
        log.error("%s", exc)
        return EXIT_NO_MATCH
    after = collection_area(scaled)
    log.info("scaled OSS area: %.*f m² (target %.*f)", args.decimals, after, args.decimals, args.target)
    save_collection(scaled, args.output)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    handlers = {"inspect": _cmd_inspect, "scale": _cmd_scale}
    try:
        return handlers[args.command](args)
    except InvalidTargetError as exc:
        log.error("%s", exc)
        return EXIT_BAD_INPUT
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        log.error("could not process %s: %s", args.path, exc)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entry point: run the batch or serve the HTTP API."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from .batch import run_batch
from .config import DEFAULT_SOURCES, ConversionConfig, load_sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soilgroup-geojson",
        description="Convert LDD soil-group shapefile archives to WGS84 GeoJSON.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command")

    batch = sub.add_parser("batch", help="Download and convert a list of archives (default)")
    batch.add_argument("--sources", help="JSON file with [{url, output_path}, ...]; defaults to the built-in list")
    batch.add_argument("--tolerance", type=float, default=0.001, help="Simplification tolerance in degrees")
    batch.add_argument("--no-simplify", action="store_true", help="Keep geometry at full detail")
    batch.add_argument("--encoding", default="cp874", help="Attribute (.dbf) text encoding")
    batch.add_argument("--timeout", type=float, default=300.0, help="HTTP timeout in seconds")

    serve = sub.add_parser("serve", help="Run the conversion HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "serve":
        uvicorn.run("soilgroup_geojson.server:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    if args.command is None:
        args = parser.parse_args([*argv, "batch"])

    config = ConversionConfig(
        simplify_tolerance=args.tolerance,
        enable_simplify=not args.no_simplify,
        encoding=args.encoding,
        timeout=args.timeout,
    )
    sources = load_sources(args.sources) if args.sources else DEFAULT_SOURCES
    outcomes = run_batch(sources, config)
    return 0 if all(o.status == "success" for o in outcomes) else 1

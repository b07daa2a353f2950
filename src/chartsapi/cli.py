"""CLI for the chart directory service."""

import argparse
import logging
import sys

from chartsapi.charts.builder import build_directory
from chartsapi.charts.errors import ClientInputError, StartupError
from chartsapi.charts.query import ChartQueryEngine
from chartsapi.charts.refresh import REFRESH_ERRORS, RefreshScheduler
from chartsapi.charts.sources.faa_dtpp import DtppSource
from chartsapi.charts.store import CacheStore
from chartsapi.config import Settings

logger = logging.getLogger("chartsapi")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Look up FAA terminal procedure charts (d-TPP) by airport"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with periodic refresh")
    serve.add_argument("--host", help="Bind address (default: CHARTSAPI_HOST or 0.0.0.0)")
    serve.add_argument("--port", "-p", type=int, help="Port (default: PORT or 8000)")
    serve.add_argument(
        "--interval",
        type=int,
        help="Seconds between upstream cycle checks (default: 3600)",
    )

    lookup = sub.add_parser("lookup", help="Print charts for airports and exit")
    lookup.add_argument(
        "--apt",
        "-a",
        required=True,
        help="Comma-separated FAA or ICAO identifiers (e.g. SEA,KPAE)",
    )
    lookup.add_argument(
        "--group",
        "-g",
        help="Grouping code 1-7",
    )
    lookup.add_argument(
        "--cycle",
        "-c",
        help="d-TPP cycle (e.g. 2409). Default: current upstream cycle",
    )
    lookup.add_argument(
        "--output",
        "-o",
        help="Write results to CSV file",
    )
    return parser.parse_args(argv)


def serve(args, settings: Settings) -> None:
    store = CacheStore()
    scheduler = RefreshScheduler(
        DtppSource.from_settings(settings),
        store,
        interval=args.interval or settings.refresh_interval,
        default_cycle=settings.default_cycle,
    )
    try:
        scheduler.bootstrap()
    except StartupError as e:
        logger.critical("%s", e)
        sys.exit(1)

    from chartsapi.api import create_app

    app = create_app(store, scheduler=scheduler, settings=settings)
    scheduler.start()
    try:
        app.run(host=args.host or settings.host, port=args.port or settings.port)
    finally:
        scheduler.stop()


def lookup(args, settings: Settings) -> None:
    source = DtppSource.from_settings(settings)
    try:
        cycle = args.cycle or source.fetch_cycle()
        snapshot = build_directory(cycle, source.fetch_metafile(cycle), source.chart_base_url(cycle))
    except REFRESH_ERRORS as e:
        print(f"Error: could not load charts: {e}", file=sys.stderr)
        sys.exit(1)

    engine = ChartQueryEngine(CacheStore(snapshot))
    try:
        result = engine.query(args.apt, args.group)
    except ClientInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    df = result.to_dataframe()
    if df.empty:
        print("No charts found.", file=sys.stderr)
    else:
        print(df[["ident", "group", "chart_code", "chart_name", "pdf_path"]].to_string(index=False))

    if args.output and not df.empty:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(settings.log_level)

    if args.command == "serve":
        serve(args, settings)
    else:
        lookup(args, settings)


if __name__ == "__main__":
    main()

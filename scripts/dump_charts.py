#!/usr/bin/env python3
"""
Dump every chart of a d-TPP cycle to CSV, one row per chart.

Output columns: state, state_full, city, volume, airport_name, military,
faa_ident, icao_ident, chart_seq, chart_code, chart_group, chart_name,
pdf_name, pdf_path. Withdrawn charts are not included.

Usage:
    uv run python scripts/dump_charts.py
    uv run python scripts/dump_charts.py --cycle 2409 -o charts.csv
    uv run python scripts/dump_charts.py --state WA -o wa.csv
    uv run python scripts/dump_charts.py --debug  # inspect raw cycle-info response
"""

import argparse
import sys

import pandas as pd
import requests
from tqdm import tqdm

from chartsapi.charts.builder import build_directory
from chartsapi.charts.errors import FeedError
from chartsapi.charts.models import CHART_FIELDS
from chartsapi.charts.sources.faa_dtpp import DtppSource
from chartsapi.charts.sources.metafile import parse_metafile


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump all charts of a d-TPP cycle")
    parser.add_argument(
        "--cycle",
        "-c",
        type=str,
        default=None,
        help="d-TPP cycle (e.g. 2409). Default: current upstream cycle",
    )
    parser.add_argument(
        "--state",
        "-s",
        type=str,
        default=None,
        help="Only dump airports in this state code (e.g. WA)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output CSV file. Default: stdout",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print raw cycle-info response and exit",
    )
    args = parser.parse_args()

    source = DtppSource()

    if args.debug:
        _debug_response(source)
        return

    try:
        cycle = args.cycle or source.fetch_cycle()
        document = parse_metafile(_download_metafile(source, cycle))
        snapshot = build_directory(cycle, document, source.chart_base_url(cycle))
    except (requests.RequestException, FeedError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    state = args.state.upper() if args.state else None
    rows = []
    for charts in snapshot.charts_by_faa.values():
        for c in charts:
            if state and c.state.upper() != state:
                continue
            rows.append({**c.to_dict(), "chart_group": c.chart_group.value})

    df = _to_dataframe(rows)
    if args.output:
        df.to_csv(args.output, index=False)
        print(f"Wrote {len(df)} charts (cycle {cycle}) to {args.output}", file=sys.stderr)
    else:
        print(df.to_csv(index=False))


def _download_metafile(source: DtppSource, cycle: str) -> bytes:
    """Stream the cycle metafile, showing a byte progress bar."""
    chunks = []
    with requests.get(source.metafile_url(cycle), stream=True, timeout=source.timeout) as resp:
        resp.raise_for_status()
        total = int(resp.headers.get("Content-Length", 0)) or None
        with tqdm(total=total, desc=f"Metafile {cycle}", unit="B", unit_scale=True) as bar:
            for chunk in resp.iter_content(chunk_size=64 * 1024):
                chunks.append(chunk)
                bar.update(len(chunk))
    return b"".join(chunks)


def _debug_response(source: DtppSource) -> None:
    """Fetch and print the raw cycle-info response for debugging."""
    resp = requests.get(
        source.cycle_info_url,
        params={"edition": "current"},
        headers={"Accept": "application/xml"},
        timeout=source.timeout,
    )
    resp.raise_for_status()
    print(f"Status: {resp.status_code}", file=sys.stderr)
    print(f"Content-Type: {resp.headers.get('Content-Type')}", file=sys.stderr)
    print(resp.text[:2000], file=sys.stderr)


def _to_dataframe(rows: list) -> pd.DataFrame:
    columns = [*CHART_FIELDS[:10], "chart_group", *CHART_FIELDS[10:]]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


if __name__ == "__main__":
    main()

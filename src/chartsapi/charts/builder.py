"""Build a directory snapshot from a decoded metafile."""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from chartsapi.charts.errors import FeedNotYetEffectiveError
from chartsapi.charts.models import ChartEntity, DirectorySnapshot
from chartsapi.charts.normalize import normalize
from chartsapi.charts.sources.base import FeedDocument
from chartsapi.charts.sources.metafile import parse_effective_date

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_directory(
    cycle: str,
    document: FeedDocument,
    chart_base_url: str,
    clock: Optional[Callable[[], datetime]] = None,
) -> DirectorySnapshot:
    """
    Index every live chart of the document by FAA and ICAO identifier.

    Charts keep feed order (state, city, airport, record). When several
    airports claim the same ICAO identifier the last one processed wins.
    Withdrawn records are skipped.

    Raises FeedDateError if the effective dates cannot be parsed and
    FeedNotYetEffectiveError if the cycle is not active yet. Nothing is
    indexed in either case.
    """
    now = (clock or _utcnow)()
    effective_from = parse_effective_date(document.from_edate)
    effective_to = parse_effective_date(document.to_edate) if document.to_edate.strip() else None
    if effective_from > now:
        raise FeedNotYetEffectiveError(
            f"Cycle {cycle} is not effective until {effective_from.isoformat()}"
        )

    charts_by_faa: Dict[str, List[ChartEntity]] = {}
    faa_by_icao: Dict[str, str] = {}
    withdrawn = 0

    for state in document.states:
        for city in state.cities:
            for airport in city.airports:
                for record in airport.records:
                    if record.withdrawn:
                        withdrawn += 1
                        continue
                    chart = normalize(state, city, airport, record, chart_base_url)
                    faa = chart.faa_ident.upper()
                    charts_by_faa.setdefault(faa, []).append(chart)
                    if chart.icao_ident:
                        faa_by_icao[chart.icao_ident.upper()] = faa

    snapshot = DirectorySnapshot.create(
        cycle=cycle,
        effective_from=effective_from,
        effective_to=effective_to,
        charts_by_faa=charts_by_faa,
        faa_by_icao=faa_by_icao,
    )
    logger.info(
        "Loaded %d charts for %d airports from cycle %s (%d withdrawn skipped)",
        snapshot.chart_count,
        snapshot.airport_count,
        cycle,
        withdrawn,
    )
    return snapshot

"""Flatten raw metafile entries into chart entities."""

from chartsapi.charts.models import ChartEntity
from chartsapi.charts.sources.base import FeedAirport, FeedCity, FeedState, RawChartRecord


def chart_path(chart_base_url: str, pdf_name: str) -> str:
    """Join the cycle base URL and a chart file name."""
    if not pdf_name:
        return ""
    return f"{chart_base_url.rstrip('/')}/{pdf_name.lstrip('/')}"


def normalize(
    state: FeedState,
    city: FeedCity,
    airport: FeedAirport,
    record: RawChartRecord,
    chart_base_url: str,
) -> ChartEntity:
    """Convert one record and its enclosing state/city/airport to a ChartEntity.

    Blank fields are carried through as empty strings.
    """
    pdf_name = record.pdf_name or ""
    return ChartEntity(
        state=state.id or "",
        state_full=state.full_name or "",
        city=city.id or "",
        volume=city.volume or "",
        airport_name=airport.id or "",
        military=airport.military or "",
        faa_ident=airport.apt_ident or "",
        icao_ident=airport.icao_ident or "",
        chart_seq=record.chartseq or "",
        chart_code=record.chart_code or "",
        chart_name=record.chart_name or "",
        pdf_name=pdf_name,
        pdf_path=chart_path(chart_base_url, pdf_name),
    )

"""Pluggable chart feed sources."""

from chartsapi.charts.sources.base import (
    CycleInfo,
    FeedAirport,
    FeedCity,
    FeedDocument,
    FeedSource,
    FeedState,
    RawChartRecord,
)
from chartsapi.charts.sources.faa_dtpp import DtppSource

__all__ = [
    "CycleInfo",
    "DtppSource",
    "FeedAirport",
    "FeedCity",
    "FeedDocument",
    "FeedSource",
    "FeedState",
    "RawChartRecord",
]

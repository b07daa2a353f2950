"""Chart directory: feed decoding, indexing, caching, refresh and queries."""

from chartsapi.charts.builder import build_directory
from chartsapi.charts.errors import (
    ClientInputError,
    FeedDecodeError,
    FeedError,
    FeedNotYetEffectiveError,
    InvalidGroupCodeError,
    NoAirportSpecifiedError,
    StartupError,
)
from chartsapi.charts.models import ChartEntity, ChartGroup, DirectorySnapshot
from chartsapi.charts.query import (
    ChartQueryEngine,
    ChartQueryResult,
    FlatCharts,
    GroupedCharts,
    apply_grouping,
)
from chartsapi.charts.refresh import RefreshOutcome, RefreshScheduler
from chartsapi.charts.store import CacheStore

__all__ = [
    "CacheStore",
    "ChartEntity",
    "ChartGroup",
    "ChartQueryEngine",
    "ChartQueryResult",
    "ClientInputError",
    "DirectorySnapshot",
    "FeedDecodeError",
    "FeedError",
    "FeedNotYetEffectiveError",
    "FlatCharts",
    "GroupedCharts",
    "InvalidGroupCodeError",
    "NoAirportSpecifiedError",
    "RefreshOutcome",
    "RefreshScheduler",
    "StartupError",
    "apply_grouping",
    "build_directory",
]

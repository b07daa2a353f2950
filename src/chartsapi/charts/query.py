"""Chart lookups by airport identifier, with optional grouping and filtering."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from chartsapi.charts.errors import InvalidGroupCodeError, NoAirportSpecifiedError
from chartsapi.charts.models import CHART_FIELDS, ChartEntity, ChartGroup, DirectorySnapshot
from chartsapi.charts.store import CacheStore

_ALL_GROUPS = frozenset(ChartGroup)

# group code -> (chart groups kept, grouped by category)
GROUP_CODES: Dict[int, Tuple[FrozenSet[ChartGroup], bool]] = {
    1: (_ALL_GROUPS, True),
    2: (frozenset({ChartGroup.AIRPORT_DIAGRAM}), False),
    3: (frozenset({ChartGroup.AIRPORT_DIAGRAM, ChartGroup.GENERAL}), False),
    4: (frozenset({ChartGroup.DEPARTURE}), False),
    5: (frozenset({ChartGroup.ARRIVAL}), False),
    6: (frozenset({ChartGroup.APPROACH}), False),
    7: (frozenset({ChartGroup.DEPARTURE, ChartGroup.ARRIVAL, ChartGroup.APPROACH}), True),
}

# Airport diagrams are bucketed with general charts
BUCKETS: Tuple[Tuple[str, FrozenSet[ChartGroup]], ...] = (
    ("General", frozenset({ChartGroup.GENERAL, ChartGroup.AIRPORT_DIAGRAM})),
    ("Departure", frozenset({ChartGroup.DEPARTURE})),
    ("Arrival", frozenset({ChartGroup.ARRIVAL})),
    ("Approach", frozenset({ChartGroup.APPROACH})),
)


@dataclass(frozen=True)
class FlatCharts:
    """Charts as a single ordered list."""

    charts: Tuple[ChartEntity, ...] = ()

    def to_json(self) -> List[Dict[str, str]]:
        return [c.to_dict() for c in self.charts]

    def __len__(self) -> int:
        return len(self.charts)


@dataclass(frozen=True)
class GroupedCharts:
    """Charts split into named category buckets. Empty buckets are never stored."""

    buckets: Tuple[Tuple[str, Tuple[ChartEntity, ...]], ...] = ()

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.buckets]

    def bucket(self, name: str) -> Optional[Tuple[ChartEntity, ...]]:
        for bucket_name, charts in self.buckets:
            if bucket_name == name:
                return charts
        return None

    def to_json(self) -> Dict[str, List[Dict[str, str]]]:
        return {name: [c.to_dict() for c in charts] for name, charts in self.buckets}

    def __len__(self) -> int:
        return sum(len(charts) for _, charts in self.buckets)


ChartsView = Union[FlatCharts, GroupedCharts]


def apply_grouping(charts: Iterable[ChartEntity], group_code: Optional[int] = None) -> ChartsView:
    """
    Filter and shape one airport's charts for the given group code.

    No code returns everything as a flat list; codes outside GROUP_CODES
    return an empty flat list.
    """
    charts = tuple(charts)
    if group_code is None:
        return FlatCharts(charts)
    entry = GROUP_CODES.get(group_code)
    if entry is None:
        return FlatCharts()

    kept_groups, grouped = entry
    kept = tuple(c for c in charts if c.chart_group in kept_groups)
    if not grouped:
        return FlatCharts(kept)

    buckets = []
    for name, members in BUCKETS:
        in_bucket = tuple(c for c in kept if c.chart_group in members)
        if in_bucket:
            buckets.append((name, in_bucket))
    return GroupedCharts(tuple(buckets))


def parse_group_code(value: Union[str, int, None]) -> Optional[int]:
    """Validate a group parameter. Blank means no grouping."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        code = int(value)
    except (TypeError, ValueError):
        raise InvalidGroupCodeError() from None
    if code not in GROUP_CODES:
        raise InvalidGroupCodeError()
    return code


def split_identifiers(apt: Optional[str]) -> List[str]:
    """
    Split a comma-separated identifier list.

    Entries are returned exactly as supplied; resolve() trims and
    upper-cases for the lookup. Blank entries are dropped.
    """
    idents = [part for part in (apt or "").split(",") if part.strip()]
    if not idents:
        raise NoAirportSpecifiedError()
    return idents


@dataclass
class ChartQueryResult:
    """Result of a multi-airport chart query."""

    results: Dict[str, ChartsView] = field(default_factory=dict)
    cycle: str = ""

    def to_json(self) -> Dict[str, object]:
        return {ident: view.to_json() for ident, view in self.results.items()}

    def to_dataframe(self):
        """Convert to pandas DataFrame, one row per chart."""
        import pandas as pd

        columns = ["ident", "group", *CHART_FIELDS]
        rows = []
        for ident, view in self.results.items():
            if isinstance(view, GroupedCharts):
                for name, charts in view.buckets:
                    rows.extend({"ident": ident, "group": name, **c.to_dict()} for c in charts)
            else:
                rows.extend({"ident": ident, "group": "", **c.to_dict()} for c in view.charts)
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns)


class ChartQueryEngine:
    """Resolves identifiers against the snapshot currently in the cache store."""

    def __init__(self, store: CacheStore):
        self._store = store

    def resolve(
        self, ident: str, snapshot: Optional[DirectorySnapshot] = None
    ) -> Optional[Tuple[ChartEntity, ...]]:
        """Look up by FAA identifier, then by ICAO alias. Returns None if unknown."""
        if not ident or not ident.strip():
            return None
        snapshot = snapshot or self._store.current()
        key = ident.strip().upper()
        charts = snapshot.charts_by_faa.get(key)
        if charts is not None:
            return charts
        faa = snapshot.faa_by_icao.get(key)
        if faa is None:
            return None
        return snapshot.charts_by_faa.get(faa)

    def query(self, apt: Optional[str], group: Union[str, int, None] = None) -> ChartQueryResult:
        """
        Look up several comma-separated identifiers at once.

        Unknown identifiers are left out of the result. Raises
        NoAirportSpecifiedError or InvalidGroupCodeError on bad input,
        before the cache is touched.
        """
        idents = split_identifiers(apt)
        group_code = parse_group_code(group)

        # one snapshot for the whole request
        snapshot = self._store.current()
        result = ChartQueryResult(cycle=snapshot.cycle)
        for ident in idents:
            charts = self.resolve(ident, snapshot)
            if charts is None:
                continue
            result.results[ident] = apply_grouping(charts, group_code)
        return result

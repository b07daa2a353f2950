"""Data models for the chart directory."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class ChartGroup(Enum):
    """Category a chart is filed under when filtering or grouping."""

    GENERAL = "General"
    AIRPORT_DIAGRAM = "AirportDiagram"
    DEPARTURE = "Departure"
    ARRIVAL = "Arrival"
    APPROACH = "Approach"

    @classmethod
    def from_chart_code(cls, chart_code: Optional[str]) -> "ChartGroup":
        """Classify a raw d-TPP chart code. Unknown codes fall back to GENERAL."""
        if not chart_code:
            return cls.GENERAL
        return _CHART_CODE_GROUPS.get(chart_code.strip().upper(), cls.GENERAL)


# MIN, LAH, HOT and anything new land in GENERAL
_CHART_CODE_GROUPS: Dict[str, ChartGroup] = {
    "IAP": ChartGroup.APPROACH,
    "ODP": ChartGroup.DEPARTURE,
    "DP": ChartGroup.DEPARTURE,
    "DAU": ChartGroup.DEPARTURE,
    "STAR": ChartGroup.ARRIVAL,
    "APD": ChartGroup.AIRPORT_DIAGRAM,
}


@dataclass(frozen=True)
class ChartEntity:
    """One published chart for one airport."""

    state: str
    state_full: str
    city: str
    volume: str
    airport_name: str
    military: str
    faa_ident: str
    icao_ident: str
    chart_seq: str
    chart_code: str
    chart_name: str
    pdf_name: str
    pdf_path: str
    # derived from chart_code, never passed in
    chart_group: ChartGroup = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "chart_group", ChartGroup.from_chart_code(self.chart_code))

    def to_dict(self) -> Dict[str, str]:
        """Client-facing fields. The chart group is internal and left out."""
        return {name: getattr(self, name) for name in CHART_FIELDS}


CHART_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(ChartEntity) if f.init)


@dataclass(frozen=True)
class DirectorySnapshot:
    """
    Complete, read-only view of one d-TPP cycle.

    charts_by_faa maps an upper-cased FAA identifier to its charts in feed
    order; faa_by_icao maps an upper-cased ICAO identifier to the FAA
    identifier it belongs to. Both are exposed as read-only mappings.
    """

    cycle: str
    effective_from: datetime
    effective_to: Optional[datetime]
    charts_by_faa: Mapping[str, Tuple[ChartEntity, ...]]
    faa_by_icao: Mapping[str, str]

    @classmethod
    def create(
        cls,
        cycle: str,
        effective_from: datetime,
        effective_to: Optional[datetime],
        charts_by_faa: Mapping[str, Any],
        faa_by_icao: Mapping[str, str],
    ) -> "DirectorySnapshot":
        """Freeze the given indexes into a snapshot."""
        frozen_charts = {ident: tuple(charts) for ident, charts in charts_by_faa.items()}
        dangling = [icao for icao, faa in faa_by_icao.items() if faa not in frozen_charts]
        if dangling:
            raise ValueError(f"Alias entries without a primary entry: {', '.join(dangling)}")
        return cls(
            cycle=cycle,
            effective_from=effective_from,
            effective_to=effective_to,
            charts_by_faa=MappingProxyType(frozen_charts),
            faa_by_icao=MappingProxyType(dict(faa_by_icao)),
        )

    @property
    def airport_count(self) -> int:
        return len(self.charts_by_faa)

    @property
    def chart_count(self) -> int:
        return sum(len(charts) for charts in self.charts_by_faa.values())

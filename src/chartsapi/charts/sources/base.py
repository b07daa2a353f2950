"""Abstract interface for chart feed sources, and the raw feed records they return."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Protocol, runtime_checkable


@dataclass
class RawChartRecord:
    """A single <record> entry of the d-TPP metafile (before normalization)."""

    chartseq: str = ""
    chart_code: str = ""
    chart_name: str = ""
    useraction: str = ""
    pdf_name: str = ""
    cn_flg: str = ""
    cnsection: str = ""
    cnpage: str = ""
    bvsection: str = ""
    bvpage: str = ""
    procuid: str = ""
    two_colored: str = ""
    civil: str = ""
    faanfd18: str = ""
    copter: str = ""
    amdtnum: str = ""
    amdtdate: str = ""

    @property
    def withdrawn(self) -> bool:
        """Records flagged with useraction D have been deleted from the cycle."""
        return self.useraction.strip().upper() == "D"


@dataclass
class FeedAirport:
    id: str = ""
    military: str = ""
    apt_ident: str = ""
    icao_ident: str = ""
    alnum: str = ""
    records: List[RawChartRecord] = field(default_factory=list)


@dataclass
class FeedCity:
    id: str = ""
    volume: str = ""
    airports: List[FeedAirport] = field(default_factory=list)


@dataclass
class FeedState:
    id: str = ""
    full_name: str = ""
    cities: List[FeedCity] = field(default_factory=list)


@dataclass
class FeedDocument:
    """Decoded metafile: cycle header plus the state -> city -> airport -> record tree."""

    cycle: str = ""
    from_edate: str = ""
    to_edate: str = ""
    states: List[FeedState] = field(default_factory=list)


@dataclass
class CycleInfo:
    """Current edition as advertised by the cycle-info endpoint."""

    cycle: str
    edition_date: date


@runtime_checkable
class FeedSource(Protocol):
    """Protocol for pluggable chart feed sources."""

    def fetch_cycle(self) -> str:
        """Return the tag of the cycle currently published upstream."""
        ...

    def fetch_metafile(self, cycle: str) -> FeedDocument:
        """Download and decode the metafile for the given cycle."""
        ...

    def chart_base_url(self, cycle: str) -> str:
        """Base URL that chart PDF names of the given cycle are relative to."""
        ...

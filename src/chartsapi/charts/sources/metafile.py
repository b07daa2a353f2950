"""Decode the d-TPP metafile and cycle-info documents."""

from datetime import datetime, timezone
from typing import Optional

from lxml import etree

from chartsapi.charts.errors import FeedDateError, FeedDecodeError
from chartsapi.charts.sources.base import (
    CycleInfo,
    FeedAirport,
    FeedCity,
    FeedDocument,
    FeedState,
    RawChartRecord,
)

METAFILE_ROOT = "digital_tpp"

_RECORD_FIELDS = (
    "chartseq",
    "chart_code",
    "chart_name",
    "useraction",
    "pdf_name",
    "cn_flg",
    "cnsection",
    "cnpage",
    "bvsection",
    "bvpage",
    "procuid",
    "two_colored",
    "civil",
    "faanfd18",
    "copter",
    "amdtnum",
    "amdtdate",
)

# e.g. "0901Z  09/05/24"
_EDATE_FORMAT = "%H%MZ %m/%d/%y"


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


def _fromstring(data: bytes) -> etree._Element:
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return etree.fromstring(data, parser=_parser())
    except etree.XMLSyntaxError as e:
        raise FeedDecodeError(f"Malformed XML document: {e}") from e


def _attr(el: etree._Element, name: str) -> str:
    return (el.get(name) or "").strip()


def _child_text(el: etree._Element, tag: str) -> str:
    return (el.findtext(tag) or "").strip()


def parse_metafile(data: bytes) -> FeedDocument:
    """Decode metafile bytes into a FeedDocument, preserving document order."""
    root = _fromstring(data)
    if root.tag != METAFILE_ROOT:
        raise FeedDecodeError(f"Unexpected root element <{root.tag}>, expected <{METAFILE_ROOT}>")

    doc = FeedDocument(
        cycle=_attr(root, "cycle"),
        from_edate=_attr(root, "from_edate"),
        to_edate=_attr(root, "to_edate"),
    )
    for state_el in root.iterfind("state_code"):
        state = FeedState(id=_attr(state_el, "ID"), full_name=_attr(state_el, "state_fullname"))
        for city_el in state_el.iterfind("city_name"):
            city = FeedCity(id=_attr(city_el, "ID"), volume=_attr(city_el, "volume"))
            for airport_el in city_el.iterfind("airport_name"):
                airport = FeedAirport(
                    id=_attr(airport_el, "ID"),
                    military=_attr(airport_el, "military"),
                    apt_ident=_attr(airport_el, "apt_ident"),
                    icao_ident=_attr(airport_el, "icao_ident"),
                    alnum=_attr(airport_el, "alnum"),
                )
                for record_el in airport_el.iterfind("record"):
                    airport.records.append(
                        RawChartRecord(**{f: _child_text(record_el, f) for f in _RECORD_FIELDS})
                    )
                city.airports.append(airport)
            state.cities.append(city)
        doc.states.append(state)
    return doc


def parse_cycle_info(data: bytes) -> CycleInfo:
    """
    Decode the cycle-info response.

    The cycle tag is the two-digit edition year followed by the zero-padded
    edition number, e.g. editionDate 09/05/2024 and editionNumber 9 -> "2409".
    """
    root = _fromstring(data)
    edition = root if root.tag == "edition" else root.find(".//edition")
    if edition is None:
        raise FeedDecodeError("Cycle info has no <edition> element")

    date_str = _child_text(edition, "editionDate")
    number_str = _child_text(edition, "editionNumber")
    try:
        edition_date = datetime.strptime(date_str, "%m/%d/%Y").date()
        number = int(number_str)
    except ValueError as e:
        raise FeedDecodeError(
            f"Invalid edition in cycle info: date={date_str!r} number={number_str!r}"
        ) from e
    return CycleInfo(cycle=f"{edition_date:%y}{number:02d}", edition_date=edition_date)


def parse_effective_date(value: Optional[str]) -> datetime:
    """Parse a metafile effective date ("0901Z  09/05/24" or ISO-8601) as UTC."""
    if not value or not value.strip():
        raise FeedDateError("Missing effective date")
    s = " ".join(value.split())
    try:
        return datetime.strptime(s, _EDATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise FeedDateError(f"Unparseable effective date: {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt

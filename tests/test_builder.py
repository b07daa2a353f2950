"""Unit tests for building the chart directory."""

from datetime import datetime, timezone

import pytest

from chartsapi.charts.builder import build_directory
from chartsapi.charts.errors import FeedDateError, FeedNotYetEffectiveError
from chartsapi.charts.models import ChartGroup
from chartsapi.charts.sources.base import (
    FeedAirport,
    FeedCity,
    FeedDocument,
    FeedState,
    RawChartRecord,
)
from chartsapi.charts.sources.metafile import parse_metafile

BASE = "https://aeronav.faa.gov/d-tpp/2409"


def _clock():
    return datetime(2024, 9, 20, tzinfo=timezone.utc)


def _doc(*airports: FeedAirport, from_edate: str = "0901Z  09/05/24") -> FeedDocument:
    city = FeedCity(id="SEATTLE", volume="NW-1", airports=list(airports))
    state = FeedState(id="WA", full_name="Washington", cities=[city])
    return FeedDocument(cycle="2409", from_edate=from_edate, to_edate="", states=[state])


def _airport(faa: str, icao: str, *codes: str) -> FeedAirport:
    return FeedAirport(
        id=f"{faa} AIRPORT",
        apt_ident=faa,
        icao_ident=icao,
        records=[
            RawChartRecord(chartseq=str(i), chart_code=code, pdf_name=f"{faa}{i}.PDF")
            for i, code in enumerate(codes)
        ],
    )


class TestBuildDirectory:
    """Tests for build_directory."""

    def test_feed_order_preserved(self, snapshot) -> None:
        assert list(snapshot.charts_by_faa) == ["SEA", "BFI", "PAE", "S43"]
        assert [c.chart_code for c in snapshot.charts_by_faa["SEA"]] == ["IAP", "STAR", "APD"]
        assert [c.chart_code for c in snapshot.charts_by_faa["BFI"]] == ["MIN", "ODP"]

    def test_withdrawn_records_excluded(self, snapshot) -> None:
        names = [c.chart_name for charts in snapshot.charts_by_faa.values() for c in charts]
        assert "OLD DEPARTURE" not in names
        assert snapshot.chart_count == 7

    def test_every_live_record_once(self, feed_document, snapshot) -> None:
        expected = [
            r.pdf_name
            for s in feed_document.states
            for c in s.cities
            for a in c.airports
            for r in a.records
            if not r.withdrawn
        ]
        built = [c.pdf_name for charts in snapshot.charts_by_faa.values() for c in charts]
        assert built == expected

    def test_alias_index(self, snapshot) -> None:
        assert dict(snapshot.faa_by_icao) == {"KSEA": "SEA", "KBFI": "BFI", "KPAE": "PAE"}

    def test_no_alias_for_blank_icao(self, snapshot) -> None:
        assert "" not in snapshot.faa_by_icao
        assert "S43" in snapshot.charts_by_faa

    def test_entities_normalized(self, snapshot) -> None:
        chart = snapshot.charts_by_faa["SEA"][0]
        assert chart.state == "WA"
        assert chart.state_full == "Washington"
        assert chart.city == "SEATTLE"
        assert chart.volume == "NW-1"
        assert chart.airport_name == "SEATTLE-TACOMA INTL"
        assert chart.pdf_path == "https://aeronav.faa.gov/d-tpp/2409/00582IL16L.PDF"
        assert chart.chart_group is ChartGroup.APPROACH

    def test_effective_window(self, snapshot) -> None:
        assert snapshot.cycle == "2409"
        assert snapshot.effective_from == datetime(2024, 9, 5, 9, 1, tzinfo=timezone.utc)
        assert snapshot.effective_to == datetime(2024, 10, 3, 9, 1, tzinfo=timezone.utc)

    def test_keys_upper_cased(self) -> None:
        snap = build_directory("2409", _doc(_airport("sea", "ksea", "IAP")), BASE, clock=_clock)
        assert "SEA" in snap.charts_by_faa
        assert snap.faa_by_icao["KSEA"] == "SEA"
        # Entity keeps the feed's own spelling
        assert snap.charts_by_faa["SEA"][0].faa_ident == "sea"

    def test_alias_collision_last_wins(self) -> None:
        doc = _doc(
            _airport("AAA", "KDUP", "IAP"),
            _airport("BBB", "KDUP", "STAR"),
        )
        snap = build_directory("2409", doc, BASE, clock=_clock)
        assert snap.faa_by_icao["KDUP"] == "BBB"
        assert len(snap.charts_by_faa["AAA"]) == 1

    def test_idempotent(self, metafile_xml: bytes) -> None:
        first = build_directory("2409", parse_metafile(metafile_xml), BASE, clock=_clock)
        second = build_directory("2409", parse_metafile(metafile_xml), BASE, clock=_clock)
        assert dict(first.charts_by_faa) == dict(second.charts_by_faa)
        assert list(first.charts_by_faa) == list(second.charts_by_faa)
        assert dict(first.faa_by_icao) == dict(second.faa_by_icao)

    def test_future_effective_date_rejected(self) -> None:
        doc = _doc(_airport("SEA", "KSEA", "IAP"), from_edate="0901Z  10/03/24")
        with pytest.raises(FeedNotYetEffectiveError, match="2409"):
            build_directory("2409", doc, BASE, clock=_clock)

    def test_bad_effective_date_rejected(self) -> None:
        doc = _doc(_airport("SEA", "KSEA", "IAP"), from_edate="soon")
        with pytest.raises(FeedDateError):
            build_directory("2409", doc, BASE, clock=_clock)

    def test_missing_effective_date_rejected(self) -> None:
        doc = _doc(_airport("SEA", "KSEA", "IAP"), from_edate="")
        with pytest.raises(FeedDateError):
            build_directory("2409", doc, BASE, clock=_clock)

    def test_blank_fields_pass_through(self) -> None:
        doc = _doc(FeedAirport(apt_ident="SEA", records=[RawChartRecord()]))
        snap = build_directory("2409", doc, BASE, clock=_clock)
        chart = snap.charts_by_faa["SEA"][0]
        assert chart.chart_code == ""
        assert chart.pdf_path == ""
        assert chart.chart_group is ChartGroup.GENERAL

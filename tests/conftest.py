"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from chartsapi.charts.builder import build_directory  # noqa: E402
from chartsapi.charts.sources.metafile import parse_metafile  # noqa: E402

CHART_BASE_URL = "https://aeronav.faa.gov/d-tpp/2409"

# Sample metafile matching the d-TPP structure: one state, two cities, three airports
METAFILE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<digital_tpp cycle="2409" from_edate="0901Z  09/05/24" to_edate="0901Z  10/03/24">
  <state_code ID="WA" state_fullname="Washington">
    <city_name ID="SEATTLE" volume="NW-1">
      <airport_name ID="SEATTLE-TACOMA INTL" military="N" apt_ident="SEA" icao_ident="KSEA" alnum="582">
        <record>
          <chartseq>50750</chartseq>
          <chart_code>IAP</chart_code>
          <chart_name>ILS OR LOC RWY 16L</chart_name>
          <useraction></useraction>
          <pdf_name>00582IL16L.PDF</pdf_name>
        </record>
        <record>
          <chartseq>70000</chartseq>
          <chart_code>STAR</chart_code>
          <chart_name>HAWKZ SEVEN</chart_name>
          <useraction>C</useraction>
          <pdf_name>00582HAWKZ.PDF</pdf_name>
        </record>
        <record>
          <chartseq>70500</chartseq>
          <chart_code>DP</chart_code>
          <chart_name>OLD DEPARTURE</chart_name>
          <useraction>D</useraction>
          <pdf_name>00582OLD.PDF</pdf_name>
        </record>
        <record>
          <chartseq>90000</chartseq>
          <chart_code>APD</chart_code>
          <chart_name>AIRPORT DIAGRAM</chart_name>
          <useraction></useraction>
          <pdf_name>00582AD.PDF</pdf_name>
        </record>
      </airport_name>
      <airport_name ID="BOEING FLD/KING COUNTY INTL" military="N" apt_ident="BFI" icao_ident="KBFI" alnum="585">
        <record>
          <chartseq>10100</chartseq>
          <chart_code>MIN</chart_code>
          <chart_name>TAKEOFF MINIMUMS</chart_name>
          <useraction></useraction>
          <pdf_name>NW1TO.PDF</pdf_name>
        </record>
        <record>
          <chartseq>10200</chartseq>
          <chart_code>ODP</chart_code>
          <chart_name>BOEING FIELD OBSTACLE DEPARTURE</chart_name>
          <useraction>A</useraction>
          <pdf_name>00585BFI.PDF</pdf_name>
        </record>
      </airport_name>
    </city_name>
    <city_name ID="EVERETT" volume="NW-1">
      <airport_name ID="SNOHOMISH COUNTY (PAINE FLD)" military="N" apt_ident="PAE" icao_ident="KPAE" alnum="1263">
        <record>
          <chartseq>60000</chartseq>
          <chart_code>DP</chart_code>
          <chart_name>PAINE TWO</chart_name>
          <useraction></useraction>
          <pdf_name>01263PAINE.PDF</pdf_name>
        </record>
      </airport_name>
      <airport_name ID="HARVEY FIELD" military="N" apt_ident="S43" icao_ident="" alnum="1300">
        <record>
          <chartseq>50100</chartseq>
          <chart_code>IAP</chart_code>
          <chart_name>RNAV (GPS)-A</chart_name>
          <useraction></useraction>
          <pdf_name>01300RA.PDF</pdf_name>
        </record>
      </airport_name>
    </city_name>
  </state_code>
</digital_tpp>
"""

CYCLE_INFO_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<productSet>
  <status code="200" message="OK"/>
  <edition geoname="US" editionName="CURRENT" format="ZIP">
    <editionDate>09/05/2024</editionDate>
    <editionNumber>9</editionNumber>
  </edition>
</productSet>
"""

NOW = datetime(2024, 9, 20, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def metafile_xml() -> bytes:
    return METAFILE_XML


@pytest.fixture
def cycle_info_xml() -> bytes:
    return CYCLE_INFO_XML


@pytest.fixture
def feed_document():
    return parse_metafile(METAFILE_XML)


@pytest.fixture
def snapshot(feed_document):
    return build_directory("2409", feed_document, CHART_BASE_URL, clock=fixed_clock)

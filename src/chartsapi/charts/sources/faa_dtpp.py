"""FAA digital Terminal Procedures Publication (d-TPP) client.

Cycle info:  https://external-api.faa.gov/apra/dtpp/info?edition=current
Metafile:    https://aeronav.faa.gov/d-tpp/<cycle>/xml_data/d-tpp_Metafile.xml
Chart PDFs:  https://aeronav.faa.gov/d-tpp/<cycle>/<pdf_name>
"""

from typing import Optional

import requests

from chartsapi.charts.sources.base import CycleInfo, FeedDocument
from chartsapi.charts.sources.metafile import parse_cycle_info, parse_metafile
from chartsapi.config import CHART_BASE_URL, CYCLE_INFO_URL, Settings

METAFILE_PATH = "xml_data/d-tpp_Metafile.xml"


class DtppSource:
    """Chart feed source backed by the FAA d-TPP services."""

    def __init__(
        self,
        cycle_info_url: str = CYCLE_INFO_URL,
        base_url: str = CHART_BASE_URL,
        timeout: int = 60,
    ):
        self.cycle_info_url = cycle_info_url
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "DtppSource":
        return cls(
            cycle_info_url=settings.cycle_info_url,
            base_url=settings.chart_base_url,
            timeout=settings.http_timeout,
        )

    def _get(self, url: str, params: Optional[dict] = None, accept: Optional[str] = None) -> bytes:
        headers = {"Accept": accept} if accept else None
        resp = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.content

    def fetch_cycle_info(self) -> CycleInfo:
        """Fetch the edition currently published upstream."""
        data = self._get(
            self.cycle_info_url,
            params={"edition": "current"},
            accept="application/xml",
        )
        return parse_cycle_info(data)

    def fetch_cycle(self) -> str:
        return self.fetch_cycle_info().cycle

    def metafile_url(self, cycle: str) -> str:
        return f"{self.chart_base_url(cycle)}/{METAFILE_PATH}"

    def chart_base_url(self, cycle: str) -> str:
        return f"{self.base_url}/{cycle}"

    def fetch_metafile(self, cycle: str) -> FeedDocument:
        """Download and decode the full metafile for a cycle."""
        return parse_metafile(self._get(self.metafile_url(cycle)))

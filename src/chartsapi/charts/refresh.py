"""Periodic refresh of the chart directory from the upstream feed."""

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

import requests

from chartsapi.charts.builder import build_directory
from chartsapi.charts.errors import FeedError, StartupError
from chartsapi.charts.models import DirectorySnapshot
from chartsapi.charts.sources.base import FeedSource
from chartsapi.charts.store import CacheStore
from chartsapi.config import DEFAULT_CYCLE

logger = logging.getLogger(__name__)

# Failures that leave the current directory in place until the next tick
REFRESH_ERRORS = (requests.RequestException, FeedError)


class RefreshOutcome(Enum):
    UNCHANGED = "unchanged"
    ADOPTED = "adopted"
    FAILED = "failed"


class RefreshScheduler:
    """
    Keeps the cache store in step with the upstream cycle.

    Each tick fetches the upstream cycle tag and, when it differs from the
    adopted one, builds a new directory and swaps it in. A failed tick is
    logged and the previous directory keeps being served.
    """

    def __init__(
        self,
        source: FeedSource,
        store: CacheStore,
        interval: float = 3600,
        default_cycle: str = DEFAULT_CYCLE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._source = source
        self._store = store
        self.interval = interval
        self.default_cycle = default_cycle
        self._clock = clock
        self._cycle: Optional[str] = None
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def current_cycle(self) -> Optional[str]:
        return self._cycle

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def load(self, cycle: str) -> DirectorySnapshot:
        """Fetch and build the directory for a cycle without touching the store."""
        document = self._source.fetch_metafile(cycle)
        return build_directory(
            cycle,
            document,
            self._source.chart_base_url(cycle),
            clock=self._clock,
        )

    def _adopt(self, cycle: str, snapshot: DirectorySnapshot) -> None:
        self._store.swap(snapshot)
        self._cycle = cycle

    def bootstrap(self) -> str:
        """
        Load the first directory before any query is served.

        Falls back to the default cycle when the live cycle cannot be loaded
        and raises StartupError if that fails as well.
        """
        with self._refresh_lock:
            try:
                cycle = self._source.fetch_cycle()
                snapshot = self.load(cycle)
            except REFRESH_ERRORS as e:
                logger.warning(
                    "Initial chart load failed (%s); falling back to cycle %s",
                    e,
                    self.default_cycle,
                )
                cycle = self.default_cycle
                try:
                    snapshot = self.load(cycle)
                except REFRESH_ERRORS as fallback_error:
                    raise StartupError(
                        f"Could not load charts for fallback cycle {cycle}: {fallback_error}"
                    ) from fallback_error
            self._adopt(cycle, snapshot)
        logger.info("Serving charts from cycle %s", cycle)
        return cycle

    def tick(self) -> RefreshOutcome:
        """Run one refresh check."""
        with self._refresh_lock:
            try:
                upstream = self._source.fetch_cycle()
            except REFRESH_ERRORS as e:
                logger.warning("Could not fetch upstream cycle: %s", e)
                return RefreshOutcome.FAILED

            if self._cycle is not None and upstream.strip().upper() == self._cycle.strip().upper():
                logger.debug("Cycle %s unchanged", self._cycle)
                return RefreshOutcome.UNCHANGED

            try:
                snapshot = self.load(upstream)
            except REFRESH_ERRORS as e:
                logger.warning(
                    "Refresh to cycle %s failed, still serving cycle %s: %s",
                    upstream,
                    self._cycle,
                    e,
                )
                return RefreshOutcome.FAILED

            previous = self._cycle
            self._adopt(upstream, snapshot)
        logger.info("Adopted cycle %s (previously %s)", upstream, previous)
        return RefreshOutcome.ADOPTED

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Unexpected error during chart refresh")

    def start(self) -> None:
        """Start ticking in a background daemon thread."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="chart-refresh", daemon=True)
        self._thread.start()
        logger.info("Chart refresh scheduled every %s seconds", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the background thread. An in-flight refresh is allowed to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

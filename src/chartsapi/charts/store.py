"""Holds the directory snapshot currently being served."""

import threading
from typing import Optional

from chartsapi.charts.errors import CacheNotReadyError
from chartsapi.charts.models import DirectorySnapshot


class CacheStore:
    """
    Single swappable reference to an immutable DirectorySnapshot.

    Reads are one attribute load and take no lock, so readers never wait on
    each other or on a writer. The lock only serializes writers around the
    reference assignment. Snapshots are built before swap() is called, and a
    reader always sees one whole snapshot.
    """

    def __init__(self, snapshot: Optional[DirectorySnapshot] = None):
        self._snapshot = snapshot
        self._write_lock = threading.Lock()

    def current(self) -> DirectorySnapshot:
        """Return the snapshot being served. Raises CacheNotReadyError before the first swap."""
        snapshot = self._snapshot
        if snapshot is None:
            raise CacheNotReadyError("No chart directory has been loaded yet")
        return snapshot

    def swap(self, snapshot: DirectorySnapshot) -> Optional[DirectorySnapshot]:
        """Replace the served snapshot and return the previous one."""
        if not isinstance(snapshot, DirectorySnapshot):
            raise TypeError(f"Expected DirectorySnapshot, got {type(snapshot).__name__}")
        with self._write_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        return previous

    @property
    def ready(self) -> bool:
        return self._snapshot is not None

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: SourceLocks
# -----------------------------------------------------------------------------
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Tuple


class SourceLocks:
    """
    One lock per (source_type, source_id) key.

    Re-embedding a source is read-ids -> add -> delete; two of those running
    for the same key would leave both chunk sets behind. Different keys never
    share a lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._holders: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Tuple[str, str]) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                # drop idle locks so the map stays bounded by in-flight keys
                if self._holders[key] == 0:
                    del self._holders[key]
                    del self._locks[key]

    def active_keys(self) -> int:
        with self._guard:
            return len(self._locks)

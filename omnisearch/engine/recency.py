"""Recently-opened result tracking used for the ranking recency boost."""

import math
import threading
from typing import Any, Callable, Dict, Optional

from loguru import logger

from .ranking import now_ms
from .storage import ClientStore

MAX_RECENCY_ENTRIES = 400
RECENCY_STORE_NAME = "app"
RECENCY_STORE_KEY = "search.recentOpenMap"


def parse_recency_map(stored: Any) -> Dict[str, int]:
    """
    Defensively parse a persisted recency blob.

    Anything that is not a mapping yields an empty map; entries whose
    value is not a finite number are dropped.
    """
    if not isinstance(stored, dict):
        return {}

    parsed: Dict[str, int] = {}
    dropped = 0
    for key, value in stored.items():
        if (
            not isinstance(key, str)
            or isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
        ):
            dropped += 1
            continue
        parsed[key] = int(value)

    if dropped:
        logger.warning(f"Dropped {dropped} malformed recency entries")
    return parsed


def trim_recency_map(recency_map: Dict[str, int], max_entries: int) -> Dict[str, int]:
    """Keep the ``max_entries`` most recently opened entries."""
    if len(recency_map) <= max_entries:
        return dict(recency_map)
    entries = sorted(recency_map.items(), key=lambda item: item[1], reverse=True)
    return dict(entries[:max_entries])


class RecencyStore:
    """
    Map from result id to the epoch-ms time it was last opened.

    Backed by a ClientStore key; writes are serialized by a lock so there
    is at most one writer at a time. Entries are only ever added or
    trimmed, never reverted.
    """

    def __init__(
        self,
        store: ClientStore,
        max_entries: int = MAX_RECENCY_ENTRIES,
        store_name: str = RECENCY_STORE_NAME,
        store_key: str = RECENCY_STORE_KEY,
        clock: Optional[Callable[[], int]] = None
    ):
        self.store = store
        self.max_entries = max_entries
        self.store_name = store_name
        self.store_key = store_key
        self._clock = clock or now_ms
        self._lock = threading.Lock()
        self._entries: Dict[str, int] = {}

    @classmethod
    def from_config(cls, store: ClientStore, config) -> "RecencyStore":
        return cls(
            store,
            max_entries=config.recency.max_entries,
            store_name=config.recency.store_name,
            store_key=config.recency.store_key,
        )

    def load(self) -> Dict[str, int]:
        """Read the persisted map, dropping malformed entries."""
        if not self.store.is_loaded:
            self.store.load()
        stored = self.store.get(self.store_name, self.store_key)
        entries = trim_recency_map(parse_recency_map(stored), self.max_entries)
        with self._lock:
            self._entries = entries
        logger.debug(f"Loaded {len(entries)} recency entries")
        return dict(entries)

    def record_open(self, result_id: str) -> None:
        """
        Stamp ``result_id`` with the current time and trim to capacity.

        The persisted map is re-read on every write, so opens recorded
        before this instance existed (or before load()) are kept.
        """
        if not result_id:
            return

        with self._lock:
            if not self.store.is_loaded:
                self.store.load()
            entries = parse_recency_map(self.store.get(self.store_name, self.store_key))
            entries[result_id] = self._clock()
            self._entries = trim_recency_map(entries, self.max_entries)
            self.store.set(self.store_name, self.store_key, dict(self._entries))

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current map, safe to hand to a search call."""
        with self._lock:
            return dict(self._entries)

    def flush(self) -> None:
        self.store.flush()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

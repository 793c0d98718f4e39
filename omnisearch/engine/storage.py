"""Persisted key-value client store backed by one JSON file per store."""

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

DEFAULT_STORES = ("layout", "composer", "threads", "app")


class ClientStore:
    """
    In-memory cache of named JSON stores with an explicit load/flush lifecycle.

    Lifecycle:
    1. load() reads every store file once (missing or corrupt files give {})
    2. get()/set() operate on the in-memory cache and mark stores dirty
    3. flush() writes dirty stores back atomically (temp file + rename)

    The store never assumes transactional semantics across calls.
    """

    def __init__(self, data_dir: Path, stores: Iterable[str] = DEFAULT_STORES):
        self.data_dir = Path(data_dir)
        self.stores = tuple(stores)
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._dirty: set = set()
        self._lock = threading.Lock()
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _store_path(self, store: str) -> Path:
        return self.data_dir / f"{store}.json"

    def load(self) -> None:
        """Read all stores from disk, replacing the in-memory cache."""
        with self._lock:
            for store in self.stores:
                self._cache[store] = self._read_store(store)
            self._dirty.clear()
            self._loaded = True
        logger.debug(f"Client store loaded from {self.data_dir}")

    def _read_store(self, store: str) -> Dict[str, Any]:
        path = self._store_path(store)
        if not path.exists():
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read client store {store}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Client store {store} is not an object, ignoring")
            return {}
        return data

    def _check_store(self, store: str) -> None:
        if store not in self.stores:
            raise KeyError(f"Unknown client store: {store}")

    def get(self, store: str, key: str, default: Optional[Any] = None) -> Any:
        self._check_store(store)
        with self._lock:
            return self._cache.get(store, {}).get(key, default)

    def get_all(self, store: str) -> Dict[str, Any]:
        self._check_store(store)
        with self._lock:
            return dict(self._cache.get(store, {}))

    def set(self, store: str, key: str, value: Any) -> None:
        self._check_store(store)
        with self._lock:
            self._cache.setdefault(store, {})[key] = value
            self._dirty.add(store)

    def replace(self, store: str, data: Dict[str, Any]) -> None:
        self._check_store(store)
        with self._lock:
            self._cache[store] = dict(data)
            self._dirty.add(store)

    @property
    def dirty_stores(self) -> List[str]:
        with self._lock:
            return sorted(self._dirty)

    def flush(self) -> List[str]:
        """
        Write every dirty store to disk.

        Returns:
            Names of the stores written
        """
        with self._lock:
            pending = {store: dict(self._cache.get(store, {})) for store in self._dirty}
            self._dirty.clear()

        if not pending:
            return []

        self.data_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for store, data in sorted(pending.items()):
            path = self._store_path(store)
            tmp_path = path.with_suffix('.json.tmp')
            try:
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, path)
            except OSError as e:
                logger.error(f"Failed to write client store {store}: {e}")
                with self._lock:
                    self._dirty.add(store)
                raise
            written.append(store)

        logger.debug(f"Flushed client stores: {', '.join(written)}")
        return written

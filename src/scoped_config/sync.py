"""Thread-safe wrapper around :class:`ScopedStore`."""

from __future__ import annotations

import os
import threading

from .models import StoreSnapshot
from .store import MISSING, ScopedStore, _Missing


class SynchronizedStore:
    """Serialise every store operation behind a single lock.

    A read holds the lock for the whole file, so lookups never observe a
    half-applied file.
    """

    def __init__(self, store: ScopedStore | None = None) -> None:
        self._store = store or ScopedStore()
        self._lock = threading.RLock()

    @property
    def strict(self) -> bool:
        with self._lock:
            return self._store.strict

    @property
    def provenance(self) -> tuple[str, ...]:
        with self._lock:
            return self._store.provenance

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def toggle_strict_mode(self) -> bool:
        with self._lock:
            return self._store.toggle_strict_mode()

    def set_size_limit(self, limit: int) -> None:
        with self._lock:
            self._store.set_size_limit(limit)

    def read(self, path: str | os.PathLike[str]) -> None:
        with self._lock:
            self._store.read(path)

    def scopes(self) -> list[str]:
        with self._lock:
            return self._store.scopes()

    def raw(self, scope: str, key: str) -> str:
        with self._lock:
            return self._store.raw(scope, key)

    def get_str(self, scope: str, key: str, default: str | None | _Missing = MISSING) -> str | None:
        with self._lock:
            return self._store.get_str(scope, key, default)

    def get_int(self, scope: str, key: str, default: int | None | _Missing = MISSING) -> int | None:
        with self._lock:
            return self._store.get_int(scope, key, default)

    def get_float(self, scope: str, key: str, default: float | None | _Missing = MISSING) -> float | None:
        with self._lock:
            return self._store.get_float(scope, key, default)

    def get_bool(self, scope: str, key: str, default: bool | None | _Missing = MISSING) -> bool | None:
        with self._lock:
            return self._store.get_bool(scope, key, default)

    def dump(self, path: str | os.PathLike[str]) -> None:
        with self._lock:
            self._store.dump(path)

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return self._store.snapshot()

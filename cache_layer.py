"""
Process-local TTL cache for derived data.

Two namespaces are in use: the reference snapshot (offices, districts,
category marks) and per-vacancy scorecards. Imports drop the namespace they
make stale; the TTL only bounds how long another worker can lag behind.
"""
from __future__ import annotations

import hashlib
import json
import os
import threading
from typing import Any, Callable, TypeVar

from cachetools import TTLCache

REFERENCE_NAMESPACE = "REFERENCE_DATA"
SCORECARD_NAMESPACE = "VACANCY_SCORECARD"

TTL_BOUNDS = (1, 3600)
SIZE_BOUNDS = (100, 200_000)

T = TypeVar("T")


def _digest(params: dict[str, Any]) -> str:
    try:
        blob = json.dumps(params, sort_keys=True, separators=(",", ":"))
    except TypeError:
        blob = repr(sorted(params.items()))
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()[:16]


def make_cache_key(namespace: str, *, scope: list[str] | None = None, params: dict[str, Any] | None = None) -> str:
    """``NAMESPACE:scope...:digest``; the scope parts allow prefix invalidation."""
    parts = [str(namespace or "").strip().upper()]
    parts += [str(s).strip() for s in (scope or []) if str(s or "").strip()]
    parts.append(_digest(params or {}))
    return ":".join(parts)


def namespace_prefix(namespace: str, *scope: str) -> str:
    return ":".join([str(namespace or "").strip().upper(), *[str(s).strip() for s in scope]]) + ":"


def _bounded(value: int, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(hi, int(value)))


class _DerivedCache:
    def __init__(self, ttl: int, max_items: int):
        self._lock = threading.RLock()
        self._store: TTLCache = self._new_store(ttl, max_items)

    @staticmethod
    def _new_store(ttl: int, max_items: int) -> TTLCache:
        return TTLCache(maxsize=_bounded(max_items, SIZE_BOUNDS), ttl=_bounded(ttl, TTL_BOUNDS))

    def configure(self, ttl: int, max_items: int) -> None:
        with self._lock:
            self._store = self._new_store(ttl, max_items)

    def get(self, key: str) -> Any:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = value

    def drop_prefix(self, prefix: str) -> int:
        if not prefix:
            return 0
        with self._lock:
            stale = [k for k in list(self._store.keys()) if str(k).startswith(prefix)]
            for k in stale:
                self._store.pop(k, None)
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


def _env_int(name: str, default: int) -> int:
    try:
        return int(str(os.getenv(name, "") or "").strip() or default)
    except ValueError:
        return default


_cache = _DerivedCache(_env_int("CACHE_TTL_SECONDS", 30), _env_int("CACHE_MAX_ITEMS", 10000))


def cache_configure(ttl: int, max_items: int) -> None:
    _cache.configure(ttl, max_items)


def cache_get(key: str) -> Any:
    return _cache.get(key)


def cache_set(key: str, value: Any) -> None:
    _cache.set(key, value)


def cache_get_or_load(key: str, loader: Callable[[], T]) -> T:
    hit = _cache.get(key)
    if hit is not None:
        return hit
    value = loader()
    _cache.set(key, value)
    return value


def cache_invalidate_prefix(prefix: str) -> int:
    return _cache.drop_prefix(prefix)


def cache_clear() -> None:
    _cache.clear()

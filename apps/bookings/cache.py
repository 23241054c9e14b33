"""Caching of date availability answers."""

from __future__ import annotations

import hashlib
from datetime import timedelta
from typing import Callable, Dict, List

from django.conf import settings  # type: ignore
from django.core.cache import cache  # type: ignore
from django.utils import timezone  # type: ignore

CACHE_KEYS_STORAGE_KEY = "availability:date_cache_keys"
CACHE_PREFIX = "availability:dates"


def _timeout() -> int:
    return getattr(settings, "DATE_AVAILABILITY_CACHE_TIMEOUT", 300)


def _build_cache_key(filters: Dict[str, object]) -> str:
    normalized_parts = [f"{key}={filters[key]}" for key in sorted(filters)]
    fingerprint = "|".join(normalized_parts)
    digest = hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()
    return f"{CACHE_PREFIX}:{digest}"


def _register_cache_key(key: str) -> None:
    keys: List[str] | None = cache.get(CACHE_KEYS_STORAGE_KEY)
    if keys is None:
        cache.set(CACHE_KEYS_STORAGE_KEY, [key], None)
        return
    if key in keys:
        return
    keys.append(key)
    cache.set(CACHE_KEYS_STORAGE_KEY, keys, None)


def get_cached_date_availability(filters: Dict[str, object], builder: Callable[[], dict]) -> tuple[dict, dict]:
    """
    Return ``(data, meta)`` for the filters, building and caching on a miss.

    ``meta`` carries the moment the data was computed and when the cached
    copy expires.
    """
    key = _build_cache_key(filters)
    cached = cache.get(key)
    if cached is not None:
        return cached["data"], cached["meta"]

    timeout = _timeout()
    checked_at = timezone.now()
    entry = {
        "data": builder(),
        "meta": {
            "checked_at": checked_at.isoformat(),
            "cache_expires_at": (checked_at + timedelta(seconds=timeout)).isoformat(),
            "fallback": False,
        },
    }
    cache.set(key, entry, timeout)
    _register_cache_key(key)
    return entry["data"], entry["meta"]


def invalidate_availability_cache() -> None:
    """Remove all cached date availability entries."""
    keys: List[str] | None = cache.get(CACHE_KEYS_STORAGE_KEY)
    if keys:
        cache.delete_many(keys)
    cache.delete(CACHE_KEYS_STORAGE_KEY)


__all__ = [
    "get_cached_date_availability",
    "invalidate_availability_cache",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Instance-owned TTL cache for per-file metadata.

Entries are keyed by absolute path and never mutated in place: a refresh
replaces the entry, expiry deletes it. Validity is decided purely by wall
clock age so a fresh hit never needs to touch the filesystem.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..constants import CACHE_TTL_SECONDS
from ..models import FileInfo

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Cached metadata together with the time it was captured."""

    info: FileInfo
    timestamp: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Return ``True`` while the entry is younger than ``ttl_seconds``.

        Args:
            now: Current clock reading.
            ttl_seconds: Maximum permitted age.

        Returns:
            bool: ``True`` when ``now - timestamp < ttl_seconds``.
        """

        return now - self.timestamp < ttl_seconds


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Describe cache state metadata.

    Attributes:
        current_size: Number of entries currently stored.
        hits: Lookups served from a fresh entry.
        misses: Lookups that found no entry or a stale one.
    """

    current_size: int
    hits: int
    misses: int


class MetadataCache:
    """Map absolute paths to :class:`FileInfo` records with a TTL."""

    def __init__(self, ttl_seconds: float = CACHE_TTL_SECONDS, *, clock: Clock = time.monotonic) -> None:
        """Create an empty cache.

        Args:
            ttl_seconds: Age after which entries are considered stale.
            clock: Monotonic clock used to timestamp and age entries.
        """

        self.ttl_seconds: Final[float] = ttl_seconds
        self._clock = clock
        self._store: dict[Path, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, path: Path) -> FileInfo | None:
        """Return fresh metadata for ``path`` or ``None``.

        Stale entries are deleted on lookup.

        Args:
            path: Absolute path used as the cache key.

        Returns:
            FileInfo | None: Cached record when fresh.
        """

        entry = self._store.get(path)
        if entry is not None:
            if entry.is_fresh(self._clock(), self.ttl_seconds):
                self._hits += 1
                return entry.info
            del self._store[path]
        self._misses += 1
        return None

    def put(self, info: FileInfo) -> None:
        """Store ``info`` under its absolute path, replacing any prior entry."""

        self._store[info.path] = CacheEntry(info=info, timestamp=self._clock())

    def invalidate(self, path: Path) -> bool:
        """Drop the entry for ``path`` returning whether one existed."""

        return self._store.pop(path, None) is not None

    def clear(self) -> None:
        """Remove every entry and reset hit tracking."""

        self._store.clear()
        self._hits = 0
        self._misses = 0

    def cleanup(self) -> int:
        """Delete stale entries.

        Returns:
            int: Number of entries removed.
        """

        now = self._clock()
        stale = [path for path, entry in self._store.items() if not entry.is_fresh(now, self.ttl_seconds)]
        for path in stale:
            del self._store[path]
        return len(stale)

    def stats(self) -> CacheStats:
        """Return hit/miss counters and the current size."""

        return CacheStats(current_size=len(self._store), hits=self._hits, misses=self._misses)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, path: object) -> bool:
        return path in self._store


__all__ = ["CacheEntry", "CacheStats", "Clock", "MetadataCache"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rate-limited progress tracking for batch operations."""

from __future__ import annotations

import time
from collections.abc import Callable

from ..constants import DEFAULT_PROGRESS_INTERVAL
from ..models import ProgressInfo
from .memory import MemorySampler, sample_memory

ProgressCallback = Callable[[ProgressInfo], None]


class ProgressTracker:
    """Turn raw ``(current, batch)`` updates into :class:`ProgressInfo` snapshots.

    The display callback fires at most once per ``update_interval`` seconds;
    :meth:`complete` always fires it so the terminal state is shown.
    """

    def __init__(
        self,
        total: int | None,
        total_batches: int,
        callback: ProgressCallback | None = None,
        *,
        update_interval: float = DEFAULT_PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        memory_sampler: MemorySampler = sample_memory,
    ) -> None:
        """Start tracking.

        Args:
            total: Number of items expected, ``None`` when unbounded.
            total_batches: Number of batches expected.
            callback: Display callback receiving snapshots.
            update_interval: Minimum seconds between callback invocations.
            clock: Monotonic clock used for elapsed time and throttling.
            memory_sampler: Callable returning a fresh memory sample.
        """

        self.total = total
        self.total_batches = total_batches
        self.update_interval = update_interval
        self._callback = callback
        self._clock = clock
        self._memory_sampler = memory_sampler
        self._start = clock()
        self._last_emit: float | None = None
        self._current = 0
        self._current_batch = 0

    def update(self, current: int, batch_index: int) -> ProgressInfo:
        """Record progress and redraw when the interval has elapsed.

        Args:
            current: Cumulative number of items processed.
            batch_index: One-based index of the batch just completed.

        Returns:
            ProgressInfo: Snapshot computed for this update.
        """

        now = self._clock()
        self._current = current
        self._current_batch = batch_index
        info = self._snapshot(current, batch_index, now)
        if self._last_emit is None or now - self._last_emit >= self.update_interval:
            self._emit(info, now)
        return info

    def complete(self) -> ProgressInfo:
        """Emit the terminal snapshot regardless of the redraw interval."""

        now = self._clock()
        current = self.total if self.total is not None else self._current
        info = self._snapshot(current, max(self.total_batches, self._current_batch), now)
        self._emit(info, now)
        return info

    @property
    def elapsed(self) -> float:
        """Return seconds since tracking started."""

        return self._clock() - self._start

    def _emit(self, info: ProgressInfo, now: float) -> None:
        self._last_emit = now
        if self._callback is not None:
            self._callback(info)

    def _snapshot(self, current: int, batch_index: int, now: float) -> ProgressInfo:
        """Build the snapshot for ``current`` items at time ``now``."""

        elapsed = now - self._start
        rate = current / elapsed if elapsed > 0 else 0.0
        percentage: float | None = None
        eta: float | None = None
        if self.total is not None:
            percentage = 100.0 if self.total == 0 else min(100.0, max(0.0, current / self.total * 100))
            if rate > 0:
                eta = max(0, self.total - current) / rate
        return ProgressInfo(
            current=current,
            total=self.total,
            current_batch=batch_index,
            total_batches=self.total_batches,
            percentage=percentage,
            elapsed=elapsed,
            rate=rate,
            eta=eta,
            memory_usage=self._memory_sampler().formatted,
        )


__all__ = ["ProgressCallback", "ProgressTracker"]

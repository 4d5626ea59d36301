# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Adaptive batch sizing and best-effort memory governance."""

from __future__ import annotations

import gc
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from ..constants import BATCH_DIVISOR, MEMORY_RECLAIM_INTERVAL, MIN_BATCH_SIZE

LOGGER = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ReclaimHook = Callable[[], object]


def adaptive_batch_size(total: int, optimal: int) -> int:
    """Return ``min(optimal, max(MIN_BATCH_SIZE, total // BATCH_DIVISOR))``.

    Small inputs are not split into tiny batches and huge inputs are capped at
    ``optimal`` items per batch.

    Args:
        total: Number of items to process.
        optimal: Configured upper bound for a batch.

    Returns:
        int: Effective batch size, never below one.
    """

    return max(1, min(optimal, max(MIN_BATCH_SIZE, total // BATCH_DIVISOR)))


def memory_bounded_batch_size(
    total: int,
    optimal: int,
    *,
    memory_limit: int | None = None,
    average_item_size: int | None = None,
) -> int:
    """Return an adaptive batch size clamped so ``size * average_item_size <= memory_limit``.

    Without an item-size estimate the ceiling cannot be projected and the
    plain adaptive heuristic applies.

    Args:
        total: Number of items to process.
        optimal: Configured upper bound for a batch.
        memory_limit: Peak memory budget for one batch in bytes.
        average_item_size: Estimated bytes held per in-flight item.

    Returns:
        int: Effective batch size, never below one.
    """

    size = adaptive_batch_size(total, optimal)
    if memory_limit is None or not average_item_size:
        return size
    ceiling = max(1, memory_limit // average_item_size)
    if ceiling < size:
        LOGGER.debug(
            "batch size clamped by memory limit size=%d ceiling=%d limit=%d item=%d",
            size,
            ceiling,
            memory_limit,
            average_item_size,
        )
    return min(size, ceiling)


def batch_count(total: int, batch_size: int) -> int:
    """Return the number of batches needed for ``total`` items."""

    return math.ceil(total / batch_size) if total else 0


def split_batches(items: Sequence[ItemT], size: int) -> list[Sequence[ItemT]]:
    """Split ``items`` into consecutive slices of at most ``size`` elements.

    Raises:
        ValueError: If ``size`` is not positive.
    """

    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [items[start : start + size] for start in range(0, len(items), size)]


@dataclass(slots=True)
class MemoryGovernor:
    """Invoke a memory reclamation hint every ``interval`` batches.

    The hint is advisory: ``reclaim`` may be ``None`` (a no-op governor) and
    failures raised by it are logged and ignored.
    """

    reclaim: ReclaimHook | None = gc.collect
    interval: int = MEMORY_RECLAIM_INTERVAL
    invocations: int = 0

    def after_batch(self, batch_number: int) -> bool:
        """Run the hint when ``batch_number`` is a multiple of ``interval``.

        Args:
            batch_number: One-based index of the batch just completed.

        Returns:
            bool: ``True`` when the hint ran successfully.
        """

        if self.reclaim is None or self.interval < 1 or batch_number % self.interval:
            return False
        try:
            self.reclaim()
        except Exception as exc:  # noqa: BLE001
            LOGGER.debug("memory reclamation hint failed batch=%d error=%s", batch_number, exc)
            return False
        self.invocations += 1
        return True


__all__ = [
    "MemoryGovernor",
    "ReclaimHook",
    "adaptive_batch_size",
    "batch_count",
    "memory_bounded_batch_size",
    "split_batches",
]

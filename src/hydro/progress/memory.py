# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process memory sampling backed by :mod:`psutil`."""

from __future__ import annotations

from collections.abc import Callable

import psutil

from ..models import MemoryUsage
from .formatting import format_bytes

MemorySampler = Callable[[], MemoryUsage]


def sample_memory() -> MemoryUsage:
    """Return the resident set size of the current process.

    Returns:
        MemoryUsage: RSS, total system memory and the process share of it.
    """

    used = psutil.Process().memory_info().rss
    total = psutil.virtual_memory().total
    percentage = (used / total) * 100 if total else 0.0
    return MemoryUsage(
        used=used,
        total=total,
        percentage=percentage,
        formatted=f"{format_bytes(used)} / {format_bytes(total)} ({percentage:.1f}%)",
    )


__all__ = ["MemorySampler", "sample_memory"]

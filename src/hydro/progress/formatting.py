# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Human-readable formatting helpers for sizes, durations and progress lines."""

from __future__ import annotations

from typing import Final

from ..constants import BYTE_UNITS
from ..models import ProgressInfo

_BAR_FILL: Final[str] = "█"
_BAR_EMPTY: Final[str] = "░"
_UNKNOWN: Final[str] = "?"


def format_bytes(size: float) -> str:
    """Return ``size`` using 1024-based units with one decimal place.

    Args:
        size: Byte count to format.

    Returns:
        str: Value such as ``"1.5 MB"``.
    """

    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.1f} {BYTE_UNITS[unit_index]}"


def format_duration(seconds: float) -> str:
    """Return ``seconds`` as ``"1h 2m 3s"``, ``"2m 3s"`` or ``"3s"``."""

    whole = max(0, int(seconds))
    minutes, secs = divmod(whole, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_rate(rate: float) -> str:
    """Return an items-per-second rate, abbreviating thousands."""

    if rate >= 1000:
        return f"{rate / 1000:.1f}k/s"
    return f"{rate:.1f}/s"


def create_progress_bar(current: int, total: int | None, width: int = 30) -> str:
    """Return a text progress bar such as ``"[███░░░] 50.0%"``.

    An unknown ``total`` renders an empty bar without a percentage.
    """

    if not total or total <= 0:
        return f"[{_BAR_EMPTY * width}] {_UNKNOWN}"
    fraction = min(1.0, max(0.0, current / total))
    filled = int(fraction * width)
    return f"[{_BAR_FILL * filled}{_BAR_EMPTY * (width - filled)}] {fraction * 100:.1f}%"


def create_detailed_display(info: ProgressInfo) -> str:
    """Return a one-line summary of ``info`` for log or spinner output."""

    total = _UNKNOWN if info.total is None else str(info.total)
    percentage = _UNKNOWN if info.percentage is None else f"{info.percentage:.1f}%"
    eta = _UNKNOWN if info.eta is None else format_duration(info.eta)
    return " | ".join(
        (
            f"Progress: {create_progress_bar(info.current, info.total)}",
            f"Items: {info.current}/{total} ({percentage})",
            f"Batches: {info.current_batch}/{info.total_batches}",
            f"Rate: {format_rate(info.rate)}",
            f"ETA: {eta}",
            f"Memory: {info.memory_usage}",
        ),
    )


__all__ = [
    "create_detailed_display",
    "create_progress_bar",
    "format_bytes",
    "format_duration",
    "format_rate",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Progress tracking, memory sampling and display formatting."""

from __future__ import annotations

from .formatting import (
    create_detailed_display,
    create_progress_bar,
    format_bytes,
    format_duration,
    format_rate,
)
from .memory import MemorySampler, sample_memory
from .tracker import ProgressCallback, ProgressTracker

__all__ = [
    "MemorySampler",
    "ProgressCallback",
    "ProgressTracker",
    "create_detailed_display",
    "create_progress_bar",
    "format_bytes",
    "format_duration",
    "format_rate",
    "sample_memory",
]

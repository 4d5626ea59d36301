# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Batch sizing, memory governance and bounded-concurrency execution."""

from __future__ import annotations

from .batching import (
    MemoryGovernor,
    adaptive_batch_size,
    batch_count,
    memory_bounded_batch_size,
    split_batches,
)
from .bulk import (
    BatchCallback,
    BulkProcessor,
    Operation,
    build_tracker,
    process_all,
    process_bulk,
    process_files_with_streaming,
)

__all__ = [
    "BatchCallback",
    "BulkProcessor",
    "MemoryGovernor",
    "Operation",
    "adaptive_batch_size",
    "batch_count",
    "build_tracker",
    "memory_bounded_batch_size",
    "process_all",
    "process_bulk",
    "process_files_with_streaming",
    "split_batches",
]

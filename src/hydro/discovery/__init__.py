# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File discovery, metadata extraction and post-processing filters."""

from __future__ import annotations

from .filters import (
    filter_by_extension,
    filter_by_language,
    filter_by_min_size,
    filter_by_recent_modification,
    get_language_stats,
    is_analyzable_file,
    sort_by_modification_date,
    sort_by_size,
)
from .patterns import ScanPatterns, build_include_patterns, build_scan_patterns
from .scanner import FileScanner, build_file_info, scan, walk_candidates

__all__ = [
    "FileScanner",
    "ScanPatterns",
    "build_file_info",
    "build_include_patterns",
    "build_scan_patterns",
    "filter_by_extension",
    "filter_by_language",
    "filter_by_min_size",
    "filter_by_recent_modification",
    "get_language_stats",
    "is_analyzable_file",
    "scan",
    "sort_by_modification_date",
    "sort_by_size",
    "walk_candidates",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for reading, sniffing and hashing discovered files."""

from __future__ import annotations

from .duplicates import find_duplicate_files
from .reader import calculate_file_hash, count_lines, is_binary_file, iter_file_chunks, read_file_content

__all__ = [
    "calculate_file_hash",
    "count_lines",
    "find_duplicate_files",
    "is_binary_file",
    "iter_file_chunks",
    "read_file_content",
]

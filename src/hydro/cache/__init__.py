# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Caching utilities for discovered file metadata."""

from __future__ import annotations

from .metadata import CacheEntry, CacheStats, MetadataCache

__all__ = ["CacheEntry", "CacheStats", "MetadataCache"]

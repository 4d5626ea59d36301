# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration models and memory limit parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hydro.config import BulkOptions, ConfigError, ScanConfig, parse_memory_limit
from hydro.constants import DEFAULT_BATCH_SIZE, DEFAULT_MAX_CONCURRENCY


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("512MB", 512 * 1024 * 1024),
        ("1GB", 1024 * 1024 * 1024),
        ("1.5 kb", 1536),
        ("256", 256 * 1024 * 1024),
    ],
)
def test_parse_memory_limit_accepts_units(raw: str, expected: int) -> None:
    assert parse_memory_limit(raw) == expected


@pytest.mark.parametrize("raw", ["lots", "12TB", "-5MB", "", "0MB"])
def test_parse_memory_limit_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(ConfigError):
        parse_memory_limit(raw)


def test_bulk_options_defaults() -> None:
    options = BulkOptions()

    assert options.batch_size == DEFAULT_BATCH_SIZE
    assert options.max_concurrency == DEFAULT_MAX_CONCURRENCY
    assert options.memory_limit is None
    assert options.adaptive is True


def test_bulk_options_parses_memory_limit_string() -> None:
    options = BulkOptions(memory_limit="512MB")

    assert options.memory_limit == 512 * 1024 * 1024


def test_bulk_options_surfaces_config_error_for_bad_limit() -> None:
    with pytest.raises(ConfigError, match="Invalid memory limit format"):
        BulkOptions(memory_limit="plenty")


def test_bulk_options_rejects_non_positive_sizes() -> None:
    with pytest.raises(ValidationError):
        BulkOptions(batch_size=0)
    with pytest.raises(ValidationError):
        BulkOptions(max_concurrency=0)


def test_bulk_options_validates_assignment() -> None:
    options = BulkOptions()
    options.memory_limit = "2KB"

    assert options.memory_limit == 2048
    with pytest.raises(ValidationError):
        options.batch_size = -1


def test_scan_config_defaults() -> None:
    config = ScanConfig()

    assert config.include == []
    assert config.exclude == []
    assert config.max_file_size is None
    assert config.follow_symlinks is False

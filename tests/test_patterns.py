# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for include/exclude pattern compilation."""

from __future__ import annotations

from hydro.config import ScanConfig
from hydro.constants import DEFAULT_EXCLUDE_PATTERNS
from hydro.discovery import build_include_patterns, build_scan_patterns
from hydro.discovery.patterns import expand_include_pattern


def test_bare_directory_expands_to_recursive_globs() -> None:
    assert expand_include_pattern("src") == ["src/**/*", "src/*"]
    assert expand_include_pattern("src/") == ["src/**/*", "src/*"]


def test_patterns_with_wildcards_or_dots_pass_through() -> None:
    assert expand_include_pattern("**/*.ts") == ["**/*.ts"]
    assert expand_include_pattern("README.md") == ["README.md"]
    assert expand_include_pattern("lib?") == ["lib?"]


def test_include_patterns_are_deduplicated() -> None:
    assert build_include_patterns(["src", "src/**/*", "*.py"]) == ["src/**/*", "src/*", "*.py"]
    assert build_include_patterns([]) == []


def test_negated_user_excludes_cannot_lift_defaults() -> None:
    patterns = build_scan_patterns(ScanConfig(exclude=["!node_modules/", "!*.min.js", "logs/"]))

    assert patterns.is_excluded_dir("node_modules")
    assert patterns.is_excluded("src/b.min.js")
    assert patterns.is_excluded_dir("logs")
    denied_dirs = [line.rstrip("/") for line in DEFAULT_EXCLUDE_PATTERNS if line.endswith("/")]
    assert all(patterns.is_excluded_dir(name) for name in denied_dirs)


def test_scan_patterns_match_relative_paths() -> None:
    patterns = build_scan_patterns(ScanConfig(include=["src"]))

    assert patterns.matches("src/a.ts")
    assert not patterns.matches("src/b.min.js")
    assert not patterns.matches("lib/src/a.ts")
    assert patterns.is_excluded_dir("node_modules")
    assert patterns.is_excluded_dir("packages/web/node_modules")
    assert not patterns.is_excluded_dir("src")


def test_empty_include_accepts_everything_not_excluded() -> None:
    patterns = build_scan_patterns(ScanConfig())

    assert patterns.include_spec is None
    assert patterns.matches("any/depth/file.txt")
    assert not patterns.matches("bundle/app.map")

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core scanning and batching constants."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

HYDRO_DIR_NAME: Final[str] = ".hydro"

# Default deny-list, expressed as gitignore-style lines. Always unioned with
# user excludes.
DEFAULT_EXCLUDE_PATTERNS: Final[tuple[str, ...]] = (
    # version control
    ".git/",
    ".svn/",
    ".hg/",
    # dependencies
    "node_modules/",
    "bower_components/",
    ".venv/",
    "venv/",
    # build output
    "dist/",
    "build/",
    "__pycache__/",
    # coverage
    "coverage/",
    ".nyc_output/",
    # tool state
    f"{HYDRO_DIR_NAME}/",
    ".cache/",
    ".mypy_cache/",
    ".pytest_cache/",
    ".tox/",
    # minified, bundled and source-map files
    "*.min.js",
    "*.min.css",
    "*.bundle.js",
    "*.map",
)

LANGUAGE_BY_EXTENSION: Final[MappingProxyType[str, str]] = MappingProxyType(
    {
        ".js": "javascript",
        ".jsx": "javascript",
        ".mjs": "javascript",
        ".cjs": "javascript",
        ".ts": "typescript",
        ".tsx": "typescript",
        ".py": "python",
        ".pyx": "python",
        ".java": "java",
        ".kt": "kotlin",
        ".go": "go",
        ".rs": "rust",
        ".php": "php",
        ".rb": "ruby",
        ".cs": "csharp",
        ".fs": "fsharp",
        ".vb": "vbnet",
        ".cpp": "cpp",
        ".cc": "cpp",
        ".cxx": "cpp",
        ".c": "c",
        ".h": "c",
        ".hpp": "cpp",
        ".sql": "sql",
        ".psql": "sql",
        ".mysql": "sql",
        ".html": "html",
        ".htm": "html",
        ".css": "css",
        ".scss": "scss",
        ".sass": "sass",
        ".less": "less",
        ".json": "json",
        ".xml": "xml",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".toml": "toml",
        ".ini": "ini",
        ".sh": "bash",
        ".bash": "bash",
        ".zsh": "zsh",
        ".fish": "fish",
        ".ps1": "powershell",
        ".bat": "batch",
        ".cmd": "batch",
    },
)

UNKNOWN_LANGUAGE: Final[str] = "unknown"

CACHE_TTL_SECONDS: Final[float] = 5 * 60.0

LARGE_FILE_THRESHOLD: Final[int] = 1024 * 1024
READ_CHUNK_SIZE: Final[int] = 64 * 1024
BINARY_SNIFF_BYTES: Final[int] = 8000
FALLBACK_ENCODING: Final[str] = "latin-1"

DEFAULT_BATCH_SIZE: Final[int] = 200
DEFAULT_MAX_CONCURRENCY: Final[int] = 10
MIN_BATCH_SIZE: Final[int] = 50
BATCH_DIVISOR: Final[int] = 10
MEMORY_RECLAIM_INTERVAL: Final[int] = 5
DEFAULT_MEMORY_LIMIT: Final[str] = "1GB"

DEFAULT_PROGRESS_INTERVAL: Final[float] = 1.0

BYTE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB")

__all__ = [
    "BATCH_DIVISOR",
    "BINARY_SNIFF_BYTES",
    "BYTE_UNITS",
    "CACHE_TTL_SECONDS",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_MEMORY_LIMIT",
    "DEFAULT_PROGRESS_INTERVAL",
    "FALLBACK_ENCODING",
    "HYDRO_DIR_NAME",
    "LANGUAGE_BY_EXTENSION",
    "LARGE_FILE_THRESHOLD",
    "MEMORY_RECLAIM_INTERVAL",
    "MIN_BATCH_SIZE",
    "READ_CHUNK_SIZE",
    "UNKNOWN_LANGUAGE",
]

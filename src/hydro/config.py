# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for file discovery and bulk processing."""

from __future__ import annotations

import re
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_CONCURRENCY,
    LARGE_FILE_THRESHOLD,
    MEMORY_RECLAIM_INTERVAL,
)
from .errors import ConfigError

_MEMORY_LIMIT_RE: Final[re.Pattern[str]] = re.compile(r"^(\d+(?:\.\d+)?)\s*(KB|MB|GB)?$", re.IGNORECASE)
_MEMORY_MULTIPLIERS: Final[dict[str, int]] = {
    "KB": 1024,
    "MB": 1024 * 1024,
    "GB": 1024 * 1024 * 1024,
}
_DEFAULT_MEMORY_UNIT: Final[str] = "MB"


def parse_memory_limit(limit: str) -> int:
    """Return the number of bytes described by a human-readable ``limit``.

    Args:
        limit: Size such as ``"512MB"``, ``"1.5 GB"`` or ``"256"`` (megabytes).

    Returns:
        int: Byte count using 1024-based units.

    Raises:
        ConfigError: If ``limit`` is not a recognised size expression.
    """

    match = _MEMORY_LIMIT_RE.match(limit.strip())
    if match is None:
        raise ConfigError(f"Invalid memory limit format: {limit}")
    value = float(match.group(1))
    unit = (match.group(2) or _DEFAULT_MEMORY_UNIT).upper()
    parsed = int(value * _MEMORY_MULTIPLIERS[unit])
    if parsed <= 0:
        raise ConfigError(f"Memory limit must be positive: {limit}")
    return parsed


class ScanConfig(BaseModel):
    """Describe which files a scan should consider.

    Attributes:
        include: Include patterns, OR-unioned. Empty means every file.
        exclude: Exclude patterns, always unioned with the default deny-list.
        max_file_size: Byte ceiling above which files are recorded as skipped.
        follow_symlinks: Traverse symlinked directories when ``True``.
    """

    model_config = ConfigDict(validate_assignment=True)

    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    max_file_size: int | None = Field(default=None, ge=0)
    follow_symlinks: bool = False


class BulkOptions(BaseModel):
    """Tune the bounded-concurrency batch processor.

    ``memory_limit`` accepts either a byte count or a human-readable string
    which is parsed once here; malformed strings raise :class:`ConfigError`
    before any work starts.
    """

    model_config = ConfigDict(validate_assignment=True)

    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1)
    memory_limit: int | None = Field(default=None, gt=0)
    average_item_size: int | None = Field(default=None, gt=0)
    adaptive: bool = True
    enable_memory_management: bool = True
    reclaim_interval: int = Field(default=MEMORY_RECLAIM_INTERVAL, ge=1)
    item_timeout: float | None = Field(default=None, gt=0)
    large_file_threshold: int = Field(default=LARGE_FILE_THRESHOLD, ge=0)

    @field_validator("memory_limit", mode="before")
    @classmethod
    def _coerce_memory_limit(cls, value: object) -> object:
        """Parse string memory limits such as ``"512MB"`` into bytes."""

        if isinstance(value, str):
            return parse_memory_limit(value)
        return value


__all__ = ["BulkOptions", "ConfigError", "ScanConfig", "parse_memory_limit"]

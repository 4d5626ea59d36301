# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from hydro.models import FileInfo, MemoryUsage


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock frozen at zero until advanced."""
    return FakeClock()


@pytest.fixture
def memory_sampler() -> Callable[[], MemoryUsage]:
    """Return a sampler producing a fixed memory reading."""

    def sample() -> MemoryUsage:
        return MemoryUsage(used=1024, total=4096, percentage=25.0, formatted="1.0 KB / 4.0 KB (25.0%)")

    return sample


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper creating files below ``tmp_path``."""

    def _write(relative: str, size: int = 0, *, content: bytes | None = None) -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content if content is not None else b"x" * size)
        return target

    return _write


@pytest.fixture
def make_info() -> Callable[..., FileInfo]:
    """Return a factory for in-memory :class:`FileInfo` records."""

    def _make(name: str, size: int = 10, *, language: str | None = None, modified: datetime | None = None) -> FileInfo:
        path = Path("/project") / name
        return FileInfo(
            path=path,
            relative_path=name,
            size=size,
            extension=path.suffix.lower(),
            language=language,
            last_modified=modified or datetime(2025, 1, 1, tzinfo=UTC),
        )

    return _make

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Synchronous post-processing helpers over scanned file lists."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from datetime import UTC, datetime, timedelta

from ..constants import UNKNOWN_LANGUAGE
from ..models import FileInfo, LanguageStats


def filter_by_language(files: Iterable[FileInfo], languages: Collection[str]) -> list[FileInfo]:
    """Return files whose language is one of ``languages``."""

    return [info for info in files if info.language is not None and info.language in languages]


def filter_by_extension(files: Iterable[FileInfo], extensions: Iterable[str]) -> list[FileInfo]:
    """Return files whose extension is one of ``extensions``.

    Extensions may be given with or without the leading dot and in any case.
    """

    wanted = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    return [info for info in files if info.extension in wanted]


def filter_by_min_size(files: Iterable[FileInfo], min_size: int) -> list[FileInfo]:
    """Return files of at least ``min_size`` bytes."""

    return [info for info in files if info.size >= min_size]


def filter_by_recent_modification(
    files: Iterable[FileInfo],
    days: float,
    *,
    now: datetime | None = None,
) -> list[FileInfo]:
    """Return files modified within the last ``days`` days.

    Args:
        files: File records to filter.
        days: Age window in days.
        now: Reference time; defaults to the current UTC time.

    Returns:
        list[FileInfo]: Files modified at or after the cutoff.
    """

    cutoff = (now or datetime.now(tz=UTC)) - timedelta(days=days)
    return [info for info in files if info.last_modified >= cutoff]


def sort_by_size(files: Iterable[FileInfo]) -> list[FileInfo]:
    """Return files ordered largest first."""

    return sorted(files, key=lambda info: info.size, reverse=True)


def sort_by_modification_date(files: Iterable[FileInfo]) -> list[FileInfo]:
    """Return files ordered newest first."""

    return sorted(files, key=lambda info: info.last_modified, reverse=True)


def get_language_stats(files: Sequence[FileInfo]) -> dict[str, LanguageStats]:
    """Return per-language file counts, byte totals and size share.

    Files without a language are counted under ``"unknown"``.

    Args:
        files: File records to summarise.

    Returns:
        dict[str, LanguageStats]: Statistics keyed by language.
    """

    total_size = sum(info.size for info in files)
    counts: dict[str, int] = {}
    sizes: dict[str, int] = {}
    for info in files:
        language = info.language or UNKNOWN_LANGUAGE
        counts[language] = counts.get(language, 0) + 1
        sizes[language] = sizes.get(language, 0) + info.size
    return {
        language: LanguageStats(
            files=counts[language],
            size=sizes[language],
            percentage=(sizes[language] / total_size * 100) if total_size else 0.0,
        )
        for language in counts
    }


def is_analyzable_file(info: FileInfo, supported_languages: Collection[str]) -> bool:
    """Return ``True`` when ``info`` has a language in ``supported_languages``."""

    return info.language is not None and info.language in supported_languages


__all__ = [
    "filter_by_extension",
    "filter_by_language",
    "filter_by_min_size",
    "filter_by_recent_modification",
    "get_language_stats",
    "is_analyzable_file",
    "sort_by_modification_date",
    "sort_by_size",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover files under a root and extract their metadata."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..cache import MetadataCache
from ..config import BulkOptions, ScanConfig
from ..constants import LANGUAGE_BY_EXTENSION
from ..execution import process_bulk
from ..filesystem import read_file_content
from ..models import FileInfo, ScanResult
from ..progress import ProgressCallback
from .patterns import ScanPatterns, build_scan_patterns

LOGGER = logging.getLogger(__name__)

StatFunction = Callable[[Path], os.stat_result]


def _stat_path(path: Path) -> os.stat_result:
    """Default stat function following symlinks."""

    return path.stat()


def build_file_info(path: Path, root: Path, stat_result: os.stat_result) -> FileInfo:
    """Return a :class:`FileInfo` for ``path`` from an existing stat result.

    Args:
        path: Absolute file path.
        root: Scan root used for the relative path.
        stat_result: Result of ``stat`` on ``path``.

    Returns:
        FileInfo: Immutable metadata record.
    """

    extension = path.suffix.lower()
    return FileInfo(
        path=path,
        relative_path=path.relative_to(root).as_posix(),
        size=stat_result.st_size,
        extension=extension,
        language=LANGUAGE_BY_EXTENSION.get(extension),
        last_modified=datetime.fromtimestamp(stat_result.st_mtime, tz=UTC),
    )


def walk_candidates(root: Path, patterns: ScanPatterns, *, follow_symlinks: bool = False) -> list[Path]:
    """Return sorted, de-duplicated candidate files under ``root``.

    Excluded directories are pruned before descending. When following
    symlinks, each directory is visited once per device and inode.

    Args:
        root: Absolute scan root.
        patterns: Compiled include and exclude matchers.
        follow_symlinks: Descend into symlinked directories when ``True``.

    Returns:
        list[Path]: Absolute candidate paths.
    """

    candidates: set[Path] = set()
    visited: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        current = Path(dirpath)
        if follow_symlinks:
            try:
                info = current.stat()
            except OSError as exc:
                LOGGER.debug("skipping directory path=%s error=%s", current, exc)
                dirnames[:] = []
                continue
            key = (info.st_dev, info.st_ino)
            if key in visited:
                dirnames[:] = []
                continue
            visited.add(key)

        relative_dir = current.relative_to(root)
        dirnames[:] = sorted(name for name in dirnames if not patterns.is_excluded_dir((relative_dir / name).as_posix()))
        for name in filenames:
            if patterns.matches((relative_dir / name).as_posix()):
                candidates.add(current / name)
    return sorted(candidates)


class FileScanner:
    """Scan directory trees into :class:`ScanResult` aggregates.

    The scanner owns a :class:`MetadataCache`; repeated scans within the TTL
    reuse cached metadata without touching the filesystem again.
    """

    def __init__(
        self,
        cache: MetadataCache | None = None,
        *,
        stat_function: StatFunction = _stat_path,
        options: BulkOptions | None = None,
    ) -> None:
        """Create a scanner.

        Args:
            cache: Metadata cache; a fresh instance is created when omitted.
            stat_function: Callable used to stat candidate files.
            options: Batching options for metadata extraction.
        """

        self.cache = cache if cache is not None else MetadataCache()
        self.options = options or BulkOptions()
        self._stat = stat_function

    async def scan(
        self,
        root: Path | str,
        config: ScanConfig | None = None,
        *,
        progress_callback: ProgressCallback | None = None,
        progress_interval: float | None = None,
    ) -> ScanResult:
        """Scan ``root`` and aggregate metadata for every matching file.

        Args:
            root: Directory to scan.
            config: Include, exclude and size policy; defaults apply when omitted.
            progress_callback: Display callback for metadata extraction.
            progress_interval: Minimum seconds between progress redraws.

        Returns:
            ScanResult: Files, totals, languages and skipped paths.
        """

        started = time.perf_counter()
        resolved_config = config or ScanConfig()
        base = Path(root).resolve()
        patterns = build_scan_patterns(resolved_config)
        candidates = await asyncio.to_thread(
            walk_candidates,
            base,
            patterns,
            follow_symlinks=resolved_config.follow_symlinks,
        )

        async def extract(path: Path) -> FileInfo | None:
            return await self.get_file_info(path, base)

        bulk = await process_bulk(
            candidates,
            extract,
            self.options,
            progress_callback=progress_callback,
            progress_interval=progress_interval,
        )

        result = ScanResult()
        max_size = resolved_config.max_file_size
        for outcome in bulk.outcomes:
            if outcome.error is not None:
                LOGGER.debug("skipping file path=%s error=%s", outcome.item, outcome.error)
                result.add_skipped(outcome.item)
                continue
            info = outcome.value
            if info is None:
                continue
            if max_size is not None and info.size > max_size:
                LOGGER.debug("skipping oversized file path=%s size=%d limit=%d", info.path, info.size, max_size)
                result.add_skipped(info.path)
                continue
            result.add_file(info)

        result.duration = time.perf_counter() - started
        LOGGER.debug(
            "scan complete root=%s candidates=%d files=%d skipped=%d",
            base,
            len(candidates),
            result.total_files,
            len(result.skipped_files),
        )
        return result

    async def get_file_info(self, path: Path, root: Path) -> FileInfo | None:
        """Return metadata for ``path`` consulting the cache first.

        Args:
            path: Absolute file path.
            root: Scan root used for the relative path.

        Returns:
            FileInfo | None: Metadata, or ``None`` when ``path`` is not a
            regular file.
        """

        cached = self.cache.get(path)
        if cached is not None:
            relative = path.relative_to(root).as_posix()
            if cached.relative_path == relative:
                return cached
            return replace(cached, relative_path=relative)

        stat_result = await asyncio.to_thread(self._stat, path)
        if not stat.S_ISREG(stat_result.st_mode):
            return None
        info = build_file_info(path, root, stat_result)
        self.cache.put(info)
        return info

    async def read_file_content(self, path: Path | str) -> str:
        """Return the decoded text of ``path``."""

        return await read_file_content(path)

    def clear_cache(self) -> None:
        """Drop every cached metadata entry."""

        self.cache.clear()

    def cleanup_cache(self) -> int:
        """Evict expired cache entries and return how many were removed."""

        return self.cache.cleanup()


async def scan(
    root: Path | str,
    config: ScanConfig | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
    progress_interval: float | None = None,
) -> ScanResult:
    """Scan ``root`` with a throwaway :class:`FileScanner`.

    Args:
        root: Directory to scan.
        config: Include, exclude and size settings.
        progress_callback: Display callback receiving extraction snapshots.
        progress_interval: Minimum seconds between progress redraws.

    Returns:
        ScanResult: Files found under ``root`` plus skipped paths.
    """

    return await FileScanner().scan(
        root,
        config,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
    )


__all__ = ["FileScanner", "StatFunction", "build_file_info", "scan", "walk_candidates"]

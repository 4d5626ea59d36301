# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Group files with identical content by their MD5 digest."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from ..config import BulkOptions
from ..execution import process_bulk
from ..progress import ProgressCallback
from .reader import calculate_file_hash

LOGGER = logging.getLogger(__name__)


async def find_duplicate_files(
    paths: Iterable[Path],
    options: BulkOptions | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
    progress_interval: float | None = None,
) -> dict[str, list[Path]]:
    """Return groups of paths sharing the same content digest.

    Files that cannot be hashed are left out of every group.

    Args:
        paths: Files to compare.
        options: Batching options for the hashing pass.
        progress_callback: Display callback for the hashing pass.
        progress_interval: Minimum seconds between progress redraws.

    Returns:
        dict[str, list[Path]]: Digest to paths, only for digests seen more
        than once. Paths keep their input order.
    """

    result = await process_bulk(
        list(paths),
        calculate_file_hash,
        options,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
    )
    groups: defaultdict[str, list[Path]] = defaultdict(list)
    for outcome in result.outcomes:
        if outcome.error is not None or outcome.value is None:
            LOGGER.debug("hash failed path=%s error=%s", outcome.item, outcome.error)
            continue
        groups[outcome.value].append(outcome.item)
    return {digest: members for digest, members in groups.items() if len(members) > 1}


__all__ = ["find_duplicate_files"]

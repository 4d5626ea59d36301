# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Streaming file content reader.

Small files are read with a single buffered call; files above the large-file
threshold are accumulated from fixed-size chunks. Both paths decode the same
byte sequence, so their text is identical.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections.abc import AsyncIterator
from pathlib import Path

from ..constants import BINARY_SNIFF_BYTES, FALLBACK_ENCODING, LARGE_FILE_THRESHOLD, READ_CHUNK_SIZE
from ..errors import UnreadableFileError

LOGGER = logging.getLogger(__name__)


async def iter_file_chunks(path: Path, *, chunk_size: int = READ_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the content of ``path`` in chunks of at most ``chunk_size`` bytes.

    Each read runs in a worker thread so the event loop stays responsive.

    Args:
        path: File to read.
        chunk_size: Maximum bytes per chunk.

    Yields:
        bytes: Consecutive slices of the file content.
    """

    handle = await asyncio.to_thread(path.open, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(handle.read, chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        await asyncio.to_thread(handle.close)


async def read_file_bytes(
    path: Path,
    *,
    threshold: int = LARGE_FILE_THRESHOLD,
    chunk_size: int = READ_CHUNK_SIZE,
) -> bytes:
    """Return the raw bytes of ``path`` choosing buffered or chunked reads.

    Args:
        path: File to read.
        threshold: Size above which chunked reads are used.
        chunk_size: Chunk size for the streaming path.

    Returns:
        bytes: File content.
    """

    size = (await asyncio.to_thread(path.stat)).st_size
    if size <= threshold:
        return await asyncio.to_thread(path.read_bytes)
    LOGGER.debug("streaming large file path=%s size=%d", path, size)
    buffer = bytearray()
    async for chunk in iter_file_chunks(path, chunk_size=chunk_size):
        buffer.extend(chunk)
    return bytes(buffer)


def decode_content(raw: bytes, path: Path, *, fallback_encoding: str = FALLBACK_ENCODING) -> str:
    """Decode ``raw`` as UTF-8, falling back to a single-byte encoding.

    Args:
        raw: Bytes read from ``path``.
        path: Source path, used for error reporting.
        fallback_encoding: Encoding tried after UTF-8 fails.

    Returns:
        str: Decoded text.

    Raises:
        UnreadableFileError: If both decodings fail.
    """

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        LOGGER.debug("utf-8 decode failed path=%s fallback=%s", path, fallback_encoding)
    try:
        return raw.decode(fallback_encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise UnreadableFileError(path) from exc


async def read_file_content(
    path: Path | str,
    *,
    threshold: int = LARGE_FILE_THRESHOLD,
    chunk_size: int = READ_CHUNK_SIZE,
    fallback_encoding: str = FALLBACK_ENCODING,
) -> str:
    """Return the text content of ``path``.

    Args:
        path: File to read.
        threshold: Size above which chunked reads are used.
        chunk_size: Chunk size for the streaming path.
        fallback_encoding: Encoding tried after UTF-8 fails.

    Returns:
        str: Decoded file content.

    Raises:
        UnreadableFileError: If the file cannot be read or decoded.
    """

    target = Path(path)
    try:
        raw = await read_file_bytes(target, threshold=threshold, chunk_size=chunk_size)
    except OSError as exc:
        raise UnreadableFileError(target) from exc
    return decode_content(raw, target, fallback_encoding=fallback_encoding)


def _read_head(path: Path, size: int) -> bytes:
    """Return up to ``size`` leading bytes of ``path``."""

    with path.open("rb") as handle:
        return handle.read(size)


async def is_binary_file(path: Path) -> bool:
    """Return ``True`` when the first bytes of ``path`` contain a NUL byte.

    Unreadable files are reported as not binary.
    """

    try:
        head = await asyncio.to_thread(_read_head, path, BINARY_SNIFF_BYTES)
    except OSError:
        return False
    return b"\0" in head


async def calculate_file_hash(path: Path, *, chunk_size: int = READ_CHUNK_SIZE) -> str:
    """Return the MD5 hex digest of ``path`` computed over streamed chunks."""

    digest = hashlib.md5(usedforsecurity=False)
    async for chunk in iter_file_chunks(path, chunk_size=chunk_size):
        digest.update(chunk)
    return digest.hexdigest()


async def count_lines(path: Path, *, chunk_size: int = READ_CHUNK_SIZE) -> int:
    """Return the number of newline bytes in ``path`` without decoding it.

    Raises:
        UnreadableFileError: If the file cannot be read.
    """

    total = 0
    try:
        async for chunk in iter_file_chunks(path, chunk_size=chunk_size):
            total += chunk.count(b"\n")
    except OSError as exc:
        raise UnreadableFileError(path) from exc
    return total


__all__ = [
    "calculate_file_hash",
    "count_lines",
    "decode_content",
    "is_binary_file",
    "iter_file_chunks",
    "read_file_bytes",
    "read_file_content",
]

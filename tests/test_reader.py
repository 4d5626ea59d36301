# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the streaming content reader and file helpers."""

from __future__ import annotations

import asyncio
import hashlib
from pathlib import Path

import pytest

from hydro.constants import LARGE_FILE_THRESHOLD
from hydro.errors import UnreadableFileError
from hydro.filesystem import (
    calculate_file_hash,
    count_lines,
    find_duplicate_files,
    is_binary_file,
    iter_file_chunks,
    read_file_content,
)
from hydro.filesystem import reader


def _text_of_size(size: int) -> str:
    line = "héllo wörld\n"
    encoded = len(line.encode("utf-8"))
    repeated = line * (size // encoded + 1)
    data = repeated.encode("utf-8")[:size]
    return data.decode("utf-8", errors="ignore")


@pytest.mark.parametrize("delta", [-1, 0, 1, 4097])
def test_buffered_and_streamed_reads_match_around_threshold(tmp_path: Path, delta: int) -> None:
    text = _text_of_size(LARGE_FILE_THRESHOLD + delta)
    target = tmp_path / "sample.txt"
    target.write_text(text, encoding="utf-8")

    default = asyncio.run(read_file_content(target))
    streamed = asyncio.run(read_file_content(target, threshold=0, chunk_size=4099))
    buffered = asyncio.run(read_file_content(target, threshold=10 * LARGE_FILE_THRESHOLD))

    assert default == streamed == buffered == text


def test_large_files_use_chunked_reads(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "big.txt"
    target.write_text("a" * 100, encoding="utf-8")
    calls: list[int] = []
    original = reader.iter_file_chunks

    def spy(path: Path, *, chunk_size: int):
        calls.append(chunk_size)
        return original(path, chunk_size=chunk_size)

    monkeypatch.setattr(reader, "iter_file_chunks", spy)

    assert asyncio.run(read_file_content(target, threshold=50, chunk_size=16)) == "a" * 100
    assert calls == [16]
    assert asyncio.run(read_file_content(target, threshold=100)) == "a" * 100
    assert calls == [16]


def test_read_falls_back_to_latin1(tmp_path: Path) -> None:
    target = tmp_path / "legacy.txt"
    target.write_bytes(b"caf\xe9")

    assert asyncio.run(read_file_content(target)) == "café"


def test_read_raises_when_every_decoding_fails(tmp_path: Path) -> None:
    target = tmp_path / "bytes.bin"
    target.write_bytes(b"\xff\xfe")

    with pytest.raises(UnreadableFileError) as excinfo:
        asyncio.run(read_file_content(target, fallback_encoding="ascii"))

    assert excinfo.value.path == target
    assert str(target) in str(excinfo.value)


def test_read_missing_file_raises_unreadable(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    with pytest.raises(UnreadableFileError) as excinfo:
        asyncio.run(read_file_content(missing))

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_iter_file_chunks_respects_chunk_size(tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    payload = bytes(range(256)) * 3
    target.write_bytes(payload)

    async def collect() -> list[bytes]:
        return [chunk async for chunk in iter_file_chunks(target, chunk_size=100)]

    chunks = asyncio.run(collect())

    assert all(len(chunk) <= 100 for chunk in chunks)
    assert b"".join(chunks) == payload


def test_is_binary_file(tmp_path: Path) -> None:
    binary = tmp_path / "image.bin"
    binary.write_bytes(b"\x89PNG\x00\x01")
    text = tmp_path / "notes.txt"
    text.write_text("plain text\n", encoding="utf-8")

    assert asyncio.run(is_binary_file(binary)) is True
    assert asyncio.run(is_binary_file(text)) is False
    assert asyncio.run(is_binary_file(tmp_path / "absent")) is False


def test_calculate_file_hash_and_count_lines(tmp_path: Path) -> None:
    target = tmp_path / "lines.txt"
    payload = b"one\ntwo\nthree\n"
    target.write_bytes(payload)

    assert asyncio.run(calculate_file_hash(target, chunk_size=4)) == hashlib.md5(payload).hexdigest()
    assert asyncio.run(count_lines(target, chunk_size=3)) == 3


def test_find_duplicate_files_groups_identical_content(tmp_path: Path) -> None:
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    unique = tmp_path / "c.txt"
    first.write_text("same\n", encoding="utf-8")
    second.write_text("same\n", encoding="utf-8")
    unique.write_text("different\n", encoding="utf-8")

    groups = asyncio.run(find_duplicate_files([first, second, unique, tmp_path / "missing.txt"]))

    assert list(groups.values()) == [[first, second]]

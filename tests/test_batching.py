# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for adaptive batch sizing and the memory governor."""

from __future__ import annotations

import pytest

from hydro.execution import MemoryGovernor, adaptive_batch_size, batch_count, memory_bounded_batch_size, split_batches


@pytest.mark.parametrize(
    ("total", "optimal", "expected"),
    [
        (100_000, 200, 200),
        (1_000, 200, 100),
        (600, 200, 60),
        (5, 200, 50),
        (0, 200, 50),
        (10_000, 20, 20),
    ],
)
def test_adaptive_batch_size(total: int, optimal: int, expected: int) -> None:
    assert adaptive_batch_size(total, optimal) == expected


def test_small_inputs_never_produce_more_batches_than_items() -> None:
    size = adaptive_batch_size(5, 200)

    assert batch_count(5, size) == 1
    assert len(split_batches(list(range(5)), size)) <= 5


def test_memory_bounded_batch_size_clamps_to_ceiling() -> None:
    assert memory_bounded_batch_size(100_000, 200, memory_limit=1_000, average_item_size=100) == 10
    assert memory_bounded_batch_size(100_000, 200, memory_limit=50, average_item_size=100) == 1
    assert memory_bounded_batch_size(100_000, 200, memory_limit=10**9, average_item_size=100) == 200


def test_memory_bounded_batch_size_without_estimate_uses_heuristic() -> None:
    assert memory_bounded_batch_size(1_000, 200, memory_limit=1_000) == 100


def test_split_batches_preserves_order() -> None:
    assert split_batches([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert split_batches([], 3) == []
    with pytest.raises(ValueError):
        split_batches([1], 0)


def test_governor_runs_every_interval() -> None:
    calls: list[int] = []
    governor = MemoryGovernor(reclaim=lambda: calls.append(1), interval=5)

    ran = [governor.after_batch(number) for number in range(1, 11)]

    assert ran == [False] * 4 + [True] + [False] * 4 + [True]
    assert governor.invocations == 2
    assert len(calls) == 2


def test_governor_is_best_effort() -> None:
    def explode() -> None:
        raise RuntimeError("no memory hint today")

    assert MemoryGovernor(reclaim=explode, interval=1).after_batch(1) is False
    assert MemoryGovernor(reclaim=None, interval=1).after_batch(1) is False

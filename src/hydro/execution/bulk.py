# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bounded-concurrency batch processing with per-item failure isolation.

Items are split into ordered batches; batch ``n + 1`` starts only after every
item of batch ``n`` settled. Each batch is split again into chunks of at most
``max_concurrency`` items which run together under :func:`asyncio.gather`.
Outcomes are written into position-indexed slots so the result order always
matches the input order, whatever order items finish in.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..config import BulkOptions
from ..models import BulkOperationResult, FileInfo, ItemOutcome
from ..progress import MemorySampler, ProgressCallback, ProgressTracker, sample_memory
from .batching import MemoryGovernor, batch_count, memory_bounded_batch_size, split_batches

LOGGER = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

Operation = Callable[[ItemT], Awaitable[ResultT] | ResultT]
BatchCallback = Callable[[int, int, int, int], None]


def build_tracker(
    callback: ProgressCallback | None,
    total: int,
    total_batches: int,
    *,
    progress_interval: float | None = None,
    memory_sampler: MemorySampler = sample_memory,
) -> ProgressTracker | None:
    """Return a tracker driving ``callback``, or ``None`` without a callback.

    Args:
        callback: Display callback receiving snapshots.
        total: Number of items the tracker reports against.
        total_batches: Number of batches the tracker reports against.
        progress_interval: Minimum seconds between redraws; the tracker
            default applies when ``None``.
        memory_sampler: Sampler attached to each snapshot.

    Returns:
        ProgressTracker | None: Tracker ready for ``update`` calls.
    """

    if callback is None:
        return None
    if progress_interval is None:
        return ProgressTracker(total, total_batches, callback, memory_sampler=memory_sampler)
    return ProgressTracker(
        total,
        total_batches,
        callback,
        update_interval=progress_interval,
        memory_sampler=memory_sampler,
    )


class BulkProcessor(Generic[ItemT, ResultT]):
    """Drive an operation over many items in ordered, concurrency-bounded batches."""

    def __init__(
        self,
        options: BulkOptions | None = None,
        *,
        governor: MemoryGovernor | None = None,
        progress_callback: ProgressCallback | None = None,
        progress_interval: float | None = None,
        on_batch: BatchCallback | None = None,
        memory_sampler: MemorySampler = sample_memory,
    ) -> None:
        """Configure the processor.

        Args:
            options: Validated batching options; defaults apply when omitted.
            governor: Memory governor consulted after each batch.
            progress_callback: Display callback driven by a progress tracker.
            progress_interval: Minimum seconds between progress redraws.
            on_batch: Raw ``(processed, total, batch, batch_count)`` hook.
            memory_sampler: Sampler used by the progress tracker.
        """

        self.options = options or BulkOptions()
        self.governor = governor or MemoryGovernor(interval=self.options.reclaim_interval)
        self.progress_callback = progress_callback
        self.progress_interval = progress_interval
        self.on_batch = on_batch
        self._memory_sampler = memory_sampler

    def effective_batch_size(self, total: int) -> int:
        """Return the batch size used for ``total`` items."""

        if not self.options.adaptive:
            return self.options.batch_size
        return memory_bounded_batch_size(
            total,
            self.options.batch_size,
            memory_limit=self.options.memory_limit,
            average_item_size=self.options.average_item_size,
        )

    def effective_concurrency(self, batch_size: int) -> int:
        """Return the chunk size, never larger than ``batch_size``."""

        return max(1, min(self.options.max_concurrency, batch_size))

    async def run(
        self,
        items: Iterable[ItemT],
        operation: Operation[ItemT, ResultT],
    ) -> BulkOperationResult[ItemT, ResultT]:
        """Process ``items`` with ``operation`` and collect every outcome.

        Args:
            items: Work items; consumed once.
            operation: Coroutine function or plain callable applied per item.

        Returns:
            BulkOperationResult: Ordered outcomes, one per input item.
        """

        sequence = list(items)
        total = len(sequence)
        size = self.effective_batch_size(total)
        concurrency = self.effective_concurrency(size)
        batches = split_batches(list(enumerate(sequence)), size)
        total_batches = batch_count(total, size)
        tracker = build_tracker(
            self.progress_callback,
            total,
            total_batches,
            progress_interval=self.progress_interval,
            memory_sampler=self._memory_sampler,
        )
        LOGGER.debug(
            "bulk start items=%d batches=%d batch_size=%d concurrency=%d",
            total,
            total_batches,
            size,
            concurrency,
        )

        started = time.perf_counter()
        slots: list[ItemOutcome[ItemT, ResultT] | None] = [None] * total
        processed = 0
        for batch_number, batch in enumerate(batches, start=1):
            for chunk in split_batches(batch, concurrency):
                for outcome in await self._run_chunk(chunk, operation):
                    slots[outcome.index] = outcome
            processed += len(batch)
            self._after_batch(tracker, processed, total, batch_number, total_batches)
        if tracker is not None:
            tracker.complete()

        duration = time.perf_counter() - started
        result = BulkOperationResult(
            outcomes=[outcome for outcome in slots if outcome is not None],
            total=total,
            duration=duration,
            batch_size=size,
            batch_count=total_batches,
        )
        LOGGER.debug(
            "bulk done processed=%d/%d failed=%d duration=%.3fs",
            result.processed,
            total,
            result.failed,
            duration,
        )
        return result

    async def _run_chunk(
        self,
        chunk: Sequence[tuple[int, ItemT]],
        operation: Operation[ItemT, ResultT],
    ) -> list[ItemOutcome[ItemT, ResultT]]:
        """Run one chunk together; on cancellation settle every sibling first.

        Args:
            chunk: ``(index, item)`` pairs started together.
            operation: Operation applied per item.

        Returns:
            list[ItemOutcome]: Outcomes in chunk order.
        """

        tasks = [asyncio.ensure_future(self._run_item(index, item, operation)) for index, item in chunk]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def _after_batch(
        self,
        tracker: ProgressTracker | None,
        processed: int,
        total: int,
        batch_number: int,
        total_batches: int,
    ) -> None:
        """Report a finished batch and give the memory governor its turn."""

        if tracker is not None:
            tracker.update(processed, batch_number)
        if self.on_batch is not None:
            self.on_batch(processed, total, batch_number, total_batches)
        if self.options.enable_memory_management:
            self.governor.after_batch(batch_number)

    async def _run_item(
        self,
        index: int,
        item: ItemT,
        operation: Operation[ItemT, ResultT],
    ) -> ItemOutcome[ItemT, ResultT]:
        """Return the item's outcome, capturing an ``Exception`` as its error."""

        try:
            value = await self._invoke(item, operation)
        except Exception as exc:  # noqa: BLE001
            LOGGER.debug("bulk item failed index=%d error=%r", index, exc)
            return ItemOutcome(index=index, item=item, error=exc)
        return ItemOutcome(index=index, item=item, value=value)

    async def _invoke(self, item: ItemT, operation: Operation[ItemT, ResultT]) -> ResultT:
        """Call ``operation`` and await its result under the item timeout."""

        result = operation(item)
        if not inspect.isawaitable(result):
            return result
        if self.options.item_timeout is None:
            return await result
        return await asyncio.wait_for(result, self.options.item_timeout)


async def process_all(
    items: Iterable[ItemT],
    operation: Operation[ItemT, ResultT],
    *,
    batch_size: int,
    max_concurrency: int,
) -> list[ItemOutcome[ItemT, ResultT]]:
    """Run ``operation`` over ``items`` using literal batch and chunk sizes.

    Args:
        items: Work items.
        operation: Coroutine function or plain callable applied per item.
        batch_size: Items per sequential batch.
        max_concurrency: Items started together within a batch.

    Returns:
        list[ItemOutcome]: Outcome ``i`` describes input item ``i``.
    """

    options = BulkOptions(batch_size=batch_size, max_concurrency=max_concurrency, adaptive=False)
    processor: BulkProcessor[ItemT, ResultT] = BulkProcessor(options)
    return (await processor.run(items, operation)).outcomes


async def process_bulk(
    items: Iterable[ItemT],
    operation: Operation[ItemT, ResultT],
    options: BulkOptions | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
    progress_interval: float | None = None,
    on_batch: BatchCallback | None = None,
) -> BulkOperationResult[ItemT, ResultT]:
    """Run ``operation`` over ``items`` with adaptive, memory-aware batching.

    Args:
        items: Work items.
        operation: Coroutine function or plain callable applied per item.
        options: Batching options including the optional memory ceiling.
        progress_callback: Display callback receiving progress snapshots.
        progress_interval: Minimum seconds between progress redraws.
        on_batch: Raw per-batch progress hook.

    Returns:
        BulkOperationResult: Ordered outcomes with timing metadata.
    """

    processor: BulkProcessor[ItemT, ResultT] = BulkProcessor(
        options,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
        on_batch=on_batch,
    )
    return await processor.run(items, operation)


async def process_files_with_streaming(
    files: Sequence[FileInfo],
    processor: Operation[FileInfo, ResultT],
    stream_processor: Operation[FileInfo, ResultT] | None = None,
    options: BulkOptions | None = None,
    *,
    progress_callback: ProgressCallback | None = None,
    progress_interval: float | None = None,
    memory_sampler: MemorySampler = sample_memory,
) -> BulkOperationResult[FileInfo, ResultT]:
    """Process ``files`` routing large ones to ``stream_processor``.

    Files above ``options.large_file_threshold`` run in a second pass with a
    quarter-size batch. Outcomes keep the positions of ``files``.

    Args:
        files: File records to process.
        processor: Operation applied to regular files.
        stream_processor: Operation applied to large files; when ``None`` all
            files go through ``processor``.
        options: Batching options.
        progress_callback: Display callback; both passes feed one tracker so
            snapshots stay cumulative over all of ``files``.
        progress_interval: Minimum seconds between progress redraws.
        memory_sampler: Sampler attached to progress snapshots.

    Returns:
        BulkOperationResult: Merged, input-ordered outcomes.
    """

    resolved = options or BulkOptions()
    if stream_processor is None:
        whole: BulkProcessor[FileInfo, ResultT] = BulkProcessor(
            resolved,
            progress_callback=progress_callback,
            progress_interval=progress_interval,
            memory_sampler=memory_sampler,
        )
        return await whole.run(files, processor)

    small = [index for index, info in enumerate(files) if info.size <= resolved.large_file_threshold]
    large = [index for index, info in enumerate(files) if info.size > resolved.large_file_threshold]
    large_options = resolved.model_copy(update={"batch_size": max(1, resolved.batch_size // 4)})
    small_pass: BulkProcessor[FileInfo, ResultT] = BulkProcessor(resolved)
    large_pass: BulkProcessor[FileInfo, ResultT] = BulkProcessor(large_options)
    small_batches = batch_count(len(small), small_pass.effective_batch_size(len(small)))
    large_batches = batch_count(len(large), large_pass.effective_batch_size(len(large)))
    tracker = build_tracker(
        progress_callback,
        len(files),
        small_batches + large_batches,
        progress_interval=progress_interval,
        memory_sampler=memory_sampler,
    )
    if tracker is not None:
        small_pass.on_batch = _offset_progress(tracker, items_done=0, batches_done=0)
        large_pass.on_batch = _offset_progress(tracker, items_done=len(small), batches_done=small_batches)

    small_result = await small_pass.run([files[index] for index in small], processor)
    large_result = await large_pass.run([files[index] for index in large], stream_processor)
    if tracker is not None:
        tracker.complete()
    return BulkOperationResult.merge((small_result, large_result), order=small + large)


def _offset_progress(tracker: ProgressTracker, *, items_done: int, batches_done: int) -> BatchCallback:
    """Return a batch hook reporting one pass's progress on a shared tracker.

    Args:
        tracker: Tracker covering every pass.
        items_done: Items settled by earlier passes.
        batches_done: Batches finished by earlier passes.

    Returns:
        BatchCallback: Hook adding the offsets before updating ``tracker``.
    """

    def report(processed: int, _total: int, batch: int, _batches: int) -> None:
        tracker.update(items_done + processed, batches_done + batch)

    return report


__all__ = [
    "BatchCallback",
    "BulkProcessor",
    "Operation",
    "build_tracker",
    "process_all",
    "process_bulk",
    "process_files_with_streaming",
]

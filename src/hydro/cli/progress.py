# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render :class:`ProgressInfo` snapshots on a Rich progress bar."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import TracebackType

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from ..models import ProgressInfo
from ..progress import format_rate


@dataclass(slots=True)
class RichProgressDisplay:
    """Progress callback drawing batch progress with :mod:`rich.progress`.

    Use as a context manager around the bulk run and pass the instance as the
    ``progress_callback``.
    """

    console: Console
    description: str = "Processing"
    enabled: bool = True
    progress_factory: type[Progress] = Progress
    progress: Progress | None = field(init=False, default=None)
    task_id: TaskID | None = field(init=False, default=None)
    updates: int = field(init=False, default=0)

    def __enter__(self) -> RichProgressDisplay:
        """Start the live progress bar when the display is enabled."""

        if not self.enabled:
            return self
        self.progress = self.progress_factory(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=self._determine_bar_width(self.console)),
            TextColumn("{task.completed}/{task.total}"),
            TimeElapsedColumn(),
            TextColumn("{task.fields[status]}", justify="right"),
            console=self.console,
            transient=True,
        )
        self.task_id = self.progress.add_task(self.description, total=None, status="")
        self.progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Stop the live bar and forget the task."""

        if self.progress is not None:
            self.progress.stop()
        self.progress = None
        self.task_id = None

    def __call__(self, info: ProgressInfo) -> None:
        """Advance the bar to ``info``."""

        self.updates += 1
        if self.progress is None or self.task_id is None:
            return
        status = f"batch {info.current_batch}/{info.total_batches} · {format_rate(info.rate)} · {info.memory_usage}"
        self.progress.update(self.task_id, completed=info.current, total=info.total, status=status)

    @staticmethod
    def _determine_bar_width(console: Console) -> int:
        """Return a bar width that leaves room for the text columns."""

        width = getattr(console.size, "width", 100)
        available = max(10, width - 60)
        return max(20, int(available * 0.8))


__all__ = ["RichProgressDisplay"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models shared by the scanner, the bulk processor and progress reporting."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeAlias, TypeVar, cast

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Describe a discovered file.

    Attributes:
        path: Absolute filesystem path.
        relative_path: POSIX path relative to the scan root.
        size: Size in bytes.
        extension: Lower-cased suffix including the dot, empty when absent.
        language: Language inferred from ``extension`` or ``None``.
        last_modified: Modification time as an aware UTC datetime.
    """

    path: Path
    relative_path: str
    size: int
    extension: str
    language: str | None
    last_modified: datetime

    def to_dict(self) -> dict[str, JsonValue]:
        """Return a JSON-friendly representation of the file record.

        Returns:
            dict[str, JsonValue]: Mapping suitable for ``json.dumps``.
        """

        return {
            "path": str(self.path),
            "relative_path": self.relative_path,
            "size": self.size,
            "extension": self.extension,
            "language": self.language,
            "last_modified": self.last_modified.isoformat(),
        }


@dataclass(slots=True)
class ScanResult:
    """Aggregate outcome of a scan."""

    files: list[FileInfo] = field(default_factory=list)
    total_files: int = 0
    total_size: int = 0
    languages: set[str] = field(default_factory=set)
    skipped_files: list[Path] = field(default_factory=list)
    duration: float = 0.0

    def add_file(self, info: FileInfo) -> None:
        """Record ``info`` and update the running totals."""

        self.files.append(info)
        self.total_files = len(self.files)
        self.total_size += info.size
        if info.language:
            self.languages.add(info.language)

    def add_skipped(self, path: Path) -> None:
        """Record ``path`` as skipped."""

        self.skipped_files.append(path)

    def to_dict(self) -> dict[str, JsonValue]:
        """Return a JSON-friendly representation with sorted languages."""

        return {
            "files": [info.to_dict() for info in self.files],
            "total_files": self.total_files,
            "total_size": self.total_size,
            "languages": sorted(self.languages),
            "skipped_files": [str(path) for path in self.skipped_files],
            "duration": self.duration,
        }


@dataclass(frozen=True, slots=True)
class LanguageStats:
    """Per-language file count, byte total and share of the total size."""

    files: int
    size: int
    percentage: float


@dataclass(frozen=True, slots=True)
class ItemOutcome(Generic[ItemT, ResultT]):
    """Outcome of processing one item, bound to its input position.

    Attributes:
        index: Position of ``item`` in the input sequence.
        item: The original input item.
        value: Result produced by the operation when it succeeded.
        error: Exception raised by the operation when it failed.
    """

    index: int
    item: ItemT
    value: ResultT | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the operation completed without raising."""

        return self.error is None


@dataclass(slots=True)
class BulkOperationResult(Generic[ItemT, ResultT]):
    """Ordered per-item outcomes of a bulk operation.

    ``outcomes[i]`` always describes input item ``i`` regardless of the order
    in which items finished.
    """

    outcomes: list[ItemOutcome[ItemT, ResultT]] = field(default_factory=list)
    total: int = 0
    duration: float = 0.0
    batch_size: int = 0
    batch_count: int = 0

    @property
    def results(self) -> list[ResultT]:
        """Return successful values in input order."""

        return [cast(ResultT, outcome.value) for outcome in self.outcomes if outcome.ok]

    @property
    def errors(self) -> list[tuple[ItemT, BaseException]]:
        """Return ``(item, error)`` pairs for failed items in input order."""

        return [(outcome.item, outcome.error) for outcome in self.outcomes if outcome.error is not None]

    @property
    def processed(self) -> int:
        """Return the number of settled items."""

        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        """Return the number of items that produced a value."""

        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        """Return the number of items that recorded an error."""

        return self.processed - self.succeeded

    @classmethod
    def merge(
        cls,
        parts: Sequence[BulkOperationResult[ItemT, ResultT]],
        *,
        order: Sequence[int],
    ) -> BulkOperationResult[ItemT, ResultT]:
        """Combine partial results, restoring original positions.

        Args:
            parts: Partial results whose outcomes are concatenated in order.
            order: Original index for each concatenated outcome.

        Returns:
            BulkOperationResult: Result whose outcomes are re-indexed to
            their original positions.
        """

        slots: list[ItemOutcome[ItemT, ResultT] | None] = [None] * len(order)
        flattened = [outcome for part in parts for outcome in part.outcomes]
        for original_index, outcome in zip(order, flattened, strict=True):
            slots[original_index] = ItemOutcome(
                index=original_index,
                item=outcome.item,
                value=outcome.value,
                error=outcome.error,
            )
        return cls(
            outcomes=[outcome for outcome in slots if outcome is not None],
            total=sum(part.total for part in parts),
            duration=sum(part.duration for part in parts),
            batch_size=max((part.batch_size for part in parts), default=0),
            batch_count=sum(part.batch_count for part in parts),
        )


@dataclass(frozen=True, slots=True)
class MemoryUsage:
    """Point-in-time memory sample for the current process."""

    used: int
    total: int
    percentage: float
    formatted: str


@dataclass(frozen=True, slots=True)
class ProgressInfo:
    """Snapshot of bulk progress.

    Optional fields are ``None`` when they cannot be computed: percentage and
    ETA require a known total, ETA also requires a positive rate.
    """

    current: int
    total: int | None
    current_batch: int
    total_batches: int
    percentage: float | None
    elapsed: float
    rate: float
    eta: float | None
    memory_usage: str

    @property
    def batch_percentage(self) -> float:
        """Return finished batches as a share of ``total_batches``."""

        if self.total_batches <= 0:
            return 0.0
        return min(100.0, self.current_batch / self.total_batches * 100)


__all__ = [
    "BulkOperationResult",
    "FileInfo",
    "ItemOutcome",
    "JsonValue",
    "LanguageStats",
    "MemoryUsage",
    "ProgressInfo",
    "ScanResult",
]

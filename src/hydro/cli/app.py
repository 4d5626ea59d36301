# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the scan and bulk commands."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..config import BulkOptions, ScanConfig
from ..constants import DEFAULT_BATCH_SIZE, DEFAULT_MAX_CONCURRENCY, DEFAULT_MEMORY_LIMIT, DEFAULT_PROGRESS_INTERVAL
from ..discovery import FileScanner, get_language_stats
from ..execution import process_files_with_streaming
from ..filesystem import count_lines, find_duplicate_files, read_file_content
from ..logging import configure_logging, info, ok, section, warn
from ..models import BulkOperationResult, FileInfo, ScanResult
from ..progress import format_bytes, format_duration
from ..runtime.console import detect_tty, get_console_manager
from .progress import RichProgressDisplay
from .shared import cli_errors, run_async

app = typer.Typer(
    name="hydro",
    help="Discover files and process them in memory-bounded batches.",
    no_args_is_help=True,
    add_completion=False,
)

PathArgument = Annotated[
    Path,
    typer.Argument(exists=True, file_okay=False, dir_okay=True, resolve_path=True, help="Directory to scan."),
]
IncludeOption = Annotated[
    list[str] | None,
    typer.Option("--include", "-i", help="Include pattern; repeat for several. Defaults to every file."),
]
ExcludeOption = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-e", help="Exclude pattern added to the default deny-list."),
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Emit debug diagnostics on stderr.")]


@dataclass(slots=True)
class BulkSummary:
    """Outcome of the ``bulk`` command."""

    scan: ScanResult
    processed: BulkOperationResult[FileInfo, int] | None = None
    duplicates: dict[str, list[Path]] = field(default_factory=dict)


@app.command("scan")
def scan_command(
    path: PathArgument,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    max_file_size: Annotated[
        int | None,
        typer.Option("--max-file-size", min=0, help="Skip files larger than this many bytes."),
    ] = None,
    follow_symlinks: Annotated[bool, typer.Option("--follow-symlinks", help="Descend into symlinked directories.")] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Print the scan result as JSON.")] = False,
    debug: DebugOption = False,
) -> None:
    """Scan PATH and summarise the discovered files."""

    configure_logging(debug=debug)
    with cli_errors():
        config = ScanConfig(
            include=include or [],
            exclude=exclude or [],
            max_file_size=max_file_size,
            follow_symlinks=follow_symlinks,
        )
        result = run_async(FileScanner().scan(path, config))

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    _render_scan(result)


@app.command("bulk")
def bulk_command(
    path: PathArgument,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    batch_size: Annotated[int, typer.Option("--batch-size", min=1, help="Files per sequential batch.")] = DEFAULT_BATCH_SIZE,
    max_concurrency: Annotated[
        int,
        typer.Option("--max-concurrency", min=1, help="Files processed together within a batch."),
    ] = DEFAULT_MAX_CONCURRENCY,
    memory_limit: Annotated[
        str,
        typer.Option("--memory-limit", help="Peak memory budget per batch, e.g. 512MB or 1GB."),
    ] = DEFAULT_MEMORY_LIMIT,
    progress_interval: Annotated[
        float,
        typer.Option("--progress-interval", min=0.0, help="Seconds between progress redraws."),
    ] = DEFAULT_PROGRESS_INTERVAL,
    hash_files: Annotated[bool, typer.Option("--hash", help="Hash files and report duplicate groups.")] = False,
    debug: DebugOption = False,
) -> None:
    """Scan PATH, then read (or hash) every file in bounded batches."""

    configure_logging(debug=debug)
    with cli_errors():
        options = BulkOptions(batch_size=batch_size, max_concurrency=max_concurrency, memory_limit=memory_limit)
        config = ScanConfig(include=include or [], exclude=exclude or [])
        info(
            f"Configuration: batch size={options.batch_size}, concurrency={options.max_concurrency}, "
            f"memory limit={format_bytes(options.memory_limit or 0)}",
        )
        summary = run_async(_run_bulk(path, config, options, progress_interval=progress_interval, hash_files=hash_files))

    _render_bulk(summary, root=path)


async def _run_bulk(
    root: Path,
    config: ScanConfig,
    options: BulkOptions,
    *,
    progress_interval: float,
    hash_files: bool,
) -> BulkSummary:
    """Scan ``root`` then count lines or hash every discovered file."""

    scanner = FileScanner(options=options)
    scan_result = await scanner.scan(root, config)
    summary = BulkSummary(scan=scan_result)
    if not scan_result.files:
        return summary

    tuned = options.model_copy(
        update={"average_item_size": max(1, scan_result.total_size // scan_result.total_files)},
    )
    console = get_console_manager().get(color=detect_tty(), stderr=True)
    display = RichProgressDisplay(console, description="Hashing" if hash_files else "Reading", enabled=detect_tty())
    with display:
        if hash_files:
            summary.duplicates = await find_duplicate_files(
                [item.path for item in scan_result.files],
                tuned,
                progress_callback=display,
                progress_interval=progress_interval,
            )
        else:
            summary.processed = await process_files_with_streaming(
                scan_result.files,
                _count_decoded_lines,
                _count_streamed_lines,
                tuned,
                progress_callback=display,
                progress_interval=progress_interval,
            )
    return summary


async def _count_decoded_lines(item: FileInfo) -> int:
    """Count newlines in the decoded text of ``item``."""

    return (await read_file_content(item.path)).count("\n")


async def _count_streamed_lines(item: FileInfo) -> int:
    """Count newline bytes of ``item`` without decoding it."""

    return await count_lines(item.path)


def _render_scan(result: ScanResult) -> None:
    """Print the language table and scan totals."""

    if not result.files:
        warn("No files found to process.")
    else:
        table = Table(title="Languages")
        table.add_column("Language")
        table.add_column("Files", justify="right")
        table.add_column("Size", justify="right")
        table.add_column("Share", justify="right")
        stats = get_language_stats(result.files)
        for language, entry in sorted(stats.items(), key=lambda pair: pair[1].size, reverse=True):
            table.add_row(language, str(entry.files), format_bytes(entry.size), f"{entry.percentage:.1f}%")
        get_console_manager().get(color=detect_tty()).print(table)
    ok(
        f"Scanned {result.total_files} files ({format_bytes(result.total_size)}) "
        f"in {format_duration(result.duration)}",
    )
    if result.skipped_files:
        warn(f"Skipped {len(result.skipped_files)} files")


def _render_bulk(summary: BulkSummary, *, root: Path) -> None:
    """Print processing totals, failures and duplicate groups."""

    scan_result = summary.scan
    if not scan_result.files:
        warn("No files found to process.")
        return
    info(f"Found {scan_result.total_files} files ({format_bytes(scan_result.total_size)})")
    if scan_result.skipped_files:
        warn(f"Skipped {len(scan_result.skipped_files)} files during the scan")

    processed = summary.processed
    if processed is not None:
        ok(
            f"Processed {processed.succeeded}/{processed.total} files, "
            f"{sum(processed.results)} lines in {format_duration(processed.duration)}",
        )
        for item, error in processed.errors:
            warn(f"Failed {item.relative_path}: {error}")

    if summary.duplicates:
        section("Duplicate files")
        for digest, members in summary.duplicates.items():
            info(f"{digest[:12]} ({len(members)} files)")
            for member in members:
                typer.echo(f"  {member.relative_to(root).as_posix()}")
    elif processed is None:
        ok("No duplicate files found")


__all__ = ["app"]

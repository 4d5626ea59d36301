# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the hydro command-line interface."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from hydro.cli.app import app
from hydro.cli.progress import RichProgressDisplay
from hydro.cli.shared import cli_errors
from hydro.errors import ConfigError
from hydro.models import ProgressInfo

runner = CliRunner()


def _project(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "a.ts").write_text("const a = 1;\nconst b = 2;\n", encoding="utf-8")
    (tmp_path / "src" / "copy.ts").write_text("const a = 1;\nconst b = 2;\n", encoding="utf-8")
    (tmp_path / "src" / "b.min.js").write_text("x", encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("y", encoding="utf-8")
    return tmp_path


def test_scan_json_output(tmp_path: Path) -> None:
    root = _project(tmp_path)

    result = runner.invoke(app, ["scan", str(root), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [entry["relative_path"] for entry in payload["files"]] == ["src/a.ts", "src/copy.ts"]
    assert payload["total_files"] == 2
    assert payload["languages"] == ["typescript"]


def test_scan_summary_reports_skipped_files(tmp_path: Path) -> None:
    root = _project(tmp_path)
    (root / "huge.txt").write_text("z" * 500, encoding="utf-8")

    result = runner.invoke(app, ["scan", str(root), "--max-file-size", "100", "--exclude", "copy.ts"])

    assert result.exit_code == 0, result.output
    assert "Scanned 1 files" in result.output
    assert "Skipped 1 files" in result.output
    assert "typescript" in result.output


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

    assert result.exit_code == 2


def test_bulk_counts_lines(tmp_path: Path) -> None:
    root = _project(tmp_path)

    result = runner.invoke(app, ["bulk", str(root), "--batch-size", "1", "--max-concurrency", "1"])

    assert result.exit_code == 0, result.output
    assert "batch size=1" in result.output
    assert "Processed 2/2 files, 4 lines" in result.output


def test_bulk_hash_reports_duplicates(tmp_path: Path) -> None:
    root = _project(tmp_path)

    result = runner.invoke(app, ["bulk", str(root), "--hash"])

    assert result.exit_code == 0, result.output
    assert "Duplicate files" in result.output
    assert "src/a.ts" in result.output
    assert "src/copy.ts" in result.output


def test_bulk_rejects_malformed_memory_limit(tmp_path: Path) -> None:
    root = _project(tmp_path)

    result = runner.invoke(app, ["bulk", str(root), "--memory-limit", "plenty"])

    assert result.exit_code == 1
    assert "Invalid memory limit format: plenty" in result.output


def test_bulk_with_no_files_warns(tmp_path: Path) -> None:
    result = runner.invoke(app, ["bulk", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "No files found to process." in result.output


def test_rich_progress_display_tracks_snapshots() -> None:
    console = Console(file=io.StringIO(), force_terminal=False, width=100)
    snapshot = ProgressInfo(
        current=3,
        total=6,
        current_batch=1,
        total_batches=2,
        percentage=50.0,
        elapsed=1.0,
        rate=3.0,
        eta=1.0,
        memory_usage="1.0 MB / 1.0 GB (0.1%)",
    )

    with RichProgressDisplay(console, description="Reading") as display:
        display(snapshot)
        assert display.progress is not None
        task = display.progress.tasks[0]
        assert (task.completed, task.total) == (3, 6)
        assert "batch 1/2" in task.fields["status"]

    assert display.progress is None
    assert display.updates == 1


def test_disabled_progress_display_ignores_snapshots() -> None:
    display = RichProgressDisplay(Console(file=io.StringIO()), enabled=False)

    with display:
        display(
            ProgressInfo(
                current=1,
                total=None,
                current_batch=1,
                total_batches=1,
                percentage=None,
                elapsed=0.0,
                rate=0.0,
                eta=None,
                memory_usage="",
            ),
        )

    assert display.progress is None
    assert display.updates == 1


def test_cli_errors_maps_pipeline_errors_to_exit_one() -> None:
    with pytest.raises(typer.Exit) as excinfo, cli_errors():
        raise ConfigError("bad memory limit")

    assert excinfo.value.exit_code == 1


def test_cli_errors_lets_unrelated_errors_through() -> None:
    with pytest.raises(RuntimeError, match="boom"), cli_errors():
        raise RuntimeError("boom")

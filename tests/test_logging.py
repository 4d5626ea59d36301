# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console helpers and diagnostic logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from hydro.logging import configure_logging, fail, info, ok, section, warn


def test_configure_logging_installs_single_rich_handler() -> None:
    logger = configure_logging(debug=True)
    configure_logging(debug=True)

    handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG

    assert configure_logging(debug=False).level == logging.WARNING


def test_console_helpers_print_plain_text_without_colour(capsys) -> None:
    section("Results", use_color=False)
    info("scanning", use_color=False)
    ok("done", use_color=False)
    warn("careful", use_color=False)
    fail("broken", use_color=False)

    captured = capsys.readouterr().out
    assert "--- Results ---" in captured
    for message in ("scanning", "done", "careful", "broken"):
        assert message in captured
    assert "\x1b[" not in captured

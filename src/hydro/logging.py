# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console messages and diagnostic logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

from .runtime.console import detect_tty, get_console_manager

_PACKAGE_LOGGER = "hydro"


def _print_line(msg: str, *, style: str | None, use_color: bool | None = None) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Render a section header to delineate console output blocks.

    Args:
        title: Section title displayed to the user.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled)
    if color_enabled:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(msg, style="cyan", use_color=use_color)


def ok(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", use_color=use_color)


def warn(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(msg, style="yellow", use_color=use_color)


def fail(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(msg, style="red", use_color=use_color)


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Route ``hydro`` diagnostics through a Rich handler on standard error.

    Repeated calls replace the handler installed by a previous call.

    Args:
        debug: Emit ``DEBUG`` records when ``True``; ``WARNING`` otherwise.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    console = get_console_manager().get(color=detect_tty(), stderr=True)
    logger.addHandler(RichHandler(console=console, show_path=debug, rich_tracebacks=debug))
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger


__all__ = ["configure_logging", "fail", "info", "ok", "section", "warn"]

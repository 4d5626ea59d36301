# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console management utilities."""

from __future__ import annotations

import sys
from functools import cache
from typing import Literal

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by colour and stream settings."""

    def __init__(self) -> None:
        """Start with an empty console cache."""

        self._consoles: dict[tuple[bool, bool, bool], Console] = {}

    def get(self, *, color: bool, stderr: bool = False) -> Console:
        """Return a Rich console configured for ``color`` output.

        Consoles resolve ``sys.stdout``/``sys.stderr`` at print time, so a
        cached console follows stream redirection.

        Args:
            color: ``True`` when ANSI colour output should be enabled.
            stderr: ``True`` to write to standard error.

        Returns:
            Console: Cached or newly constructed console.
        """

        tty = detect_tty()
        key = (color, stderr, tty)
        if key not in self._consoles:
            color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
                "auto" if color and tty else None
            )
            self._consoles[key] = Console(
                color_system=color_system,
                force_terminal=tty,
                no_color=not (color and tty),
                stderr=stderr,
                soft_wrap=True,
            )
        return self._consoles[key]


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]

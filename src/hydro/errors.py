# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by the scanning and bulk-processing pipeline."""

from __future__ import annotations

from pathlib import Path


class HydroError(Exception):
    """Base class for errors surfaced to callers of the hydro pipeline."""


class ConfigError(HydroError):
    """Raised when configuration input is structurally invalid."""


class UnreadableFileError(HydroError):
    """Raised when file content cannot be read or decoded."""

    def __init__(self, path: Path | str) -> None:
        """Initialise the error for ``path``.

        Args:
            path: Filesystem path that could not be read.
        """

        self.path = Path(path)
        super().__init__(f"Unable to read file: {self.path}")


__all__ = ["ConfigError", "HydroError", "UnreadableFileError"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (errors, async bridging)."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from typing import TypeVar

import typer
from pydantic import ValidationError

from ..errors import HydroError
from ..logging import fail

T = TypeVar("T")


@contextmanager
def cli_errors() -> Iterator[None]:
    """Translate pipeline errors into a failure line and a non-zero exit.

    Raises:
        typer.Exit: With status 1 after printing the failure.
    """

    try:
        yield
    except HydroError as exc:
        fail(str(exc))
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            fail(f"Invalid option {location}: {error['msg']}")
        raise typer.Exit(code=1) from exc


def run_async(coroutine: Coroutine[object, object, T]) -> T:
    """Drive ``coroutine`` to completion on a fresh event loop."""

    return asyncio.run(coroutine)


__all__ = ["cli_errors", "run_async"]

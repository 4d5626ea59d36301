# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile include and exclude patterns into pathspec matchers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Final, cast

from pathspec import GitIgnoreSpec

from ..config import ScanConfig
from ..constants import DEFAULT_EXCLUDE_PATTERNS

_WILDCARD_CHARS: Final[frozenset[str]] = frozenset("*?[")


def expand_include_pattern(pattern: str) -> list[str]:
    """Return the glob patterns an include entry stands for.

    A bare directory name (no wildcard and no dot) expands to every file
    below it; any other pattern passes through unchanged.

    Args:
        pattern: Raw include entry such as ``"src"`` or ``"**/*.ts"``.

    Returns:
        list[str]: One or two glob patterns.
    """

    stripped = pattern.strip().rstrip("/")
    if not stripped or "." in stripped or _WILDCARD_CHARS.intersection(stripped):
        return [pattern.strip()]
    return [f"{stripped}/**/*", f"{stripped}/*"]


def build_include_patterns(include: Sequence[str]) -> list[str]:
    """Return expanded include patterns, empty when every file is wanted."""

    expanded: list[str] = []
    for pattern in include:
        for candidate in expand_include_pattern(pattern):
            if candidate and candidate not in expanded:
                expanded.append(candidate)
    return expanded


def _anchor(pattern: str) -> str:
    # Globs resolve against the scan root; gitignore lines without a slash
    # would otherwise match at any depth.
    if pattern.startswith(("/", "!")):
        return pattern
    return f"/{pattern}"


def _compile(lines: Iterable[str]) -> GitIgnoreSpec:
    """Compile ``lines`` into a gitignore-style matcher."""

    from_lines = cast("Callable[[Iterable[str]], GitIgnoreSpec]", GitIgnoreSpec.from_lines)
    return from_lines(list(lines))


_DEFAULT_SPEC: Final[GitIgnoreSpec] = _compile(DEFAULT_EXCLUDE_PATTERNS)


@dataclass(frozen=True, slots=True)
class ScanPatterns:
    """Compiled matchers deciding which root-relative paths are candidates.

    Attributes:
        include_spec: Anchored include matcher, ``None`` to accept every file.
        exclude_spec: Gitignore-style matcher for user excludes.
        default_spec: Matcher for the fixed deny-list. It is compiled apart
            from ``exclude_spec`` so a negated user line cannot re-admit a
            denied path.
    """

    include_spec: GitIgnoreSpec | None
    exclude_spec: GitIgnoreSpec
    default_spec: GitIgnoreSpec = field(default_factory=lambda: _DEFAULT_SPEC)

    def is_excluded_dir(self, relative: PurePosixPath | str) -> bool:
        """Return ``True`` when the directory at ``relative`` must be pruned."""

        return self._denied(f"{PurePosixPath(relative).as_posix()}/")

    def is_excluded(self, relative: PurePosixPath | str) -> bool:
        """Return ``True`` when the file at ``relative`` matches an exclude."""

        return self._denied(PurePosixPath(relative).as_posix())

    def is_included(self, relative: PurePosixPath | str) -> bool:
        """Return ``True`` when the file at ``relative`` matches an include."""

        if self.include_spec is None:
            return True
        return self.include_spec.match_file(PurePosixPath(relative).as_posix())

    def matches(self, relative: PurePosixPath | str) -> bool:
        """Return ``True`` when ``relative`` is included and not excluded."""

        return self.is_included(relative) and not self.is_excluded(relative)

    def _denied(self, path: str) -> bool:
        """Return ``True`` when the deny-list or a user exclude matches ``path``."""

        return self.default_spec.match_file(path) or self.exclude_spec.match_file(path)


def build_scan_patterns(config: ScanConfig) -> ScanPatterns:
    """Compile ``config`` include and exclude entries.

    Args:
        config: Scan configuration.

    Returns:
        ScanPatterns: Matchers used by the filesystem walk.
    """

    include = build_include_patterns(config.include)
    include_spec = _compile(_anchor(pattern) for pattern in include) if include else None
    user_excludes = [pattern.strip() for pattern in config.exclude if pattern.strip()]
    return ScanPatterns(include_spec=include_spec, exclude_spec=_compile(user_excludes))


__all__ = [
    "ScanPatterns",
    "build_include_patterns",
    "build_scan_patterns",
    "expand_include_pattern",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render offenses in the compact ``path:line:column`` console format."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

import typer

from ccru.linting.base import split_lines
from ccru.logging import ok
from ccru.models import Offense

Echo = Callable[[str], None]

ALL_OK_MESSAGE: Final[str] = "ccru: All OK - No violations found"


def format_summary(path: str, offense: Offense) -> str:
    """Return the one-line summary for ``offense``.

    Args:
        path: Path shown for the file.
        offense: Offense being reported.

    Returns:
        str: ``<path>:<line>:<column>: <S>: <cop>: <message>``.
    """

    location = offense.location
    return (
        f"{path}:{location.line}:{location.column}: "
        f"{offense.severity.initial}: {offense.cop_name}: {offense.message}"
    )


def format_marker(line_content: str, column: int, length: int) -> str:
    """Return the caret line underlining an offense.

    Args:
        line_content: Raw source line including its terminator.
        column: 1-based column of the offense.
        length: Number of characters to underline.

    Returns:
        str: Empty for column one, otherwise padded carets truncated to the
        raw line length.
    """

    if column == 1:
        return ""
    marker = f"{' ' * (column - 1)}{'^' * length}"
    return marker[: len(line_content)]


class OffenseReporter:
    """Write offenses and their source context through an ``echo`` callable."""

    def __init__(
        self,
        *,
        root: Path | None = None,
        echo: Echo | None = None,
        use_emoji: bool = False,
        use_color: bool | None = None,
    ) -> None:
        """Create a reporter.

        Args:
            root: Directory relative paths are resolved against when re-reading
                source lines. Defaults to the current working directory.
            echo: Callable receiving each output line; defaults to :func:`typer.echo`.
            use_emoji: Whether the success message may include emoji.
            use_color: Explicit colour preference for the success message;
                ``None`` follows TTY detection.
        """

        self._root = root
        self._echo: Echo = echo or typer.echo
        self._use_emoji = use_emoji
        self._use_color = use_color

    def report(self, path: str, offenses: Iterable[Offense]) -> None:
        """Print every offense found in ``path``.

        Args:
            path: File path as discovered (relative to the repository root).
            offenses: Offenses to print in order.
        """

        source_lines: Sequence[str] | None = None
        loaded = False
        for offense in offenses:
            self._echo(format_summary(path, offense))
            if not loaded:
                source_lines = self._read_source(path)
                loaded = True
            if source_lines is None:
                continue
            line_content = _line_at(source_lines, offense.location.line)
            if line_content is None:
                continue
            self._echo(line_content.rstrip())
            self._echo(format_marker(line_content, offense.location.column, offense.location.length))

    def report_success(self) -> None:
        """Announce a run without violations."""

        ok(ALL_OK_MESSAGE, use_emoji=self._use_emoji, use_color=self._use_color)

    def _read_source(self, path: str) -> tuple[str, ...] | None:
        """Return the current lines of ``path`` or ``None`` when unreadable."""

        candidate = Path(path)
        if self._root is not None and not candidate.is_absolute():
            candidate = self._root / candidate
        try:
            return split_lines(candidate.read_bytes().decode("utf-8", errors="replace"))
        except OSError:
            return None


def _line_at(lines: Sequence[str], number: int) -> str | None:
    if 1 <= number <= len(lines):
        return lines[number - 1]
    return None


__all__ = ["ALL_OK_MESSAGE", "Echo", "OffenseReporter", "format_marker", "format_summary"]

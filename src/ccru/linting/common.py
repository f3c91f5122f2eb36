# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Category-independent checks shared by the in-process engines."""

from __future__ import annotations

import re
from typing import Final

from ccru.models import Offense, OffenseLocation
from ccru.severity import Severity

_TRAILING_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+$")
_END_OF_FILE_CONTENT: Final[str] = "End of file"

TRAILING_WHITESPACE_RULE: Final[str] = "trailing_whitespace"
MISSING_FINAL_NEWLINE_RULE: Final[str] = "missing_final_newline"


def build_offense(
    *,
    rule: str,
    message: str,
    cop_name: str,
    severity: Severity,
    line_content: str,
    line_number: int,
) -> Offense:
    """Return an offense anchored at column one of ``line_number``.

    Args:
        rule: Symbolic rule identifier.
        message: Human-readable explanation.
        cop_name: Display identifier.
        severity: Severity of the offense.
        line_content: Raw source line for display.
        line_number: 1-based line number.

    Returns:
        Offense: Immutable offense record.
    """

    return Offense(
        rule=rule,
        message=message,
        severity=severity,
        cop_name=cop_name,
        line_content=line_content,
        location=OffenseLocation(line=line_number, column=1, length=0),
    )


def check_trailing_whitespace(line_content: str, line_number: int) -> Offense | None:
    """Flag a line whose last character before the terminator is a space.

    Tabs and carriage returns at the end of a line are not reported.

    Args:
        line_content: Raw line including its terminator.
        line_number: 1-based line number.

    Returns:
        Offense | None: Offense for the line, or ``None`` when clean.
    """

    if _TRAILING_WHITESPACE.search(line_content) is None:
        return None
    if line_content.replace("\n", "")[-1:] != " ":
        return None
    return build_offense(
        rule=TRAILING_WHITESPACE_RULE,
        message="Remove trailing whitespace",
        cop_name="TrailingWhitespace",
        severity=Severity.WARNING,
        line_content=line_content,
        line_number=line_number,
    )


def check_final_newline(content: str, line_count: int) -> Offense | None:
    """Flag non-empty content that does not end with a newline.

    Args:
        content: Complete file content.
        line_count: Number of lines in ``content``.

    Returns:
        Offense | None: Offense on the last line, or ``None`` when clean.
    """

    if not content or content.endswith("\n"):
        return None
    return build_offense(
        rule=MISSING_FINAL_NEWLINE_RULE,
        message="Add final newline at end of file",
        cop_name="MissingFinalNewline",
        severity=Severity.WARNING,
        line_content=_END_OF_FILE_CONTENT,
        line_number=line_count,
    )


__all__ = [
    "MISSING_FINAL_NEWLINE_RULE",
    "TRAILING_WHITESPACE_RULE",
    "build_offense",
    "check_final_newline",
    "check_trailing_whitespace",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels shared by the in-process engines and RuboCop."""

    ERROR = "error"
    WARNING = "warning"
    CONVENTION = "convention"
    REFACTOR = "refactor"
    INFO = "info"
    FATAL = "fatal"

    @property
    def initial(self) -> str:
        """Return the single uppercase letter used in offense reports.

        Returns:
            str: First letter of the severity label, uppercased.
        """

        return self.value[0].upper()


_SEVERITY_ALIASES: Final[dict[str, Severity]] = {severity.value: severity for severity in Severity}


def coerce_severity(label: object, default: Severity = Severity.WARNING) -> Severity:
    """Return a :class:`Severity` for ``label`` falling back to ``default``.

    Args:
        label: Severity label reported by a linter, usually a string.
        default: Severity returned when ``label`` is not recognised.

    Returns:
        Severity: Normalised severity value.
    """

    if isinstance(label, Severity):
        return label
    if isinstance(label, str):
        return _SEVERITY_ALIASES.get(label.strip().lower(), default)
    return default


__all__ = ["Severity", "coerce_severity"]

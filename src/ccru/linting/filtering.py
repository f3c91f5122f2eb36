# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restrict whole-file offenses to the lines touched by a change."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from ccru.models import Offense


def filter_offenses(offenses: Iterable[Offense], changed_lines: Collection[int]) -> list[Offense]:
    """Keep offenses located on ``changed_lines`` preserving their order.

    Args:
        offenses: Offenses produced by a whole-file analysis.
        changed_lines: 1-based line numbers touched by the change.

    Returns:
        list[Offense]: Offenses whose line is in ``changed_lines``.
    """

    return [offense for offense in offenses if offense.location.line in changed_lines]


__all__ = ["filter_offenses"]

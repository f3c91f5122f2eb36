# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for ``git diff --name-status`` and zero-context unified diffs."""

from __future__ import annotations

import re
from collections.abc import Iterable, MutableMapping
from typing import Final, NamedTuple

from ccru.categories import file_category
from ccru.models import ChangeDescriptor, ChangeKind

_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(r"^@@ [^+]*\+(\d+)(?:,(\d+))? @@")
_TARGET_PREFIX: Final[str] = "+++ b/"
_RENAME_PREFIX: Final[str] = "R"
_ADDED: Final[str] = "A"
_MODIFIED_CODES: Final[frozenset[str]] = frozenset({"M", _RENAME_PREFIX})


class Hunk(NamedTuple):
    """New-file span of a single unified diff hunk."""

    new_start: int
    new_count: int


def parse_status_line(line: str) -> tuple[str, str] | None:
    """Split a ``--name-status`` line into ``(code, path)``.

    Rename lines (``R100<TAB>old<TAB>new``) collapse to ``("R", new)``.

    Args:
        line: Raw output line.

    Returns:
        tuple[str, str] | None: Status code and path, or ``None`` when the line
        does not carry both.
    """

    parts = line.strip().split("\t")
    code = parts[0]
    if code.startswith(_RENAME_PREFIX) and len(parts) == 3:
        return _RENAME_PREFIX, parts[2]
    if not code or len(parts) < 2 or not parts[1]:
        return None
    return code, parts[1]


def build_change_descriptor(code: str, path: str) -> ChangeDescriptor | None:
    """Return the descriptor for a status ``code`` or ``None`` to exclude the file.

    Args:
        code: Status code from ``--name-status`` output.
        path: Path of the file in the new tree.

    Returns:
        ChangeDescriptor | None: Descriptor for added, modified and renamed
        files with a supported extension.
    """

    category = file_category(path)
    if category is None:
        return None
    if code == _ADDED:
        return ChangeDescriptor(path=path, kind=ChangeKind.NEW, category=category)
    if code in _MODIFIED_CODES:
        return ChangeDescriptor(path=path, kind=ChangeKind.MODIFIED, changed_lines=frozenset(), category=category)
    return None


def parse_name_status(output: str) -> dict[str, ChangeDescriptor]:
    """Build descriptors from ``git diff --name-status`` output.

    Args:
        output: Complete command output.

    Returns:
        dict[str, ChangeDescriptor]: Descriptors keyed by path in output order.
    """

    files: dict[str, ChangeDescriptor] = {}
    for raw in output.splitlines():
        if not raw.strip():
            continue
        parsed = parse_status_line(raw)
        if parsed is None:
            continue
        descriptor = build_change_descriptor(*parsed)
        if descriptor is not None:
            files[descriptor.path] = descriptor
    return files


def parse_hunk_header(line: str) -> Hunk | None:
    """Return the new-file span described by a hunk header line.

    Args:
        line: A diff line such as ``@@ -10,2 +12,3 @@``.

    Returns:
        Hunk | None: Parsed span, or ``None`` for non-header lines. A header
        without a count describes exactly one line.
    """

    match = _HUNK_HEADER.match(line)
    if match is None:
        return None
    start, count = match.groups()
    return Hunk(new_start=int(start), new_count=int(count) if count is not None else 1)


def hunk_lines(hunk: Hunk) -> range:
    """Return the new-file line numbers covered by ``hunk``.

    A zero count marks a pure deletion and covers no lines.
    """

    if hunk.new_count <= 0:
        return range(0)
    return range(hunk.new_start, hunk.new_start + hunk.new_count)


def parse_diff_hunks(diff_output: str | Iterable[str], targets: Iterable[str]) -> dict[str, set[int]]:
    """Collect changed line numbers per target file from a ``-U0`` diff.

    Args:
        diff_output: Unified diff text, or an iterable of its lines.
        targets: Paths whose hunks should be collected; others are ignored.

    Returns:
        dict[str, set[int]]: Changed lines for every requested target.
    """

    changed: MutableMapping[str, set[int]] = {path: set() for path in targets}
    lines = diff_output.splitlines() if isinstance(diff_output, str) else diff_output
    current: str | None = None
    for line in lines:
        if line.startswith(_TARGET_PREFIX):
            current = line[len(_TARGET_PREFIX) :].strip()
            continue
        hunk = parse_hunk_header(line)
        if hunk is None or current is None or current not in changed:
            continue
        changed[current].update(hunk_lines(hunk))
    return dict(changed)


__all__ = [
    "Hunk",
    "build_change_descriptor",
    "hunk_lines",
    "parse_diff_hunks",
    "parse_hunk_header",
    "parse_name_status",
    "parse_status_line",
]

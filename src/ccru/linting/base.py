# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared primitives for the in-process line-based engines.

An engine owns an ordered table of :class:`LineRule` entries. For every
inspected line the table is walked in order and the first rule that matches
(and is not suppressed) produces the single table offense for that line.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import cached_property

from ccru.models import Offense
from ccru.severity import Severity

from .common import build_offense, check_final_newline, check_trailing_whitespace


def split_lines(content: str) -> tuple[str, ...]:
    """Split ``content`` on ``\\n`` keeping line terminators.

    Only ``\\n`` terminates a line, so ``\\r`` characters stay part of the
    line text. A trailing segment without a terminator is still a line.

    Args:
        content: Full file content.

    Returns:
        tuple[str, ...]: Lines including their terminators.
    """

    if not content:
        return ()
    segments = content.split("\n")
    lines = [f"{segment}\n" for segment in segments[:-1]]
    if segments[-1]:
        lines.append(segments[-1])
    return tuple(lines)


@dataclass(frozen=True)
class SourceDocument:
    """Immutable view over the lines of one file being scanned.

    Prefix state used by contextual heuristics is computed lazily once per
    document, so engines never keep per-file state on themselves.
    """

    lines: tuple[str, ...]

    @classmethod
    def from_content(cls, content: str) -> SourceDocument:
        """Build a document from raw file content."""

        return cls(lines=split_lines(content))

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str | None:
        """Return the 1-based line ``number`` or ``None`` when out of range."""

        if 1 <= number <= len(self.lines):
            return self.lines[number - 1]
        return None

    @cached_property
    def block_comment_flags(self) -> tuple[bool, ...]:
        """Return, per line, whether it sits inside a ``/* ... */`` block.

        A line opening with ``/*`` enters the block; a line ending with ``*/``
        leaves it after that line.
        """

        flags: list[bool] = []
        in_block = False
        for line in self.lines:
            stripped = line.strip()
            if stripped.startswith("/*"):
                in_block = True
            flags.append(in_block)
            if stripped.endswith("*/"):
                in_block = False
        return tuple(flags)

    @cached_property
    def open_literal_flags(self) -> tuple[bool, ...]:
        """Return, per line, whether preceding lines left a ``{`` or ``[`` open.

        The flag for a line depends only on the lines before it. Each kind of
        delimiter turns the flag on when its depth reaches exactly one and off
        when the depth returns to zero.
        """

        flags: list[bool] = []
        brace_depth = bracket_depth = 0
        in_object = in_array = False
        for line in self.lines:
            flags.append(in_object or in_array)
            for char in line:
                if char == "{":
                    brace_depth += 1
                    in_object = True if brace_depth == 1 else in_object
                elif char == "}":
                    brace_depth -= 1
                    in_object = False if brace_depth == 0 else in_object
                elif char == "[":
                    bracket_depth += 1
                    in_array = True if bracket_depth == 1 else in_array
                elif char == "]":
                    bracket_depth -= 1
                    in_array = False if bracket_depth == 0 else in_array
        return tuple(flags)


@dataclass(frozen=True, slots=True)
class LineContext:
    """A single line of a :class:`SourceDocument` under inspection."""

    document: SourceDocument
    number: int

    @property
    def text(self) -> str:
        """Return the raw line including its terminator."""

        return self.document.lines[self.number - 1]

    @property
    def stripped(self) -> str:
        """Return the line without surrounding whitespace."""

        return self.text.strip()

    @property
    def index(self) -> int:
        """Return the 0-based position of the line."""

        return self.number - 1

    def following_lines(self) -> tuple[str, ...]:
        """Return every line after this one."""

        return self.document.lines[self.number :]


LinePredicate = Callable[[LineContext], bool]


def matches(pattern: re.Pattern[str]) -> LinePredicate:
    """Return a predicate searching ``pattern`` anywhere in the raw line."""

    def _predicate(ctx: LineContext) -> bool:
        return pattern.search(ctx.text) is not None

    return _predicate


@dataclass(frozen=True, slots=True)
class LineRule:
    """Entry of an ordered rule table.

    Attributes:
        name: Symbolic rule identifier reported as :attr:`Offense.rule`.
        predicate: Callable deciding whether the rule applies to a line.
        message: Human-readable explanation of the offense.
        cop_name: Display identifier shown in reports.
        severity: Severity of the offense.
        suppress: Optional callable that vetoes a match; a vetoed rule falls
            through to the next rule in the table.
    """

    name: str
    predicate: LinePredicate
    message: str
    cop_name: str
    severity: Severity
    suppress: LinePredicate | None = None

    def applies_to(self, ctx: LineContext) -> bool:
        """Return whether the rule matches ``ctx`` and is not suppressed."""

        if not self.predicate(ctx):
            return False
        return self.suppress is None or not self.suppress(ctx)

    def offense(self, line_content: str, line_number: int) -> Offense:
        """Build the offense reported for ``line_number``."""

        return build_offense(
            rule=self.name,
            message=self.message,
            cop_name=self.cop_name,
            severity=self.severity,
            line_content=line_content,
            line_number=line_number,
        )


RuleTable = tuple[LineRule, ...]


def first_matching_rule(table: Iterable[LineRule], ctx: LineContext) -> LineRule | None:
    """Return the earliest rule in ``table`` applying to ``ctx``."""

    for rule in table:
        if rule.applies_to(ctx):
            return rule
    return None


class RuleEngine(ABC):
    """Abstract line-oriented engine evaluating an ordered rule table."""

    #: Ordered rules; earlier entries take precedence.
    rules: RuleTable = ()

    def lint_full(self, content: str) -> list[Offense]:
        """Scan every line of ``content``.

        Args:
            content: Complete file content.

        Returns:
            list[Offense]: Line-ascending offenses, including the final
            newline check.
        """

        document = SourceDocument.from_content(content)
        offenses = list(self._scan(document, range(1, len(document) + 1)))
        final_newline = check_final_newline(content, len(document))
        if final_newline is not None:
            offenses.append(final_newline)
        return offenses

    def lint_filtered(self, content: str, changed_lines: Iterable[int]) -> list[Offense]:
        """Scan only the 1-based ``changed_lines`` of ``content``.

        Args:
            content: Complete file content; unchanged lines still provide context.
            changed_lines: Line numbers to inspect. Numbers outside the file are
                ignored.

        Returns:
            list[Offense]: Line-ascending offenses located on changed lines only.
        """

        document = SourceDocument.from_content(content)
        wanted = sorted(number for number in set(changed_lines) if document.line(number) is not None)
        return list(self._scan(document, wanted))

    def _scan(self, document: SourceDocument, numbers: Iterable[int]) -> Iterator[Offense]:
        """Yield table and trailing-whitespace offenses for ``numbers``."""

        for number in numbers:
            ctx = LineContext(document=document, number=number)
            if self.should_check(ctx):
                rule = first_matching_rule(self.rules, ctx)
                if rule is not None:
                    yield rule.offense(ctx.text, number)
            whitespace = check_trailing_whitespace(ctx.text, number)
            if whitespace is not None:
                yield whitespace

    @abstractmethod
    def should_check(self, ctx: LineContext) -> bool:
        """Return whether the rule table should be evaluated for ``ctx``."""


__all__ = [
    "LineContext",
    "LinePredicate",
    "LineRule",
    "RuleEngine",
    "RuleTable",
    "SourceDocument",
    "first_matching_rule",
    "matches",
    "split_lines",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the ccru package."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ccru.severity import Severity, coerce_severity


class FileCategory(str, Enum):
    """Linting engine families selected by file extension."""

    RUBY = "ruby"
    JAVASCRIPT = "javascript"
    ERB = "erb"


class ChangeKind(str, Enum):
    """Describe how a file changed relative to the diff base."""

    NEW = "new"
    MODIFIED = "modified"


class ChangeDescriptor(BaseModel):
    """Describe a single changed file and the lines touched by the change.

    New files carry ``changed_lines=None`` meaning the whole file is linted.
    Modified files always carry a set, which may be empty when the diff
    produced no hunks (for example a pure rename).
    """

    model_config = ConfigDict(frozen=True)

    path: str
    kind: ChangeKind
    changed_lines: frozenset[int] | None = None
    category: FileCategory

    @model_validator(mode="after")
    def _check_lines_match_kind(self) -> ChangeDescriptor:
        """Ensure ``changed_lines`` agrees with ``kind``.

        Returns:
            ChangeDescriptor: The validated descriptor.

        Raises:
            ValueError: If a new file carries lines or a modified file lacks them.
        """

        if self.kind is ChangeKind.NEW and self.changed_lines is not None:
            raise ValueError("new files must not carry a changed-line set")
        if self.kind is ChangeKind.MODIFIED and self.changed_lines is None:
            raise ValueError("modified files require a changed-line set")
        return self

    @property
    def is_new(self) -> bool:
        """Return whether the file should be linted in full.

        Returns:
            bool: ``True`` when the descriptor represents an added file.
        """

        return self.kind is ChangeKind.NEW


ChangeSet = dict[str, ChangeDescriptor]


class OffenseLocation(BaseModel):
    """Position of an offense inside a file."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)
    length: int = Field(default=0, ge=0)


class Offense(BaseModel):
    """Standardise offenses returned by every engine into a common schema."""

    model_config = ConfigDict(frozen=True)

    rule: str
    message: str
    severity: Severity
    cop_name: str
    line_content: str = ""
    location: OffenseLocation

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> Severity:
        """Normalise severity labels such as RuboCop's ``convention``.

        Args:
            value: Raw severity supplied by an engine or analyzer payload.

        Returns:
            Severity: Normalised severity value.
        """

        return coerce_severity(value)


class FileLintResult(BaseModel):
    """Outcome of linting a single file."""

    model_config = ConfigDict(frozen=True)

    path: str
    offenses: tuple[Offense, ...] = ()
    failed: bool = False

    @property
    def has_problems(self) -> bool:
        """Return whether the file contributes to a failing exit status.

        Returns:
            bool: ``True`` when offenses were found or the analysis failed.
        """

        return self.failed or bool(self.offenses)


class DispatchReport(BaseModel):
    """Aggregate results for a full dispatcher run."""

    model_config = ConfigDict(frozen=True)

    results: tuple[FileLintResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[FileLintResult]) -> DispatchReport:
        """Build a report from an iterable of per-file results.

        Args:
            results: Per-file results in processing order.

        Returns:
            DispatchReport: Report wrapping the supplied results.
        """

        return cls(results=tuple(results))

    @property
    def exit_status(self) -> int:
        """Return the process exit status for the run.

        Returns:
            int: ``1`` when any file has problems, otherwise ``0``.
        """

        return 1 if any(result.has_problems for result in self.results) else 0


__all__ = [
    "ChangeDescriptor",
    "ChangeKind",
    "ChangeSet",
    "DispatchReport",
    "FileCategory",
    "FileLintResult",
    "Offense",
    "OffenseLocation",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run RuboCop as a black-box analyzer and normalise its JSON report."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ccru.config import DEFAULT_RUBOCOP_COMMAND
from ccru.logging import warn
from ccru.models import Offense, OffenseLocation
from ccru.process import CommandOptions, run_command

_RUBOCOP_ARGS: Final[tuple[str, ...]] = ("--format", "json", "--force-exclusion", "--stdin")


class AnalyzerError(RuntimeError):
    """Raised when the analyzer output cannot be interpreted."""

    def __init__(self, path: str, reason: str) -> None:
        """Record the file being analysed and why analysis failed.

        Args:
            path: File whose analysis failed.
            reason: Short description of the failure.
        """

        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@runtime_checkable
class AnalyzerBackend(Protocol):
    """Request/response contract for the external analyzer."""

    def analyze(self, path: str, content: str) -> str:
        """Return the raw JSON report for ``content`` analysed as ``path``.

        Args:
            path: File path used by the analyzer for configuration lookup.
            content: Source text supplied on standard input.

        Returns:
            str: Raw analyzer output.
        """


class RubocopCommandBackend:
    """Invoke ``rubocop --format json --stdin <path>`` as a subprocess."""

    def __init__(self, command: Sequence[str] = DEFAULT_RUBOCOP_COMMAND, *, root: Path | None = None) -> None:
        """Create a backend running ``command`` from ``root``.

        Args:
            command: Executable and leading arguments, e.g. ``("bundle", "exec", "rubocop")``.
            root: Working directory for the analyzer process.
        """

        self._command = tuple(command)
        self._root = root

    def analyze(self, path: str, content: str) -> str:
        """Run RuboCop and return its stdout regardless of the exit status.

        A missing executable yields an empty string, which the caller treats
        as an unparsable report.
        """

        options = CommandOptions(cwd=self._root, capture_output=True, check=False, input_text=content)
        try:
            completed = run_command([*self._command, *_RUBOCOP_ARGS, path], options=options)
        except OSError as exc:
            warn(f"ccru: failed to run {' '.join(self._command)}\n{exc}")
            return ""
        return completed.stdout or ""


class _ReportLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)
    length: int = Field(default=0, ge=0)


class _ReportOffense(BaseModel):
    model_config = ConfigDict(extra="ignore")

    severity: str
    message: str
    cop_name: str
    location: _ReportLocation


class _ReportFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    offenses: list[_ReportOffense] = Field(default_factory=list)


class _Report(BaseModel):
    model_config = ConfigDict(extra="ignore")

    files: list[_ReportFile] = Field(default_factory=list)


def parse_rubocop_report(path: str, payload: str) -> list[Offense]:
    """Convert a RuboCop JSON report into offenses for its first file.

    Args:
        path: File the report belongs to, used in error messages.
        payload: Raw JSON emitted by RuboCop.

    Returns:
        list[Offense]: Offenses in report order; empty when the report lists
        no files.

    Raises:
        AnalyzerError: If ``payload`` is not JSON or does not match the
            expected shape.
    """

    try:
        report = _Report.model_validate_json(payload)
    except ValidationError as exc:
        raise AnalyzerError(path, "unparsable rubocop json") from exc
    if not report.files:
        return []
    return [
        Offense(
            rule=entry.cop_name,
            message=entry.message,
            severity=entry.severity,
            cop_name=entry.cop_name,
            location=OffenseLocation(
                line=entry.location.line,
                column=entry.location.column,
                length=entry.location.length,
            ),
        )
        for entry in report.files[0].offenses
    ]


class RubocopAnalyzer:
    """Analyse Ruby files with RuboCop through an :class:`AnalyzerBackend`."""

    def __init__(self, backend: AnalyzerBackend) -> None:
        self._backend = backend

    def analyze(self, path: str, content: str) -> list[Offense]:
        """Return every offense RuboCop reports for ``content``.

        Args:
            path: File path passed to RuboCop for configuration lookup.
            content: Source text analysed.

        Returns:
            list[Offense]: Offenses for the whole file.

        Raises:
            AnalyzerError: If the analyzer output cannot be parsed.
        """

        return parse_rubocop_report(path, self._backend.analyze(path, content))


__all__ = [
    "AnalyzerBackend",
    "AnalyzerError",
    "RubocopAnalyzer",
    "RubocopCommandBackend",
    "parse_rubocop_report",
]

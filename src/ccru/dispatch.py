# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Route changed files to the right engine and aggregate the outcome."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from ccru.categories import file_category
from ccru.linting.filtering import filter_offenses
from ccru.linting.registry import engine_for
from ccru.linting.rubocop import AnalyzerError, RubocopAnalyzer
from ccru.logging import warn
from ccru.models import (
    ChangeDescriptor,
    ChangeKind,
    ChangeSet,
    DispatchReport,
    FileCategory,
    FileLintResult,
    Offense,
)
from ccru.reporting import OffenseReporter


def change_set_for_files(paths: Iterable[str | Path], *, root: Path | None = None) -> ChangeSet:
    """Build a change set treating every existing, supported path as new.

    Args:
        paths: Explicit file paths supplied by the user.
        root: Directory relative paths are checked against.

    Returns:
        ChangeSet: New-file descriptors in the given order; missing and
        unsupported paths are dropped.
    """

    change_set: ChangeSet = {}
    for raw in paths:
        path = str(raw)
        category = file_category(path)
        if category is None or not _resolve(path, root).is_file():
            continue
        change_set[path] = ChangeDescriptor(path=path, kind=ChangeKind.NEW, category=category)
    return change_set


def _resolve(path: str, root: Path | None) -> Path:
    candidate = Path(path)
    if root is None or candidate.is_absolute():
        return candidate
    return root / candidate


class Dispatcher:
    """Lint each changed file with the engine matching its category.

    Files are processed one at a time in change-set order. A failure in one
    file never stops the others from being linted and reported.
    """

    def __init__(
        self,
        *,
        analyzer: RubocopAnalyzer,
        reporter: OffenseReporter,
        root: Path | None = None,
    ) -> None:
        """Create a dispatcher.

        Args:
            analyzer: External analyzer used for Ruby files.
            reporter: Reporter receiving offenses as each file completes.
            root: Directory relative paths are read from; defaults to the
                current working directory.
        """

        self._analyzer = analyzer
        self._reporter = reporter
        self._root = root

    def run(self, change_set: Mapping[str, ChangeDescriptor]) -> DispatchReport:
        """Lint every file in ``change_set``.

        Args:
            change_set: Descriptors keyed by path in processing order.

        Returns:
            DispatchReport: Per-file results and the aggregate exit status.
        """

        results: list[FileLintResult] = []
        for path, descriptor in change_set.items():
            result = self.lint_file(path, descriptor)
            if result is None:
                continue
            if result.offenses:
                self._reporter.report(path, result.offenses)
            results.append(result)
        report = DispatchReport.from_results(results)
        if report.exit_status == 0:
            self._reporter.report_success()
        return report

    def run_files(self, paths: Iterable[str | Path]) -> DispatchReport:
        """Fully lint an explicit list of files, bypassing diff resolution."""

        return self.run(change_set_for_files(paths, root=self._root))

    def lint_file(self, path: str, descriptor: ChangeDescriptor) -> FileLintResult | None:
        """Lint a single file according to its change kind.

        Args:
            path: File path relative to the dispatcher root.
            descriptor: Change descriptor for the file.

        Returns:
            FileLintResult | None: Result for the file, or ``None`` when the file
            was skipped (unreadable, or modified with no changed lines).
        """

        if descriptor.kind is ChangeKind.MODIFIED and not descriptor.changed_lines:
            return None
        content = self._read(path)
        if content is None:
            return None
        if descriptor.category is FileCategory.RUBY:
            return self._analyze(path, descriptor, content)
        engine = engine_for(descriptor.category)
        if engine is None:
            return None
        if descriptor.changed_lines is None:
            offenses = engine.lint_full(content)
        else:
            offenses = engine.lint_filtered(content, descriptor.changed_lines)
        return _result(path, offenses)

    def _analyze(self, path: str, descriptor: ChangeDescriptor, content: str) -> FileLintResult:
        """Run the external analyzer, filtering to changed lines when needed."""

        try:
            offenses = self._analyzer.analyze(path, content)
        except AnalyzerError:
            warn(f"ccru: failed to parse rubocop json for {path}")
            return FileLintResult(path=path, failed=True)
        if descriptor.changed_lines is not None:
            offenses = filter_offenses(offenses, descriptor.changed_lines)
        return _result(path, offenses)

    def _read(self, path: str) -> str | None:
        """Return the content of ``path`` or ``None`` when it cannot be read."""

        try:
            return _resolve(path, self._root).read_bytes().decode("utf-8", errors="replace")
        except OSError:
            return None


def _result(path: str, offenses: Iterable[Offense]) -> FileLintResult:
    return FileLintResult(path=path, offenses=tuple(offenses))


__all__ = ["Dispatcher", "change_set_for_files"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the files and lines touched by a git change."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from ccru.categories import extension_globs
from ccru.logging import warn
from ccru.models import ChangeDescriptor, ChangeKind, ChangeSet
from ccru.process import CommandOptions, run_command

from .diff import parse_diff_hunks, parse_name_status

BASE_REF_CANDIDATES: Final[tuple[str, ...]] = ("origin/main", "origin/master", "main", "master")
FALLBACK_BASE_REF: Final[str] = "HEAD~1"
_STAGED_SCOPE: Final[tuple[str, ...]] = ("--staged",)
_VERIFY_ENV: Final[dict[str, str]] = {"LC_ALL": "C"}


@runtime_checkable
class GitClient(Protocol):
    """Narrow interface over the git executable used by the resolver."""

    def capture(self, args: Sequence[str]) -> str:
        """Run ``git <args>`` and return stdout, warning on failure.

        Args:
            args: Arguments passed after ``git``.

        Returns:
            str: Captured standard output, possibly empty.
        """

    def verify_ref(self, ref: str) -> bool:
        """Return whether ``ref`` names an existing revision.

        Args:
            ref: Revision to verify.

        Returns:
            bool: ``True`` when git accepts the revision.
        """


class SubprocessGitClient:
    """Execute git commands through :func:`ccru.process.run_command`."""

    def __init__(self, root: Path, *, executable: str = "git") -> None:
        """Create a client running commands inside ``root``.

        Args:
            root: Working directory for git invocations.
            executable: Name or path of the git executable.
        """

        self._executable = executable
        self._options = CommandOptions(cwd=root, capture_output=True, check=False)

    def capture(self, args: Sequence[str]) -> str:
        """Run ``git <args>`` returning stdout even when the command fails.

        Args:
            args: Arguments passed after the git executable.

        Returns:
            str: Captured standard output, or an empty string when git is missing.
        """

        cmd = [self._executable, *args]
        try:
            completed = run_command(cmd, options=self._options)
        except OSError as exc:
            warn(f"ccru: failed to run {' '.join(cmd)}\n{exc}")
            return ""
        if completed.returncode != 0:
            warn(f"ccru: failed to run {' '.join(cmd)}\n{completed.stderr or ''}".rstrip())
        return completed.stdout or ""

    def verify_ref(self, ref: str) -> bool:
        """Return whether ``git rev-parse --verify`` accepts ``ref``.

        Any failure to run the check counts as a missing reference.
        """

        options = self._options.with_overrides(env=_verification_env())
        try:
            completed = run_command([self._executable, "rev-parse", "--verify", "--quiet", ref], options=options)
        except OSError:
            return False
        return completed.returncode == 0


def _verification_env() -> dict[str, str]:
    """Return the process environment with a C locale forced."""

    return {**os.environ, **_VERIFY_ENV}


class GitChangeSetResolver:
    """Build a :data:`ChangeSet` from two git diff invocations.

    The first invocation lists changed files with their status; the second
    collects zero-context hunks for modified files so that only touched lines
    are linted.
    """

    def __init__(self, client: GitClient) -> None:
        """Create a resolver backed by ``client``.

        Args:
            client: Git collaborator used to run diff and verification commands.
        """

        self._client = client

    def resolve(self, base_ref: str | None, only_staged: bool) -> ChangeSet:
        """Return change descriptors for every supported changed file.

        Args:
            base_ref: Reference to diff against; auto-detected when blank.
            only_staged: Restrict the diff to staged changes.

        Returns:
            ChangeSet: Descriptors keyed by path in discovery order.
        """

        scope = self.diff_scope(base_ref, only_staged)
        files = parse_name_status(self._client.capture(["diff", "--name-status", *scope, "--", *extension_globs()]))
        modified = [path for path, descriptor in files.items() if descriptor.kind is ChangeKind.MODIFIED]
        if not modified:
            return files
        diff_output = self._client.capture(["diff", "--unified=0", *scope, "--", *modified])
        for path, lines in parse_diff_hunks(diff_output, modified).items():
            files[path] = _with_lines(files[path], lines)
        return files

    def diff_scope(self, base_ref: str | None, only_staged: bool) -> tuple[str, ...]:
        """Return the revision arguments limiting the diff.

        Args:
            base_ref: Reference to diff against; auto-detected when blank.
            only_staged: Restrict the diff to staged changes.

        Returns:
            tuple[str, ...]: ``("--staged",)`` or a single ``<base>...HEAD`` range.
        """

        if only_staged:
            return _STAGED_SCOPE
        return (f"{self.merge_base(base_ref)}...HEAD",)

    def merge_base(self, base_ref: str | None) -> str:
        """Return ``base_ref`` or the first existing default branch.

        Args:
            base_ref: User supplied reference, preferred when non-blank.

        Returns:
            str: Reference to diff against, ``HEAD~1`` when nothing else exists.
        """

        if base_ref and base_ref.strip():
            return base_ref.strip()
        for candidate in BASE_REF_CANDIDATES:
            if self._client.verify_ref(candidate):
                return candidate
        return FALLBACK_BASE_REF


def _with_lines(descriptor: ChangeDescriptor, lines: set[int]) -> ChangeDescriptor:
    """Return ``descriptor`` carrying the frozen ``lines`` set."""

    return descriptor.model_copy(update={"changed_lines": frozenset(lines)})


def changed_files(base_ref: str | None, only_staged: bool, *, root: Path) -> ChangeSet:
    """Resolve the change set for the repository at ``root``.

    Args:
        base_ref: Reference to diff against; auto-detected when blank.
        only_staged: Restrict the diff to staged changes.
        root: Repository working directory.

    Returns:
        ChangeSet: Descriptors keyed by path in discovery order.
    """

    return GitChangeSetResolver(SubprocessGitClient(root)).resolve(base_ref, only_staged)


__all__ = [
    "BASE_REF_CANDIDATES",
    "FALLBACK_BASE_REF",
    "GitChangeSetResolver",
    "GitClient",
    "SubprocessGitClient",
    "changed_files",
]

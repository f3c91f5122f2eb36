# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Change discovery: which files changed and which of their lines were touched."""

from __future__ import annotations

from .diff import Hunk, hunk_lines, parse_diff_hunks, parse_hunk_header, parse_name_status, parse_status_line
from .git import GitChangeSetResolver, GitClient, SubprocessGitClient, changed_files

__all__ = [
    "GitChangeSetResolver",
    "GitClient",
    "Hunk",
    "SubprocessGitClient",
    "changed_files",
    "hunk_lines",
    "parse_diff_hunks",
    "parse_hunk_header",
    "parse_name_status",
    "parse_status_line",
]

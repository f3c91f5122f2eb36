# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations for the ccru command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

FILES_ARGUMENT = Annotated[
    list[Path] | None,
    typer.Argument(
        help="Files to lint in full. When omitted, files changed in git are linted.",
        show_default=False,
    ),
]
BASE_OPTION = Annotated[
    str | None,
    typer.Option(
        "--base",
        "-b",
        envvar="CCRU_BASE",
        help="Git reference to diff against (auto-detects origin/main, origin/master, main, master).",
    ),
]
STAGED_OPTION = Annotated[
    bool,
    typer.Option("--staged", help="Only lint staged changes."),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Repository root. Defaults to the current directory.", show_default=False),
]
RUBOCOP_OPTION = Annotated[
    str,
    typer.Option(
        "--rubocop-cmd",
        envvar="CCRU_RUBOCOP",
        help="Command used to run RuboCop, e.g. 'bundle exec rubocop'.",
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle coloured status messages."),
]

__all__ = [
    "BASE_OPTION",
    "COLOR_OPTION",
    "EMOJI_OPTION",
    "FILES_ARGUMENT",
    "ROOT_OPTION",
    "RUBOCOP_OPTION",
    "STAGED_OPTION",
]

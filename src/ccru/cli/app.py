# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring configuration, discovery and dispatch."""

from __future__ import annotations

from pathlib import Path

import typer

from ccru.config import CcruConfig, ConfigError, build_config
from ccru.discovery.git import changed_files
from ccru.dispatch import Dispatcher
from ccru.linting.rubocop import RubocopAnalyzer, RubocopCommandBackend
from ccru.models import DispatchReport
from ccru.reporting import OffenseReporter

from .options import (
    BASE_OPTION,
    COLOR_OPTION,
    EMOJI_OPTION,
    FILES_ARGUMENT,
    ROOT_OPTION,
    RUBOCOP_OPTION,
    STAGED_OPTION,
)

app = typer.Typer(name="ccru", help="Lint only the lines touched by a change.", add_completion=False)


def run(config: CcruConfig) -> DispatchReport:
    """Lint the files selected by ``config`` and report offenses.

    Args:
        config: Resolved configuration for the invocation.

    Returns:
        DispatchReport: Aggregated per-file results.
    """

    reporter = OffenseReporter(root=config.root, use_emoji=config.use_emoji, use_color=config.use_color)
    analyzer = RubocopAnalyzer(RubocopCommandBackend(config.rubocop_command, root=config.root))
    dispatcher = Dispatcher(analyzer=analyzer, reporter=reporter, root=config.root)
    if config.has_explicit_files:
        return dispatcher.run_files(config.files)
    return dispatcher.run(changed_files(config.base_ref, config.staged, root=config.root))


@app.command()
def lint(
    files: FILES_ARGUMENT = None,
    base: BASE_OPTION = None,
    staged: STAGED_OPTION = False,
    root: ROOT_OPTION = None,
    rubocop_cmd: RUBOCOP_OPTION = "rubocop",
    emoji: EMOJI_OPTION = False,
    color: COLOR_OPTION = True,
) -> None:
    """Lint changed files, or the given FILES in full.

    New files are linted completely and modified files only on their changed
    lines. Exits with status 1 when any offense is found.
    """

    try:
        config = build_config(
            root=root if root is not None else Path.cwd(),
            base_ref=base,
            staged=staged,
            files=tuple(files or ()),
            rubocop_command=rubocop_cmd,
            use_emoji=emoji,
            use_color=color,
        )
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    raise typer.Exit(code=run(config).exit_status)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "lint", "main", "run"]

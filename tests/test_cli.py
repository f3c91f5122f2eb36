# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ccru.cli import app
from ccru.reporting import ALL_OK_MESSAGE

runner = CliRunner()


def test_explicit_files_report_offenses_and_ignore_unsupported(tmp_path: Path) -> None:
    script = tmp_path / "app.js"
    script.write_text("var a = 1; \nuse(a);\n", encoding="utf-8")
    notes = tmp_path / "notes.txt"
    notes.write_text("trailing \n", encoding="utf-8")

    result = runner.invoke(app, [str(script), str(notes)])

    assert result.exit_code == 1
    assert f"{script}:1:1: W: TrailingWhitespace: Remove trailing whitespace" in result.stdout
    assert "notes.txt" not in result.stdout


def test_clean_file_exits_zero(tmp_path: Path) -> None:
    (tmp_path / "show.erb").write_text("<p><%= title %></p>\n", encoding="utf-8")

    result = runner.invoke(app, ["--root", str(tmp_path), "--no-color", "show.erb"])

    assert result.exit_code == 0
    assert ALL_OK_MESSAGE in result.stdout


def test_empty_rubocop_command_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "a.js").write_text("var a = 1;\nuse(a);\n", encoding="utf-8")

    result = runner.invoke(app, ["--rubocop-cmd", "", str(tmp_path / "a.js")])

    assert result.exit_code == 2


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", "-c", "commit.gpgsign=false", *args], cwd=repo, check=True, capture_output=True)


@pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
def test_staged_changes_are_linted_on_changed_lines(tmp_path: Path) -> None:
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "config", "user.email", "ccru@example.com")
    _git(tmp_path, "config", "user.name", "ccru")
    (tmp_path / "app.js").write_text("let legacy = 1;\nuse(legacy);\n", encoding="utf-8")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-q", "-m", "initial")
    (tmp_path / "app.js").write_text("let legacy = 1;\nuse(legacy);\nconsole.log(legacy);\n", encoding="utf-8")
    _git(tmp_path, "add", "app.js")

    result = runner.invoke(app, ["--staged", "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "app.js:3:1: W: ConsoleStatements:" in result.stdout
    assert "app.js:1:1" not in result.stdout

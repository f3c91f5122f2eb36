# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from ccru.console import get_console_manager
from ccru.logging import emoji, ok, warn


def test_ok_goes_to_stdout_and_warn_to_stderr(capsys) -> None:
    ok("all good", use_color=False)
    warn("careful [not markup]", use_color=False)

    captured = capsys.readouterr()
    assert captured.out == "all good\n"
    assert captured.err == "careful [not markup]\n"


def test_emoji_prefix_is_optional(capsys) -> None:
    assert emoji("✅", False) == ""
    ok("done", use_emoji=True, use_color=False)

    assert capsys.readouterr().out.startswith("✅")


def test_console_manager_caches_per_preference() -> None:
    manager = get_console_manager()

    first = manager.get(color=False, emoji=False)
    assert manager.get(color=False, emoji=False) is first
    assert manager.get(color=False, emoji=False, stderr=True) is not first

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from ccru.models import Offense, OffenseLocation
from ccru.reporting import ALL_OK_MESSAGE, OffenseReporter, format_marker, format_summary


def _offense(line: int, column: int = 1, length: int = 0, severity: str = "warning") -> Offense:
    return Offense(
        rule="Style/Example",
        message="Example message.",
        severity=severity,
        cop_name="Style/Example",
        location=OffenseLocation(line=line, column=column, length=length),
    )


def test_format_summary() -> None:
    assert format_summary("lib/a.rb", _offense(3, 7, severity="refactor")) == (
        "lib/a.rb:3:7: R: Style/Example: Example message."
    )


def test_format_marker() -> None:
    assert format_marker("abc\n", 1, 3) == ""
    assert format_marker("abcdef\n", 3, 2) == "  ^^"
    assert format_marker("abc\n", 3, 5) == "  ^^"


def test_report_prints_source_context(tmp_path, echo) -> None:
    (tmp_path / "a.rb").write_text("first\n  second  \n", encoding="utf-8")
    reporter = OffenseReporter(root=tmp_path, echo=echo)

    reporter.report("a.rb", [_offense(2, 3, 6), _offense(1)])

    assert echo.lines == [
        "a.rb:2:3: W: Style/Example: Example message.",
        "  second",
        "  ^^^^^^",
        "a.rb:1:1: W: Style/Example: Example message.",
        "first",
        "",
    ]


def test_report_without_readable_source_prints_summaries(tmp_path, echo) -> None:
    reporter = OffenseReporter(root=tmp_path, echo=echo)

    reporter.report("missing.rb", [_offense(1), _offense(2)])

    assert echo.lines == [
        "missing.rb:1:1: W: Style/Example: Example message.",
        "missing.rb:2:1: W: Style/Example: Example message.",
    ]


def test_report_skips_context_beyond_end_of_file(tmp_path, echo) -> None:
    (tmp_path / "a.js").write_text("only", encoding="utf-8")
    reporter = OffenseReporter(root=tmp_path, echo=echo)

    reporter.report("a.js", [_offense(3)])

    assert echo.lines == ["a.js:3:1: W: Style/Example: Example message."]


def test_report_success(capsys) -> None:
    OffenseReporter(use_color=False).report_success()

    assert capsys.readouterr().out.strip() == ALL_OK_MESSAGE

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from itertools import combinations

import pytest

from ccru.linting.javascript import CODE_QUALITY_RULES, ES6_VIOLATIONS, JavaScriptEngine
from ccru.severity import Severity


def _cops(offenses) -> list[tuple[int, str]]:
    return [(offense.location.line, offense.cop_name) for offense in offenses]


@pytest.fixture
def engine() -> JavaScriptEngine:
    return JavaScriptEngine()


@pytest.mark.parametrize(
    ("line", "cop"),
    [
        ("items.map(x => x * 2);", "ArrowFunctions"),
        ("let total = 0;", "ConstLet"),
        ("var s = `hi ${name}`;", "TemplateLiterals"),
        ("if (ready) { count = 1; }", "Destructuring"),
        ("fn.apply(null, [...args]);", "SpreadOperator"),
        ("class Foo {", "Classes"),
        ("import foo from 'foo';", "Modules"),
        ("function add(a, b = 1) {", "DefaultParameters"),
        ("var result = eval(code);", "EvalUsage"),
        ("console.log(value);", "ConsoleStatements"),
        ("use(a); // note", "InlineComment"),
        ("with (obj) {", "WithStatement"),
        ("document.write(html);", "DocumentWrite"),
        ("if (a == b) {", "LooseEquality"),
        ("if (a != b) {", "LooseInequality"),
        ("var unused = 1;", "UnusedVariables"),
        ("doSomething()", "MissingSemicolon"),
        ("el.innerHTML = html;", "InnerhtmlUsage"),
        ("total = 5;", "GlobalVariables"),
        ("var s = '" + "a" * 130 + "';", "LineTooLong"),
    ],
)
def test_each_rule_reports_its_cop(engine: JavaScriptEngine, line: str, cop: str) -> None:
    offenses = engine.lint_full(f"{line}\n")

    assert _cops(offenses) == [(1, cop)]
    assert offenses[0].location.column == 1
    assert offenses[0].line_content == f"{line}\n"


def test_es6_violations_are_errors() -> None:
    assert {rule.severity for rule in ES6_VIOLATIONS} == {Severity.ERROR}
    errors = {rule.cop_name for rule in CODE_QUALITY_RULES if rule.severity is Severity.ERROR}
    assert errors == {"EvalUsage", "WithStatement"}


def test_first_matching_rule_wins(engine: JavaScriptEngine) -> None:
    assert _cops(engine.lint_full("const f = (a = 1) => a;\n")) == [(1, "ArrowFunctions")]
    assert _cops(engine.lint_full("let x = eval(y)\n")) == [(1, "ConstLet")]


@pytest.mark.parametrize(
    "line",
    [
        "if (a === b && c == d) {",
        "if (a !== b && c != d) {",
        "if (value == null) {",
        "if (value != undefined) {",
    ],
)
def test_strict_comparison_suppresses_loose_rules(engine: JavaScriptEngine, line: str) -> None:
    assert engine.lint_full(f"{line}\n") == []


def test_used_variable_falls_through_to_later_rules(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("var x = 1\nvar x = 2;\n")

    assert _cops(offenses) == [(1, "MissingSemicolon"), (2, "UnusedVariables")]


def test_variable_usage_requires_whole_word(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("var x = 1;\nvar xy = 2;\n")

    assert _cops(offenses) == [(1, "UnusedVariables"), (2, "UnusedVariables")]


def test_variable_used_earlier_only_is_unused(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("use(item);\nvar item = 1;\n")

    assert _cops(offenses) == [(2, "UnusedVariables")]


@pytest.mark.parametrize(
    "line",
    ["return value", "if (ready)", "else", "}", "  }", "function init()", "callback(", "])", "items,"],
)
def test_lines_that_need_no_semicolon(engine: JavaScriptEngine, line: str) -> None:
    assert engine.lint_full(f"{line}\n") == []


def test_block_closed_on_statement_line_needs_semicolon(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("window.onload = function () { init(); }\n")

    assert _cops(offenses) == [(1, "MissingSemicolon")]


def test_object_literal_members_need_no_semicolon(engine: JavaScriptEngine) -> None:
    content = "var config = {\n  name: 'x'\n};\nuse(config);\n"

    assert engine.lint_full(content) == []


def test_statement_outside_literal_needs_semicolon(engine: JavaScriptEngine) -> None:
    assert _cops(engine.lint_full("  name: 'x'\n")) == [(1, "MissingSemicolon")]


def test_comments_are_exempt_from_rule_tables(engine: JavaScriptEngine) -> None:
    content = "// let a = 1\n/* block\n * let b = 2;\n */\nlet c = 3;\n"

    assert _cops(engine.lint_full(content)) == [(5, "ConstLet")]


def test_multiple_empty_lines_reported_on_following_line(engine: JavaScriptEngine) -> None:
    assert _cops(engine.lint_full("var a = 1;\n\n\nuse(a);\n")) == [(4, "MultipleEmptyLines")]
    assert engine.lint_full("var a = 1;\n\nuse(a);\n") == []


def test_blank_line_rule_never_hides_other_offenses(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("var a = 1;\n\n\neval(a);\n")

    assert _cops(offenses) == [(4, "EvalUsage")]
    assert offenses[0].severity is Severity.ERROR


def test_trailing_whitespace_follows_table_offense(engine: JavaScriptEngine) -> None:
    offenses = engine.lint_full("let a = 1; \nuse(a);\t\n")

    assert _cops(offenses) == [(1, "ConstLet"), (1, "TrailingWhitespace")]


def test_missing_final_newline_only_in_full_scan(engine: JavaScriptEngine) -> None:
    full = engine.lint_full("use(a);")

    assert _cops(full) == [(1, "MissingFinalNewline")]
    assert full[0].line_content == "End of file"
    assert engine.lint_filtered("use(a);", {1}) == []


def test_filtered_scan_reports_changed_lines_only(engine: JavaScriptEngine) -> None:
    content = "let a = 1;\nuse(a);\nlet b = 2;\nuse(b);\n"

    assert _cops(engine.lint_full(content)) == [(1, "ConstLet"), (3, "ConstLet")]
    assert _cops(engine.lint_filtered(content, {3})) == [(3, "ConstLet")]
    assert engine.lint_filtered(content, {10, 0, -1}) == []
    assert engine.lint_filtered(content, set()) == []


def test_filtered_scan_never_leaves_changed_lines(engine: JavaScriptEngine) -> None:
    content = "let a = 1; \nvar b = 2\n\n\nconsole.log(a)\nuse(b);\nx = a == b;\n"
    numbers = range(1, 9)

    for size in (1, 2, 3):
        for changed in combinations(numbers, size):
            offenses = engine.lint_filtered(content, set(changed))
            assert {offense.location.line for offense in offenses} <= set(changed)


def test_full_scan_is_deterministic(engine: JavaScriptEngine) -> None:
    content = "let a = 1; \nvar b = 2\n\n\nconsole.log(a)\nuse(b);\nx = a == b;"

    assert engine.lint_full(content) == engine.lint_full(content)
    assert JavaScriptEngine().lint_full(content) == engine.lint_full(content)

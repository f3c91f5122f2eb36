# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JavaScript engine enforcing ES5-only syntax and basic code quality."""

from __future__ import annotations

import re
from typing import Final

from ccru.severity import Severity

from .base import LineContext, LineRule, RuleEngine, RuleTable, matches

_FLAGS: Final[int] = re.ASCII

_DEFAULT_PARAMS_PATTERN: Final[re.Pattern[str]] = re.compile(
    "|".join(
        (
            # function f(a = 1) {}
            r"(?:\b(?:async\s+)?function\b[^(]*\([^)]*=[^)]*\))",
            # (a = 1) => ...
            r"(?:\b(?:async\s*)?\([^)]*=[^)]*\)\s*=>)",
            # m(a = 1) { ... }
            r"(?:(?:^|\{|;)\s*(?:async\s+)?(?:get|set\s+)?"
            r"(?!if\b|for\b|while\b|switch\b|catch\b)"
            r"[A-Za-z_$][\w$]*\s*\([^)]*=[^)]*\)\s*\{)",
        ),
    ),
    _FLAGS,
)
_VAR_DECLARATION: Final[re.Pattern[str]] = re.compile(r"\bvar\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*=", _FLAGS)
_OPENS_GROUP: Final[re.Pattern[str]] = re.compile(r"[\[(]\s*$", _FLAGS)
_CLOSES_GROUP_ONLY: Final[re.Pattern[str]] = re.compile(r"^[\])]\s*$", _FLAGS)
_CONTROL_STATEMENT: Final[re.Pattern[str]] = re.compile(r"^(if|else|for|while|switch|try|catch|finally)\b", _FLAGS)
_DECLARATION: Final[re.Pattern[str]] = re.compile(r"^(function|class)\b", _FLAGS)
_JUMP_STATEMENT: Final[re.Pattern[str]] = re.compile(r"^(return|break|continue|throw)\b", _FLAGS)
_STATEMENT_ENDINGS: Final[tuple[str, ...]] = (";", ",", "{")
_BLOCK_CLOSE: Final[str] = "}"

_STRICT_EQUALITY: Final[str] = "==="
_STRICT_INEQUALITY: Final[str] = "!=="


def is_comment(ctx: LineContext) -> bool:
    """Return whether ``ctx`` is a comment line or sits in a block comment."""

    stripped = ctx.stripped
    if stripped.startswith(("//", "/*")) or stripped.endswith("*/"):
        return True
    return ctx.document.block_comment_flags[ctx.index]


def variable_used_later(ctx: LineContext) -> bool:
    """Return whether the ``var`` declared on ``ctx`` appears on a later line.

    Only lines after the declaration are searched, and only whole-word
    occurrences count.
    """

    declaration = _VAR_DECLARATION.search(ctx.text)
    if declaration is None:
        return False
    usage = re.compile(rf"(?<![A-Za-z0-9_]){re.escape(declaration.group(1))}(?![A-Za-z0-9_])")
    return any(usage.search(line) for line in ctx.following_lines())


def terminator_not_needed(ctx: LineContext) -> bool:
    """Return whether the line legitimately ends without a semicolon."""

    line = ctx.stripped
    if not line or line.endswith(_STATEMENT_ENDINGS) or line == _BLOCK_CLOSE:
        return True
    if _OPENS_GROUP.search(line) or _CLOSES_GROUP_ONLY.search(line):
        return True
    if _CONTROL_STATEMENT.search(line) or _DECLARATION.search(line) or _JUMP_STATEMENT.search(line):
        return True
    return ctx.document.open_literal_flags[ctx.index]


def follows_blank_lines(ctx: LineContext) -> bool:
    """Return whether the two lines before ``ctx`` are both blank."""

    if ctx.index < 2:
        return False
    lines = ctx.document.lines
    return not lines[ctx.index - 1].strip() and not lines[ctx.index - 2].strip()


def _has_strict_comparison(ctx: LineContext) -> bool:
    return _STRICT_EQUALITY in ctx.text or _STRICT_INEQUALITY in ctx.text


def _has_strict_inequality(ctx: LineContext) -> bool:
    return _STRICT_INEQUALITY in ctx.text


def _pattern(expression: str) -> re.Pattern[str]:
    return re.compile(expression, _FLAGS)


ES6_VIOLATIONS: Final[RuleTable] = (
    LineRule(
        name="arrow_functions",
        predicate=matches(_pattern(r"=>")),
        message="Arrow functions (ES6) are not allowed. Use function() syntax instead.",
        cop_name="ArrowFunctions",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="const_let",
        predicate=matches(_pattern(r"\b(const|let)\b")),
        message="const/let (ES6) are not allowed. Use var instead.",
        cop_name="ConstLet",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="template_literals",
        predicate=matches(_pattern(r"`[^`]*\$\{[^}]*\}[^`]*`")),
        message="Template literals (ES6) are not allowed. Use string concatenation instead.",
        cop_name="TemplateLiterals",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="destructuring",
        predicate=matches(_pattern(r"\{[^}]*\s*=\s*[^}]*\}")),
        message="Destructuring assignment (ES6) is not allowed.",
        cop_name="Destructuring",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="spread_operator",
        predicate=matches(_pattern(r"\.\.\.")),
        message="Spread operator (ES6) is not allowed.",
        cop_name="SpreadOperator",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="classes",
        predicate=matches(_pattern(r"\bclass\s+\w+")),
        message="ES6 classes are not allowed. Use function constructors instead.",
        cop_name="Classes",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="modules",
        predicate=matches(_pattern(r"\b(import|export)\b")),
        message="ES6 modules (import/export) are not allowed. Use traditional script loading.",
        cop_name="Modules",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="default_parameters",
        predicate=matches(_DEFAULT_PARAMS_PATTERN),
        message="Default parameters (ES6) are not allowed.",
        cop_name="DefaultParameters",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="rest_parameters",
        predicate=matches(_pattern(r"\.\.\.\w+")),
        message="Rest parameters (ES6) are not allowed.",
        cop_name="RestParameters",
        severity=Severity.ERROR,
    ),
)

CODE_QUALITY_RULES: Final[RuleTable] = (
    LineRule(
        name="line_too_long",
        predicate=matches(_pattern(r"^.{121,}$")),
        message="Line is too long (over 120 characters). Consider breaking it into multiple lines.",
        cop_name="LineTooLong",
        severity=Severity.WARNING,
    ),
    LineRule(
        name="console_statements",
        predicate=matches(_pattern(r"\bconsole\.(log|debug|info|warn|error)\s*\(")),
        message="Console statements should not be left in production code. Remove or use proper logging.",
        cop_name="ConsoleStatements",
        severity=Severity.WARNING,
    ),
    LineRule(
        name="no_inline_comment",
        predicate=matches(_pattern(r"[^\s].*//.+")),
        message="Avoid inline comments at the end of code lines.",
        cop_name="InlineComment",
        severity=Severity.WARNING,
    ),
    LineRule(
        name="eval_usage",
        predicate=matches(_pattern(r"\beval\s*\(")),
        message="eval() is dangerous and should not be used. Use safer alternatives.",
        cop_name="EvalUsage",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="with_statement",
        predicate=matches(_pattern(r"\bwith\s*\(")),
        message="with statement is deprecated and can cause scope confusion. Avoid using it.",
        cop_name="WithStatement",
        severity=Severity.ERROR,
    ),
    LineRule(
        name="document_write",
        predicate=matches(_pattern(r"\bdocument\.write\s*\(")),
        message="document.write() can cause performance issues and security risks. Use DOM manipulation instead.",
        cop_name="DocumentWrite",
        severity=Severity.WARNING,
    ),
    LineRule(
        name="loose_equality",
        predicate=matches(_pattern(r"==(?!\s*null|\s*undefined)")),
        message="Use strict equality (===) instead of loose equality (==) to avoid type coercion issues.",
        cop_name="LooseEquality",
        severity=Severity.WARNING,
        suppress=_has_strict_comparison,
    ),
    LineRule(
        name="loose_inequality",
        predicate=matches(_pattern(r"!=(?!\s*null|\s*undefined)")),
        message="Use strict inequality (!==) instead of loose inequality (!=) to avoid type coercion issues.",
        cop_name="LooseInequality",
        severity=Severity.WARNING,
        suppress=_has_strict_inequality,
    ),
    LineRule(
        name="unused_variables",
        predicate=matches(_VAR_DECLARATION),
        message="Variable is declared but may not be used. Consider removing if unused.",
        cop_name="UnusedVariables",
        severity=Severity.WARNING,
        suppress=variable_used_later,
    ),
    LineRule(
        name="missing_semicolon",
        predicate=matches(_pattern(r"[^;{}]\s*$")),
        message="Missing semicolon at end of statement. Add semicolon for consistency.",
        cop_name="MissingSemicolon",
        severity=Severity.WARNING,
        suppress=terminator_not_needed,
    ),
    LineRule(
        name="innerhtml_usage",
        predicate=matches(_pattern(r"\.innerHTML\s*=")),
        message="innerHTML can cause XSS vulnerabilities. Use textContent or proper sanitization.",
        cop_name="InnerhtmlUsage",
        severity=Severity.WARNING,
    ),
    LineRule(
        name="global_variables",
        predicate=matches(_pattern(r"^[a-zA-Z_$][a-zA-Z0-9_$]*\s*=")),
        message="Global variable declaration detected. Consider using var to avoid global scope pollution.",
        cop_name="GlobalVariables",
        severity=Severity.WARNING,
    ),
    # Contextual rule; checked last so it never hides another offense on the line.
    LineRule(
        name="multiple_empty_lines",
        predicate=follows_blank_lines,
        message="Multiple consecutive empty lines found. Use maximum 1 empty lines.",
        cop_name="MultipleEmptyLines",
        severity=Severity.WARNING,
    ),
)


class JavaScriptEngine(RuleEngine):
    """Flag ES6+ syntax and common quality problems in legacy JavaScript.

    ES6 syntax rules take precedence over code-quality rules. Blank lines and
    comments are exempt from the tables but still receive the common
    trailing-whitespace check.
    """

    rules: RuleTable = ES6_VIOLATIONS + CODE_QUALITY_RULES

    def should_check(self, ctx: LineContext) -> bool:
        """Return ``False`` for blank and comment lines."""

        if not ctx.stripped:
            return False
        return not is_comment(ctx)


__all__ = [
    "CODE_QUALITY_RULES",
    "ES6_VIOLATIONS",
    "JavaScriptEngine",
    "follows_blank_lines",
    "is_comment",
    "terminator_not_needed",
    "variable_used_later",
]

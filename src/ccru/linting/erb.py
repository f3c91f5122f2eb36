# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ERB template engine checking tag spacing and comment conventions."""

from __future__ import annotations

import re
from typing import Final

from ccru.severity import Severity

from .base import LineContext, LineRule, RuleEngine, RuleTable, matches

_FLAGS: Final[int] = re.ASCII

ERB_VIOLATIONS: Final[RuleTable] = (
    # <% # comment %> instead of <%# comment %>
    LineRule(
        name="bad_comment_format",
        predicate=matches(re.compile(r"<%\s+#[^%]*%>", _FLAGS)),
        message="Use <%# comment %> instead of <% # comment %> for ERB comments",
        cop_name="BadCommentFormat",
        severity=Severity.ERROR,
    ),
    # <%foo%> instead of <% foo %>
    LineRule(
        name="bad_spacing",
        predicate=matches(re.compile(r"<%(?!=)[^\s#][^%]*%>", _FLAGS)),
        message="<% your_code %> for better readability",
        cop_name="BadSpacing",
        severity=Severity.WARNING,
    ),
    # <%=foo%> instead of <%= foo %>
    LineRule(
        name="bad_output_spacing",
        predicate=matches(re.compile(r"<%=[^\s][^%]*%>", _FLAGS)),
        message="<%= your_code %> for better readability",
        cop_name="BadOutputSpacing",
        severity=Severity.WARNING,
    ),
    # <%#foo%> instead of <%# foo %>
    LineRule(
        name="bad_comment_spacing",
        predicate=matches(re.compile(r"<%#[^\s][^%]*%>", _FLAGS)),
        message="<%# your_comment %> for better readability",
        cop_name="BadCommentSpacing",
        severity=Severity.WARNING,
    ),
)


class ErbEngine(RuleEngine):
    """Check basic ERB tag conventions on every non-blank line."""

    rules: RuleTable = ERB_VIOLATIONS

    def should_check(self, ctx: LineContext) -> bool:
        return bool(ctx.stripped)


__all__ = ["ERB_VIOLATIONS", "ErbEngine"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line-based linting engines and the external RuboCop analyzer."""

from __future__ import annotations

from .base import LineContext, LineRule, RuleEngine, SourceDocument, split_lines
from .erb import ErbEngine
from .filtering import filter_offenses
from .javascript import JavaScriptEngine
from .registry import engine_for
from .rubocop import AnalyzerBackend, AnalyzerError, RubocopAnalyzer, RubocopCommandBackend

__all__ = [
    "AnalyzerBackend",
    "AnalyzerError",
    "ErbEngine",
    "JavaScriptEngine",
    "LineContext",
    "LineRule",
    "RubocopAnalyzer",
    "RubocopCommandBackend",
    "RuleEngine",
    "SourceDocument",
    "engine_for",
    "filter_offenses",
    "split_lines",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry mapping file categories onto in-process engines."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from ccru.models import FileCategory

from .base import RuleEngine
from .erb import ErbEngine
from .javascript import JavaScriptEngine

EngineFactory = Callable[[], RuleEngine]

IN_PROCESS_ENGINES: Final[dict[FileCategory, EngineFactory]] = {
    FileCategory.JAVASCRIPT: JavaScriptEngine,
    FileCategory.ERB: ErbEngine,
}


def engine_for(category: FileCategory) -> RuleEngine | None:
    """Return a fresh in-process engine for ``category``.

    Args:
        category: Category of the file being linted.

    Returns:
        RuleEngine | None: New engine instance, or ``None`` for categories
        handled by an external analyzer.
    """

    factory = IN_PROCESS_ENGINES.get(category)
    return factory() if factory is not None else None


__all__ = ["EngineFactory", "IN_PROCESS_ENGINES", "engine_for"]

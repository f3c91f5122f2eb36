# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map file extensions onto linting categories."""

from __future__ import annotations

from pathlib import PurePath
from typing import Final

from ccru.models import FileCategory

SUPPORTED_EXTENSIONS: Final[dict[str, FileCategory]] = {
    ".rb": FileCategory.RUBY,
    ".js": FileCategory.JAVASCRIPT,
    ".erb": FileCategory.ERB,
}


def file_category(path: str | PurePath) -> FileCategory | None:
    """Return the linting category for ``path`` or ``None`` when unsupported.

    Args:
        path: File path whose extension selects the category.

    Returns:
        FileCategory | None: Category for the extension, ``None`` otherwise.
    """

    return SUPPORTED_EXTENSIONS.get(PurePath(path).suffix)


def extension_globs() -> tuple[str, ...]:
    """Return git pathspec globs matching every supported extension."""

    return tuple(f"*{suffix}" for suffix in SUPPORTED_EXTENSIONS)


__all__ = ["SUPPORTED_EXTENSIONS", "extension_globs", "file_category"]

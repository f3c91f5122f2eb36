# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for a single ccru invocation."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_RUBOCOP_COMMAND: Final[tuple[str, ...]] = ("rubocop",)


class ConfigError(ValueError):
    """Raised when CLI or environment inputs cannot form a valid configuration."""


class CcruConfig(BaseModel):
    """Resolved settings controlling change discovery, analysis and output."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(default_factory=Path.cwd)
    base_ref: str | None = None
    staged: bool = False
    files: tuple[Path, ...] = ()
    rubocop_command: tuple[str, ...] = DEFAULT_RUBOCOP_COMMAND
    use_emoji: bool = False
    use_color: bool = True

    @field_validator("base_ref", mode="before")
    @classmethod
    def _blank_base_is_unset(cls, value: str | None) -> str | None:
        """Treat empty or whitespace-only base references as unset.

        Args:
            value: Base reference supplied by the CLI or environment.

        Returns:
            str | None: Stripped reference, or ``None`` when blank.
        """

        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @field_validator("rubocop_command", mode="before")
    @classmethod
    def _split_command(cls, value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
        """Accept shell-style command strings in addition to sequences.

        Args:
            value: Command as a string (``"bundle exec rubocop"``) or sequence.

        Returns:
            tuple[str, ...]: Tokenised command.

        Raises:
            ValueError: If the command is empty.
        """

        tokens = tuple(shlex.split(value)) if isinstance(value, str) else tuple(value)
        if not tokens:
            raise ValueError("rubocop command must not be empty")
        return tokens

    @property
    def has_explicit_files(self) -> bool:
        """Return whether diff resolution is bypassed by an explicit file list."""

        return bool(self.files)


def build_config(**values: object) -> CcruConfig:
    """Return a validated :class:`CcruConfig` built from keyword ``values``.

    Args:
        **values: Field values keyed by :class:`CcruConfig` attribute name.

    Returns:
        CcruConfig: Validated configuration.

    Raises:
        ConfigError: If validation fails.
    """

    try:
        return CcruConfig.model_validate(values)
    except ValidationError as exc:
        details = "; ".join(error["msg"] for error in exc.errors())
        raise ConfigError(f"invalid configuration: {details}") from exc


__all__ = ["CcruConfig", "ConfigError", "DEFAULT_RUBOCOP_COMMAND", "build_config"]

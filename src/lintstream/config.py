# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the command-line engine adapter."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_EXECUTABLE: Final[str] = "eslint"

# Engine option keys (as accepted by ``migrate_options``) mapped to EngineConfig fields.
_ENGINE_OPTION_FIELDS: Final[dict[str, str]] = {
    "cwd": "cwd",
    "fix": "fix",
    "ignore": "ignore",
    "overrideConfigFile": "override_config_file",
    "overrideConfig": "override_config",
    "executable": "executable",
    "timeout": "timeout",
    "extraArgs": "extra_args",
}


class EngineConfig(BaseModel):
    """Settings used to invoke the ESLint command-line interface."""

    model_config = ConfigDict(validate_assignment=True)

    executable: str = DEFAULT_EXECUTABLE
    cwd: Path = Field(default_factory=Path.cwd)
    fix: bool = False
    ignore: bool = True
    override_config_file: Path | None = None
    override_config: dict[str, Any] = Field(default_factory=dict)
    timeout: float | None = Field(default=None, gt=0)
    extra_args: list[str] = Field(default_factory=list)
    unsupported: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_engine_options(cls, options: Mapping[str, Any]) -> EngineConfig:
        """Build a config from migrated engine options.

        Args:
            options: ``NormalizedOptions.engine_options``.

        Returns:
            EngineConfig: Validated settings; keys the command-line adapter
            does not understand are kept in ``unsupported``.

        Raises:
            ConfigError: If an option has an invalid value.
        """

        known: dict[str, Any] = {}
        unsupported: dict[str, Any] = {}
        for key, value in options.items():
            field_name = _ENGINE_OPTION_FIELDS.get(key)
            if field_name is None:
                unsupported[key] = value
            elif value is not None:
                known[field_name] = value
        try:
            return cls(**known, unsupported=unsupported)
        except ValidationError as exc:
            raise ConfigError(f"Invalid engine options: {exc}") from exc

    @property
    def ignore_patterns(self) -> list[str]:
        """Return the ignore patterns declared in ``override_config``."""

        patterns = self.override_config.get("ignorePatterns") or []
        if isinstance(patterns, str):
            return [patterns]
        return [str(pattern) for pattern in patterns]


__all__ = ["DEFAULT_EXECUTABLE", "EngineConfig"]

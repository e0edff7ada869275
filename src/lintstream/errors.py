# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception types raised by lintstream stages."""

from __future__ import annotations

from typing import Final

PLUGIN_NAME: Final[str] = "lintstream"
INVALID_OPTIONS_CODE: Final[str] = "ESLINT_INVALID_OPTIONS"
UNKNOWN_ERROR: Final[str] = "Unknown Error"


class PluginError(Exception):
    """Tagged error emitted by every pipeline stage.

    Attributes:
        plugin: Name of the plugin that raised the error.
        message: Human readable error description.
        show_stack: ``True`` when reporters should print the chained traceback.
        file_name: Optional path of the file being processed.
        line_number: Optional line associated with the failure.
    """

    fatal: bool = True

    def __init__(
        self,
        message: str,
        *,
        plugin: str = PLUGIN_NAME,
        show_stack: bool = False,
        file_name: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.plugin = plugin
        self.message = message
        self.show_stack = show_stack
        self.file_name = file_name
        self.line_number = line_number

    def __str__(self) -> str:
        location = ""
        if self.file_name:
            location = f" ({self.file_name}"
            if self.line_number is not None:
                location += f":{self.line_number}"
            location += ")"
        return f"{self.message}{location}"


class LintFailure(PluginError):
    """Raised when the engine fails on a single file; other files continue."""

    fatal = False


class GateFailure(PluginError):
    """Raised when a fail gate observes lint errors."""


class HandlerFailure(PluginError):
    """Raised when a user supplied hook fails."""


class InvalidOptionsError(ValueError):
    """Raised when user options cannot be migrated to engine options."""

    code: Final[str] = INVALID_OPTIONS_CODE


class FatalEngineError(RuntimeError):
    """Raised by engines to abort the whole run instead of a single file."""


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def create_plugin_error(
    error: BaseException | str | None,
    *,
    error_type: type[PluginError] = PluginError,
    file_name: str | None = None,
) -> PluginError:
    """Wrap ``error`` into a :class:`PluginError` unless it already is one.

    Args:
        error: Exception, message or ``None`` to wrap.
        error_type: Tagged subclass used for the wrapper.
        file_name: Optional path of the file being processed.

    Returns:
        PluginError: ``error`` itself when already tagged, otherwise a new
        wrapper with ``show_stack`` enabled and ``__cause__`` set.
    """

    if isinstance(error, PluginError):
        return error
    if error is None:
        return error_type(UNKNOWN_ERROR, show_stack=True, file_name=file_name)
    if isinstance(error, str):
        return error_type(error, show_stack=True, file_name=file_name)
    wrapped = error_type(str(error) or type(error).__name__, show_stack=True, file_name=file_name)
    wrapped.__cause__ = error
    return wrapped


__all__ = [
    "ConfigError",
    "FatalEngineError",
    "GateFailure",
    "HandlerFailure",
    "INVALID_OPTIONS_CODE",
    "InvalidOptionsError",
    "LintFailure",
    "PLUGIN_NAME",
    "PluginError",
    "create_plugin_error",
]

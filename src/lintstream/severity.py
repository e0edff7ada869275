# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and message classification helpers."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .models import LintMessage

MessageKind = Literal["error", "warning"]


class Severity(IntEnum):
    """Numeric severity levels reported by the engine."""

    OFF = 0
    WARNING = 1
    ERROR = 2


def is_error_message(message: LintMessage) -> bool:
    """Return ``True`` when ``message`` is an error."""

    return message.severity > Severity.WARNING


def is_warning_message(message: LintMessage) -> bool:
    """Return ``True`` when ``message`` is a warning."""

    return message.severity == Severity.WARNING


def is_fixable_message(message: LintMessage, kind: MessageKind) -> bool:
    """Return ``True`` when ``message`` matches ``kind`` and carries a fix.

    Args:
        message: Engine message to classify.
        kind: Either ``"error"`` or ``"warning"``.

    Returns:
        bool: ``True`` for fixable messages of the requested kind.
    """

    matches = is_error_message(message) if kind == "error" else is_warning_message(message)
    return matches and message.fix is not None


def is_fatal_message(message: LintMessage) -> bool:
    """Return ``True`` when ``message`` is an error flagged as fatal."""

    return is_error_message(message) and bool(message.fatal)


__all__ = [
    "MessageKind",
    "Severity",
    "is_error_message",
    "is_fatal_message",
    "is_fixable_message",
    "is_warning_message",
]

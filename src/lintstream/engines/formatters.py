# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in formatters served by the command-line engine adapter."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Final

from ..models import LintMessage, LintResult
from ..severity import is_error_message


def _label(message: LintMessage) -> str:
    return "Error" if is_error_message(message) else "Warning"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


class JsonFormatter:
    """Render results as the engine's JSON report."""

    def format(self, results: Sequence[LintResult]) -> str:
        return json.dumps([result.to_payload() for result in results])


class CompactFormatter:
    """Render one line per message followed by a problem total."""

    def format(self, results: Sequence[LintResult]) -> str:
        lines: list[str] = []
        total = 0
        for result in results:
            for message in result.messages:
                total += 1
                rule = f" ({message.rule_id})" if message.rule_id else ""
                lines.append(
                    f"{result.file_path}: line {message.line or 0}, col {message.column or 0}, "
                    f"{_label(message)} - {message.message}{rule}",
                )
        if total:
            lines.append("")
            lines.append(_plural(total, "problem"))
        return "\n".join(lines)


class StylishFormatter:
    """Render messages grouped by file with an error/warning summary."""

    def format(self, results: Sequence[LintResult]) -> str:
        blocks: list[str] = []
        errors = warnings = 0
        for result in results:
            if not result.messages:
                continue
            errors += result.error_count
            warnings += result.warning_count
            rows = [result.file_path]
            for message in result.messages:
                location = f"{message.line or 0}:{message.column or 0}"
                rows.append(
                    f"  {location:>7}  {_label(message).lower():<7}  {message.message}  {message.rule_id or ''}".rstrip(),
                )
            blocks.append("\n".join(rows))
        if not blocks:
            return ""
        problems = errors + warnings
        summary = (
            f"✖ {_plural(problems, 'problem')} "
            f"({_plural(errors, 'error')}, {_plural(warnings, 'warning')})"
        )
        return "\n\n".join(blocks) + f"\n\n{summary}\n"


DEFAULT_FORMATTER: Final[str] = "stylish"

BUILTIN_FORMATTERS: Final[dict[str, type[JsonFormatter | CompactFormatter | StylishFormatter]]] = {
    "json": JsonFormatter,
    "compact": CompactFormatter,
    "stylish": StylishFormatter,
}


__all__ = ["BUILTIN_FORMATTERS", "CompactFormatter", "DEFAULT_FORMATTER", "JsonFormatter", "StylishFormatter"]

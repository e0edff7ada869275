# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fake engine and message builders shared by the tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from lintstream.engines.formatters import CompactFormatter
from lintstream.models import LintResult


def error_message(text: str = "Unexpected var.", *, line: int = 1, fix: bool = False, fatal: bool = False) -> dict:
    message: dict[str, Any] = {"ruleId": "no-var", "severity": 2, "message": text, "line": line, "column": 1}
    if fix:
        message["fix"] = {"range": [0, 3], "text": "let"}
    if fatal:
        message["fatal"] = True
    return message


def warning_message(text: str = "Missing semicolon.", *, line: int = 1, fix: bool = False) -> dict:
    message: dict[str, Any] = {"ruleId": "semi", "severity": 1, "message": text, "line": line, "column": 1}
    if fix:
        message["fix"] = {"range": [9, 9], "text": ";"}
    return message


class FakeEngine:
    """In-memory engine returning canned results keyed by file name."""

    def __init__(
        self,
        cwd: Path,
        *,
        messages: Mapping[str, Sequence[dict]] | None = None,
        outputs: Mapping[str, str] | None = None,
        ignored: Sequence[str] = (),
        empty: Sequence[str] = (),
        failures: Mapping[str, BaseException] | None = None,
        rules_meta: Mapping[str, Any] | None = None,
    ) -> None:
        self.cwd = cwd
        self.messages = dict(messages or {})
        self.outputs = dict(outputs or {})
        self.ignored = set(ignored)
        self.empty = set(empty)
        self.failures = dict(failures or {})
        self.rules_meta = dict(rules_meta or {})
        self.linted: list[tuple[str, str]] = []
        self.loaded_formatters: list[str | None] = []
        self.rules_meta_calls = 0

    def is_path_ignored(self, path: Path) -> bool:
        return path.name in self.ignored

    async def lint_text(self, text: str, path: Path) -> list[LintResult]:
        self.linted.append((path.name, text))
        if path.name in self.failures:
            raise self.failures[path.name]
        if path.name in self.empty:
            return []
        payload: dict[str, Any] = {"filePath": str(path), "messages": list(self.messages.get(path.name, []))}
        if path.name in self.outputs:
            payload["output"] = self.outputs[path.name]
        return [LintResult.model_validate(payload)]

    def load_formatter(self, name: str | None = None) -> CompactFormatter:
        self.loaded_formatters.append(name)
        return CompactFormatter()

    def get_rules_meta_for_results(self, results: Sequence[LintResult]) -> dict[str, Any]:
        self.rules_meta_calls += 1
        return self.rules_meta



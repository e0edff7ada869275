# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pure operations over lint results: filtering, ordering and ignore results."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from typing import Final

from .models import LintMessage, LintResult
from .severity import Severity

MessagePredicate = Callable[[LintMessage, int, LintResult], object]

_HIDDEN_SEGMENT: Final[re.Pattern[str]] = re.compile(r"(?<![^/\\])\.(?!\.)")
_NODE_MODULES_SEGMENT: Final[re.Pattern[str]] = re.compile(r"(?<![^/\\])node_modules[/\\]")

HIDDEN_PATH_MESSAGE: Final[str] = (
    'File ignored by default. Use a negated ignore pattern (like "!<relative/path/to/filename>") to override.'
)
NODE_MODULES_MESSAGE: Final[str] = (
    'File ignored by default. Use a negated ignore pattern like "!node_modules/*" to override.'
)
IGNORE_PATTERN_MESSAGE: Final[str] = (
    'File ignored because of a matching ignore pattern. Set "ignore" option to false to override.'
)


def filter_result(result: LintResult, predicate: MessagePredicate) -> LintResult:
    """Return a copy of ``result`` keeping only messages accepted by ``predicate``.

    Args:
        result: Result to filter; it is not modified.
        predicate: Called as ``predicate(message, index, result)`` where
            ``result`` is the original, unfiltered result.

    Returns:
        LintResult: New result with the retained messages and recomputed counts.
    """

    kept = [message for index, message in enumerate(result.messages) if predicate(message, index, result)]
    return result.with_messages(kept)


def ignore_reason(file_path: str | os.PathLike[str], base_dir: str | os.PathLike[str]) -> str:
    """Return the warning text explaining why ``file_path`` was ignored."""

    relative_path = os.path.relpath(file_path, base_dir)
    if _HIDDEN_SEGMENT.search(relative_path):
        return HIDDEN_PATH_MESSAGE
    if _NODE_MODULES_SEGMENT.search(relative_path):
        return NODE_MODULES_MESSAGE
    return IGNORE_PATTERN_MESSAGE


def create_ignore_result(file_path: str | os.PathLike[str], base_dir: str | os.PathLike[str]) -> LintResult:
    """Build the result reported for a file the engine ignores.

    Hidden path segments take precedence over ``node_modules`` segments when
    choosing the reason.

    Args:
        file_path: Absolute path of the ignored file.
        base_dir: Absolute path of the directory the reason is computed from.

    Returns:
        LintResult: Result with a single warning and no errors.
    """

    message = LintMessage(fatal=False, severity=int(Severity.WARNING), message=ignore_reason(file_path, base_dir))
    return LintResult(file_path=os.fspath(file_path), messages=[message])


def compare_results_by_file_path(first: LintResult, second: LintResult) -> int:
    """Compare two results by path, returning -1, 0 or 1."""

    if first.file_path > second.file_path:
        return 1
    if first.file_path < second.file_path:
        return -1
    return 0


def result_sort_key(result: LintResult) -> str:
    """Return the key ordering results the way formatters expect."""

    return result.file_path


__all__ = [
    "HIDDEN_PATH_MESSAGE",
    "IGNORE_PATTERN_MESSAGE",
    "MessagePredicate",
    "NODE_MODULES_MESSAGE",
    "compare_results_by_file_path",
    "create_ignore_result",
    "filter_result",
    "ignore_reason",
    "result_sort_key",
]

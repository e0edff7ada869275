# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stages handing lint results to user hooks."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .callbacks import adapt_hook
from .errors import HandlerFailure
from .files import File
from .models import ResultCollection
from .streams import TransformStage, create_transform


def result(action: Callable[..., Any]) -> TransformStage:
    """Call ``action`` with each file's result before forwarding the file.

    ``action`` may be a plain function, a coroutine function or a
    callback-style function taking ``(result, done)``. Files without a result
    are forwarded without calling it.
    """

    hook = adapt_hook(action)

    async def handle_file(file: File) -> None:
        if file.lint_result is not None:
            await hook(file.lint_result)

    return create_transform(handle_file, error_type=HandlerFailure, name="result")


class ResultsCollector:
    """Accumulate results and hand the frozen collection to a hook at end of stream."""

    def __init__(self, action: Callable[..., Any]) -> None:
        self._hook = adapt_hook(action)
        self.collection = ResultCollection()

    def add(self, file: File) -> None:
        if file.lint_result is not None:
            self.collection.append(file.lint_result)

    async def finish(self) -> None:
        await self._hook(self.collection.freeze())


def results(action: Callable[..., Any]) -> TransformStage:
    """Call ``action`` once, at end of stream, with a :class:`ResultCollection`.

    The collection holds every attached result in arrival order together with
    the running ``error_count``, ``warning_count``, ``fixable_error_count``,
    ``fixable_warning_count`` and ``fatal_error_count`` totals.
    """

    collector = ResultsCollector(action)
    return create_transform(collector.add, collector.finish, error_type=HandlerFailure, name="results")


__all__ = ["ResultsCollector", "result", "results"]

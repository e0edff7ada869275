# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatter resolution and output stages."""

from __future__ import annotations

from collections.abc import Sequence
from functools import cached_property
from pathlib import Path
from typing import Any

from .callbacks import maybe_await
from .errors import PluginError
from .files import File
from .interfaces.engine import FormatterFunction, LintContext, LintEngine, LoadedFormatter, Writer
from .linter import create_context
from .logging import plain
from .models import LintResult
from .options import NormalizedOptions
from .results import result_sort_key
from .streams import TransformStage, create_transform

FormatterRef = str | LoadedFormatter | FormatterFunction | None
WriterRef = Writer | Any | None

MIXED_ENGINES_MESSAGE = "The files in the stream were not processed by the same instance of the lint engine"


class FormatterData:
    """Second argument passed to formatter functions.

    ``rules_meta`` is computed on first access and cached.
    """

    def __init__(self, cwd: Path, engine: LintEngine, results: Sequence[LintResult]) -> None:
        self.cwd = cwd
        self._engine = engine
        self._results = results

    @cached_property
    def rules_meta(self) -> Any:
        return self._engine.get_rules_meta_for_results(self._results)


class FunctionFormatter:
    """Formatter object wrapping a ``formatter(results, data)`` function."""

    def __init__(self, function: FormatterFunction, context: LintContext) -> None:
        self.function = function
        self.context = context

    def format(self, results: Sequence[LintResult]) -> Any:
        ordered = sorted(results, key=result_sort_key)
        return self.function(ordered, FormatterData(self.context.cwd, self.context.engine, ordered))


def _has_format_method(formatter: object) -> bool:
    return not isinstance(formatter, str) and callable(getattr(formatter, "format", None))


async def resolve_formatter(context: LintContext, formatter: FormatterRef = None) -> LoadedFormatter:
    """Return a formatter object for ``formatter``.

    Args:
        context: Engine context used to load named formatters and rule metadata.
        formatter: A formatter object (anything with ``format``), a formatter
            function, or the name of a formatter known to the engine. ``None``
            selects the engine's default formatter.

    Returns:
        LoadedFormatter: Object exposing ``format(results)``.
    """

    if formatter is not None and _has_format_method(formatter):
        return formatter
    if callable(formatter):
        return FunctionFormatter(formatter, context)
    return await maybe_await(context.engine.load_formatter(formatter))


def default_writer(message: str) -> None:
    """Print formatter output through the console helpers."""

    plain(message)


def resolve_writer(writer: WriterRef = None) -> Writer:
    """Return a unary function writing formatted output.

    Args:
        writer: Object with a ``write`` method, a function, or ``None`` for the
            console writer.

    Returns:
        Writer: Function called with each formatted report.

    Raises:
        TypeError: If ``writer`` is neither writable nor callable.
    """

    if writer is None:
        return default_writer
    write = getattr(writer, "write", None)
    if callable(write):
        return write
    if callable(writer):
        return writer
    raise TypeError("writer must be callable or expose a write() method")


async def write_results(results: Sequence[LintResult], formatter: LoadedFormatter, writer: Writer | None) -> None:
    """Format ``results`` and write the output when it is not empty."""

    message = await maybe_await(formatter.format(results))
    if writer is not None and message is not None and message != "":
        await maybe_await(writer(message))


def _default_context() -> LintContext:
    return create_context(NormalizedOptions())


def format_all(formatter: FormatterRef = None, writer: WriterRef = None) -> TransformStage:
    """Format every result once the stream ends and write the report.

    Raises ``PluginError`` at end of stream when results come from more than
    one engine context.
    """

    write = resolve_writer(writer)
    collected: list[LintResult] = []
    contexts: list[LintContext] = []

    def handle_file(file: File) -> None:
        if file.lint_result is None:
            return
        collected.append(file.lint_result)
        context = file.lint_context
        if context is not None and not any(known is context for known in contexts):
            contexts.append(context)

    async def handle_final() -> None:
        if not collected:
            return
        if len(contexts) > 1:
            raise PluginError(MIXED_ENGINES_MESSAGE)
        context = contexts[0] if contexts else _default_context()
        formatter_obj = await resolve_formatter(context, formatter)
        await write_results(collected, formatter_obj, write)

    return create_transform(handle_file, handle_final, name="format_all")


def format_each(formatter: FormatterRef = None, writer: WriterRef = None) -> TransformStage:
    """Format and write each file's result as it passes through."""

    write = resolve_writer(writer)
    resolved: dict[int, tuple[LintContext, LoadedFormatter]] = {}

    async def formatter_for(context: LintContext) -> LoadedFormatter:
        entry = resolved.get(id(context))
        if entry is None:
            entry = (context, await resolve_formatter(context, formatter))
            resolved[id(context)] = entry
        return entry[1]

    async def handle_file(file: File) -> None:
        if file.lint_result is None:
            return
        context = file.lint_context or _default_context()
        formatter_obj = await formatter_for(context)
        await write_results([file.lint_result], formatter_obj, write)

    return create_transform(handle_file, name="format_each")


__all__ = [
    "FormatterData",
    "FormatterRef",
    "FunctionFormatter",
    "default_writer",
    "format_all",
    "format_each",
    "resolve_formatter",
    "resolve_writer",
    "write_results",
]


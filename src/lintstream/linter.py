# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint stage attaching engine results to files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping
from pathlib import Path
from typing import Any

from .callbacks import maybe_await
from .engines import EslintCliEngine
from .errors import FatalEngineError, LintFailure, PluginError, create_plugin_error
from .files import File
from .interfaces.engine import LintContext, LintEngine
from .models import LintMessage, LintResult
from .options import NormalizedOptions, QuietOption, migrate_options
from .results import MessagePredicate, create_ignore_result, filter_result
from .severity import is_error_message
from .streams import TransformStage, create_transform

LOGGER = logging.getLogger(__name__)

EngineFactory = Callable[[Mapping[str, Any]], LintEngine]


def _keep_errors(message: LintMessage, index: int, result: LintResult) -> bool:
    return is_error_message(message)


def quiet_filter(quiet: QuietOption) -> MessagePredicate | None:
    """Return the message predicate implied by the ``quiet`` option."""

    if quiet is True:
        return _keep_errors
    if callable(quiet):
        return quiet
    return None


def _normalize_extensions(extensions: Collection[str] | None) -> frozenset[str] | None:
    if extensions is None:
        return None
    return frozenset(ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions)


def create_context(
    options: NormalizedOptions,
    *,
    engine: LintEngine | None = None,
    engine_factory: EngineFactory | None = None,
) -> LintContext:
    """Instantiate the engine for ``options`` and bundle it with its working directory."""

    if engine is None:
        factory = engine_factory or EslintCliEngine.from_options
        engine = factory(options.engine_options)
    cwd = getattr(engine, "cwd", None) or options.engine_options.get("cwd") or Path.cwd()
    return LintContext(cwd=Path(cwd), engine=engine)


class FileLinter:
    """Per-file lint handler bound to one engine context."""

    def __init__(
        self,
        options: NormalizedOptions,
        context: LintContext,
        *,
        extensions: Collection[str] | None = None,
    ) -> None:
        self.options = options
        self.context = context
        self.extensions = _normalize_extensions(extensions)
        self._quiet = quiet_filter(options.quiet)

    def has_lintable_extension(self, path: Path) -> bool:
        return self.extensions is None or path.suffix.lower() in self.extensions

    async def _lint(self, file: File) -> LintResult | None:
        engine = self.context.engine
        if not self.has_lintable_extension(file.path) or await maybe_await(engine.is_path_ignored(file.path)):
            LOGGER.debug("Skipping ignored file %s", file.path)
            if self.options.warn_ignored:
                return create_ignore_result(file.path, self.context.cwd)
            return None
        results = await maybe_await(engine.lint_text(file.text, file.path))
        if not results:
            return None
        result = results[0]
        if result.output is not None:
            file.text = result.output
            result = result.model_copy(update={"fixed": True})
        if self._quiet is not None:
            result = filter_result(result, self._quiet)
        return result

    async def __call__(self, file: File) -> None:
        if file.is_null():
            return
        try:
            result = await self._lint(file)
        except PluginError:
            raise
        except FatalEngineError as exc:
            raise PluginError(str(exc), show_stack=True, file_name=str(file.path)) from exc
        except Exception as exc:
            raise create_plugin_error(exc, error_type=LintFailure, file_name=str(file.path)) from exc
        if result is not None:
            file.lint_result = result
            file.lint_context = self.context


def lint(
    options: str | Mapping[str, Any] | None = None,
    *,
    engine: LintEngine | None = None,
    engine_factory: EngineFactory | None = None,
    extensions: Collection[str] | None = None,
) -> TransformStage:
    """Create the stage linting every file and attaching its result.

    Args:
        options: Raw user options; see :func:`lintstream.options.migrate_options`.
        engine: Ready engine instance; takes precedence over ``engine_factory``.
        engine_factory: Callable building an engine from the migrated engine
            options; defaults to :class:`EslintCliEngine`.
        extensions: File suffixes to lint; ``None`` lints every file.

    Returns:
        TransformStage: Stage setting ``file.lint_result`` and ``file.lint_context``.

    Raises:
        InvalidOptionsError: If ``options`` cannot be migrated.
    """

    normalized = migrate_options(options)
    context = create_context(normalized, engine=engine, engine_factory=engine_factory)
    return create_transform(FileLinter(normalized, context, extensions=extensions), name="lint")


__all__ = ["EngineFactory", "FileLinter", "create_context", "lint", "quiet_filter"]

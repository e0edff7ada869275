# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Object-stream stages and the pipeline that chains them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from .callbacks import maybe_await
from .errors import PluginError, create_plugin_error
from .files import File

LOGGER = logging.getLogger(__name__)

FileHandler = Callable[[File], Any]
FinalHandler = Callable[[], Any]
ErrorHandler = Callable[[PluginError], Any]


@runtime_checkable
class Stage(Protocol):
    """A pipeline stage receiving and forwarding files."""

    async def transform(self, file: File) -> File | None:
        """Process ``file`` and return it, or ``None`` to drop it."""

        raise NotImplementedError

    async def flush(self) -> None:
        """Run end-of-stream work once every file has been transformed."""

        raise NotImplementedError


class TransformStage:
    """Stage built from a per-file handler and an optional final handler.

    Handlers may be synchronous or return an awaitable. Files are forwarded
    unchanged once the handler settles; any failure is re-raised as a
    :class:`PluginError` (``error_type``) and the file is dropped.
    """

    def __init__(
        self,
        handle_file: FileHandler,
        handle_final: FinalHandler | None = None,
        *,
        error_type: type[PluginError] = PluginError,
        name: str | None = None,
    ) -> None:
        self._handle_file = handle_file
        self._handle_final = handle_final
        self._error_type = error_type
        self.name = name or getattr(handle_file, "__name__", type(self).__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    async def transform(self, file: File) -> File | None:
        try:
            await maybe_await(self._handle_file(file))
        except PluginError:
            raise
        except Exception as exc:
            raise create_plugin_error(exc, error_type=self._error_type, file_name=str(file.path)) from exc
        return file

    async def flush(self) -> None:
        if self._handle_final is None:
            return
        try:
            await maybe_await(self._handle_final())
        except PluginError:
            raise
        except Exception as exc:
            raise create_plugin_error(exc, error_type=self._error_type) from exc


def create_transform(
    handle_file: FileHandler,
    handle_final: FinalHandler | None = None,
    *,
    error_type: type[PluginError] = PluginError,
    name: str | None = None,
) -> TransformStage:
    """Create a stage from synchronous or asynchronous handler functions.

    Args:
        handle_file: Called with each file; the file is forwarded once the call
            (and any awaitable it returns) settles.
        handle_final: Called with no arguments after the last file, before the
            stage completes.
        error_type: :class:`PluginError` subclass used to wrap failures.
        name: Optional stage name used in ``repr`` and debug logs.

    Returns:
        TransformStage: Stage suitable for :class:`Pipeline`.
    """

    return TransformStage(handle_file, handle_final, error_type=error_type, name=name)


async def _iterate(files: Iterable[File] | AsyncIterable[File]) -> AsyncIterator[File]:
    if isinstance(files, AsyncIterable):
        async for file in files:
            yield file
    else:
        for file in files:
            yield file


class Pipeline:
    """Linear chain of stages processing files one at a time in arrival order.

    Recoverable errors (``PluginError.fatal`` is ``False``) are handed to
    ``on_error`` and the offending file is dropped; without a handler, and for
    every fatal error, the run aborts and the error propagates. Results already
    produced are kept.
    """

    def __init__(self, *stages: Stage, on_error: ErrorHandler | None = None) -> None:
        self._stages: tuple[Stage, ...] = stages
        self._on_error = on_error

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def pipe(self, stage: Stage) -> Pipeline:
        """Return a new pipeline with ``stage`` appended."""

        return Pipeline(*self._stages, stage, on_error=self._on_error)

    async def _process(self, file: File) -> File | None:
        current: File | None = file
        for stage in self._stages:
            try:
                current = await stage.transform(current)
            except PluginError as err:
                if err.fatal or self._on_error is None:
                    raise
                LOGGER.debug("Dropping %s after recoverable error: %s", file.path, err)
                await maybe_await(self._on_error(err))
                return None
            if current is None:
                return None
        return current

    async def stream(self, files: Iterable[File] | AsyncIterable[File]) -> AsyncIterator[File]:
        """Yield files leaving the last stage, then run every stage's flush."""

        async for file in _iterate(files):
            processed = await self._process(file)
            if processed is not None:
                yield processed
        for stage in self._stages:
            await stage.flush()

    async def run(self, files: Iterable[File] | AsyncIterable[File]) -> list[File]:
        """Drive the pipeline to completion and return the emitted files."""

        return [file async for file in self.stream(files)]

    def run_sync(self, files: Iterable[File] | AsyncIterable[File]) -> list[File]:
        """Run the pipeline on a fresh event loop."""

        return asyncio.run(self.run(files))


__all__ = ["ErrorHandler", "FileHandler", "FinalHandler", "Pipeline", "Stage", "TransformStage", "create_transform"]

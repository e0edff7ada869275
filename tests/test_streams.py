# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for transform stages and the pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable

import pytest

from lintstream.errors import HandlerFailure, LintFailure, PluginError, create_plugin_error
from lintstream.files import File
from lintstream.streams import Pipeline, Stage, create_transform


def test_files_pass_through_in_arrival_order(make_file: Callable[..., File]) -> None:
    files = [make_file(f"{name}.js") for name in ("c", "a", "b")]
    seen: list[str] = []

    async def handle(file: File) -> None:
        await asyncio.sleep(0.01 if file.path.stem == "c" else 0)
        seen.append(file.path.stem)

    emitted = Pipeline(create_transform(handle)).run_sync(files)

    assert seen == ["c", "a", "b"]
    assert emitted == files


def test_final_runs_after_every_item(make_file: Callable[..., File]) -> None:
    events: list[str] = []

    async def handle(file: File) -> None:
        await asyncio.sleep(0)
        events.append(file.path.stem)

    def final() -> None:
        events.append("final")

    Pipeline(create_transform(handle, final)).run_sync([make_file("a.js"), make_file("b.js")])

    assert events == ["a", "b", "final"]


def test_finals_run_in_stage_order(make_file: Callable[..., File]) -> None:
    events: list[str] = []
    first = create_transform(lambda file: events.append("first item"), lambda: events.append("first final"))
    second = create_transform(lambda file: events.append("second item"), lambda: events.append("second final"))

    Pipeline(first, second).run_sync([make_file("a.js")])

    assert events == ["first item", "second item", "first final", "second final"]


def test_handler_error_is_wrapped(make_file: Callable[..., File]) -> None:
    def handle(file: File) -> None:
        raise ValueError("bad file")

    with pytest.raises(PluginError, match="bad file") as excinfo:
        Pipeline(create_transform(handle)).run_sync([make_file("a.js")])

    error = excinfo.value
    assert error.plugin == "lintstream"
    assert error.show_stack is True
    assert isinstance(error.__cause__, ValueError)
    assert error.file_name is not None and error.file_name.endswith("a.js")


def test_tagged_errors_are_not_rewrapped(make_file: Callable[..., File]) -> None:
    original = HandlerFailure("already tagged")

    def handle(file: File) -> None:
        raise original

    with pytest.raises(HandlerFailure) as excinfo:
        Pipeline(create_transform(handle)).run_sync([make_file("a.js")])

    assert excinfo.value is original


def test_async_handler_rejection_is_wrapped(make_file: Callable[..., File]) -> None:
    async def handle(file: File) -> None:
        raise RuntimeError("rejected")

    with pytest.raises(PluginError, match="rejected"):
        Pipeline(create_transform(handle)).run_sync([make_file("a.js")])


def test_final_error_prevents_completion(make_file: Callable[..., File]) -> None:
    events: list[str] = []

    def final() -> None:
        raise OSError("cannot finish")

    stages = (create_transform(lambda file: None, final), create_transform(lambda file: None, lambda: events.append("x")))

    with pytest.raises(PluginError, match="cannot finish"):
        Pipeline(*stages).run_sync([make_file("a.js")])

    assert events == []


def test_recoverable_errors_go_to_on_error(make_file: Callable[..., File]) -> None:
    reported: list[PluginError] = []

    def handle(file: File) -> None:
        if file.path.stem == "b":
            raise LintFailure("Parsing error", file_name=str(file.path))

    files = [make_file("a.js"), make_file("b.js"), make_file("c.js")]
    emitted = Pipeline(create_transform(handle), on_error=reported.append).run_sync(files)

    assert [file.path.stem for file in emitted] == ["a", "c"]
    assert [error.message for error in reported] == ["Parsing error"]


def test_recoverable_error_without_handler_aborts(make_file: Callable[..., File]) -> None:
    def handle(file: File) -> None:
        raise LintFailure("Parsing error")

    with pytest.raises(LintFailure):
        Pipeline(create_transform(handle)).run_sync([make_file("a.js")])


def test_fatal_errors_abort_even_with_handler(make_file: Callable[..., File]) -> None:
    reported: list[PluginError] = []
    seen: list[str] = []

    def handle(file: File) -> None:
        seen.append(file.path.stem)
        raise RuntimeError("fatal")

    with pytest.raises(PluginError):
        Pipeline(create_transform(handle), on_error=reported.append).run_sync([make_file("a.js"), make_file("b.js")])

    assert seen == ["a"]
    assert reported == []


def test_async_iterable_source(make_file: Callable[..., File]) -> None:
    files = [make_file("a.js"), make_file("b.js")]

    async def source() -> AsyncIterator[File]:
        for file in files:
            await asyncio.sleep(0)
            yield file

    emitted = asyncio.run(Pipeline(create_transform(lambda file: None)).run(source()))

    assert emitted == files


def test_pipe_appends_stage(make_file: Callable[..., File]) -> None:
    base = Pipeline(create_transform(lambda file: None))
    extended = base.pipe(create_transform(lambda file: None))

    assert len(base.stages) == 1
    assert len(extended.stages) == 2
    assert all(isinstance(stage, Stage) for stage in extended.stages)


def test_none_error_becomes_unknown_error() -> None:
    error = create_plugin_error(None)

    assert error.message == "Unknown Error"
    assert error.show_stack is True

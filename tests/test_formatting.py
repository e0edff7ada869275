# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for formatter resolution and the format stages."""

from __future__ import annotations

import asyncio
import io
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from lintstream.engines.formatters import CompactFormatter
from lintstream.errors import PluginError
from lintstream.files import File
from lintstream.formatting import (
    FormatterData,
    default_writer,
    format_all,
    format_each,
    resolve_formatter,
    resolve_writer,
    write_results,
)
from lintstream.interfaces.engine import LintContext
from lintstream.linter import lint
from lintstream.models import LintResult
from lintstream.streams import Pipeline
from tests.support import FakeEngine, error_message


class RecordingFormatter:
    def __init__(self, output: str = "report") -> None:
        self.output = output
        self.calls: list[list[str]] = []

    def format(self, results: Sequence[LintResult]) -> str:
        self.calls.append([result.file_path for result in results])
        return self.output


def _context(engine: FakeEngine) -> LintContext:
    return LintContext(cwd=engine.cwd, engine=engine)


def test_formatter_object_is_used_as_is(engine: FakeEngine) -> None:
    formatter = RecordingFormatter()

    assert asyncio.run(resolve_formatter(_context(engine), formatter)) is formatter


def test_formatter_name_is_loaded_by_engine(engine: FakeEngine) -> None:
    resolved = asyncio.run(resolve_formatter(_context(engine), "compact"))

    assert isinstance(resolved, CompactFormatter)
    assert engine.loaded_formatters == ["compact"]


def test_default_formatter_is_loaded_by_engine(engine: FakeEngine) -> None:
    asyncio.run(resolve_formatter(_context(engine)))

    assert engine.loaded_formatters == [None]


def test_formatter_function_gets_sorted_results_and_lazy_rules_meta(engine: FakeEngine) -> None:
    engine.rules_meta = {"no-var": {"type": "suggestion"}}
    received: list[Any] = []

    def formatter(results: list[LintResult], data: FormatterData) -> str:
        received.append([result.file_path for result in results])
        assert engine.rules_meta_calls == 0
        received.append(data.rules_meta)
        received.append(data.rules_meta)
        received.append(data.cwd)
        return "done"

    resolved = asyncio.run(resolve_formatter(_context(engine), formatter))
    output = resolved.format([LintResult(file_path="/b.js"), LintResult(file_path="/a.js")])

    assert output == "done"
    assert received[0] == ["/a.js", "/b.js"]
    assert received[1] == {"no-var": {"type": "suggestion"}}
    assert received[2] is received[1]
    assert received[3] == engine.cwd
    assert engine.rules_meta_calls == 1


def test_resolve_writer_variants() -> None:
    stream = io.StringIO()
    collected: list[str] = []

    resolve_writer(stream)("to stream")
    resolve_writer(collected.append)("to list")

    assert stream.getvalue() == "to stream"
    assert collected == ["to list"]
    assert resolve_writer() is default_writer
    with pytest.raises(TypeError):
        resolve_writer(42)


def test_write_results_skips_empty_output() -> None:
    written: list[str] = []

    asyncio.run(write_results([], RecordingFormatter(""), written.append))

    assert written == []


def test_write_results_awaits_async_formatter_and_writer() -> None:
    written: list[str] = []

    class AsyncFormatter:
        async def format(self, results: Sequence[LintResult]) -> str:
            return "async report"

    async def writer(message: str) -> None:
        written.append(message)

    asyncio.run(write_results([], AsyncFormatter(), writer))

    assert written == ["async report"]


def test_format_all_writes_once_at_end(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    formatter = RecordingFormatter()
    written: list[str] = []

    Pipeline(lint(engine=engine), format_all(formatter, written.append)).run_sync(
        [make_file("b.js"), make_file("a.js")],
    )

    assert written == ["report"]
    assert len(formatter.calls) == 1
    assert [path.rsplit("/", 1)[-1] for path in formatter.calls[0]] == ["b.js", "a.js"]


def test_format_all_without_results_writes_nothing(make_file: Callable[..., File]) -> None:
    formatter = RecordingFormatter()
    written: list[str] = []

    Pipeline(format_all(formatter, written.append)).run_sync([make_file("a.js")])

    assert written == []
    assert formatter.calls == []


def test_format_all_rejects_mixed_engines(tmp_path: Path, make_file: Callable[..., File]) -> None:
    first = lint(engine=FakeEngine(tmp_path))
    second = lint(engine=FakeEngine(tmp_path))
    file_a, file_b = make_file("a.js"), make_file("b.js")
    Pipeline(first).run_sync([file_a])
    Pipeline(second).run_sync([file_b])

    with pytest.raises(PluginError, match="not processed by the same instance"):
        Pipeline(format_all(RecordingFormatter(), lambda message: None)).run_sync([file_a, file_b])


def test_format_each_writes_per_file(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.messages["a.js"] = [error_message("boom", line=2)]
    written: list[str] = []

    Pipeline(lint(engine=engine), format_each("compact", written.append)).run_sync(
        [make_file("a.js"), make_file("b.js")],
    )

    assert len(written) == 1
    assert "line 2, col 1, Error - boom (no-var)" in written[0]
    assert engine.loaded_formatters == ["compact"]


def test_default_writer_prints_to_console(capsys: pytest.CaptureFixture[str]) -> None:
    default_writer("formatted output")

    assert "formatted output" in capsys.readouterr().out

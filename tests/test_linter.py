# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the lint stage."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from lintstream.errors import FatalEngineError, InvalidOptionsError, LintFailure, PluginError
from lintstream.files import File
from lintstream.linter import lint
from lintstream.results import IGNORE_PATTERN_MESSAGE
from lintstream.streams import Pipeline
from tests.support import FakeEngine, error_message, warning_message


def _run(stage: Any, *files: File, **kwargs: Any) -> list[File]:
    return Pipeline(stage, **kwargs).run_sync(list(files))


def test_result_is_attached(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.messages["a.js"] = [error_message(), warning_message()]
    file = make_file("a.js")

    _run(lint(engine=engine), file)

    assert file.lint_result is not None
    assert file.lint_result.file_path == str(file.path)
    assert (file.lint_result.error_count, file.lint_result.warning_count) == (1, 1)
    assert file.lint_context is not None and file.lint_context.engine is engine
    assert engine.linted == [("a.js", "var a = 1\n")]


def test_ignored_file_with_warn_ignored(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.ignored.add("a.js")
    file = make_file("a.js")

    _run(lint({"warnIgnored": True}, engine=engine), file)

    assert engine.linted == []
    assert file.lint_result is not None
    assert file.lint_result.warning_count == 1
    assert file.lint_result.messages[0].message == IGNORE_PATTERN_MESSAGE


def test_ignored_file_without_warn_ignored(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.ignored.add("a.js")
    file = make_file("a.js")

    emitted = _run(lint(engine=engine), file)

    assert emitted == [file]
    assert engine.linted == []
    assert file.lint_result is None


def test_extension_mismatch_is_skipped(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    css = make_file("style.css", "a {}")
    js = make_file("a.js")

    _run(lint({"warnFileIgnored": True}, engine=engine, extensions=["js", ".MJS"]), css, js)

    assert [name for name, _ in engine.linted] == ["a.js"]
    assert css.lint_result is not None and css.lint_result.warning_count == 1


def test_fix_output_replaces_contents(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.outputs["a.js"] = "let a = 1;\n"
    fixed = make_file("a.js")
    clean = make_file("b.js")

    _run(lint({"fix": True}, engine=engine), fixed, clean)

    assert fixed.contents == b"let a = 1;\n"
    assert fixed.lint_result is not None and fixed.lint_result.fixed is True
    assert clean.contents == b"var a = 1\n"
    assert clean.lint_result is not None and clean.lint_result.fixed is None


def test_quiet_true_drops_warnings(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.messages["a.js"] = [warning_message(fix=True), error_message(), warning_message()]
    file = make_file("a.js")

    _run(lint({"quiet": True}, engine=engine), file)

    assert file.lint_result is not None
    assert [message.severity for message in file.lint_result.messages] == [2]
    assert (file.lint_result.warning_count, file.lint_result.fixable_warning_count) == (0, 0)


def test_quiet_function_filters_in_order(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.messages["a.js"] = [error_message("one"), error_message("two", line=2), warning_message("three")]
    file = make_file("a.js")

    def keep(message: Any, index: int, result: Any) -> bool:
        return index != 1

    _run(lint({"quiet": keep}, engine=engine), file)

    assert file.lint_result is not None
    assert [message.message for message in file.lint_result.messages] == ["one", "three"]
    assert file.lint_result.error_count == 1


def test_no_engine_result_attaches_nothing(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.empty.add("a.js")
    file = make_file("a.js")

    emitted = _run(lint(engine=engine), file)

    assert emitted == [file]
    assert file.lint_result is None


def test_null_file_passes_through(engine: FakeEngine, tmp_path: Path) -> None:
    file = File(path=tmp_path / "dir", base=tmp_path)

    emitted = _run(lint(engine=engine), file)

    assert emitted == [file]
    assert engine.linted == []


def test_engine_failure_is_recoverable(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.failures["b.js"] = SyntaxError("Unexpected token")
    reported: list[PluginError] = []
    files = [make_file("a.js"), make_file("b.js"), make_file("c.js")]

    emitted = _run(lint(engine=engine), *files, on_error=reported.append)

    assert [file.path.name for file in emitted] == ["a.js", "c.js"]
    assert len(reported) == 1
    assert isinstance(reported[0], LintFailure)
    assert reported[0].file_name == str(files[1].path)
    assert isinstance(reported[0].__cause__, SyntaxError)


def test_fatal_engine_error_stops_the_run(engine: FakeEngine, make_file: Callable[..., File]) -> None:
    engine.failures["a.js"] = FatalEngineError("config broken")
    reported: list[PluginError] = []

    with pytest.raises(PluginError, match="config broken") as excinfo:
        _run(lint(engine=engine), make_file("a.js"), make_file("b.js"), on_error=reported.append)

    assert not isinstance(excinfo.value, LintFailure)
    assert reported == []
    assert [name for name, _ in engine.linted] == ["a.js"]


def test_invalid_options_fail_before_streaming(engine: FakeEngine) -> None:
    with pytest.raises(InvalidOptionsError, match="cacheFile"):
        lint({"cacheFile": ".cache"}, engine=engine)


def test_engine_factory_receives_engine_options(tmp_path: Path, make_file: Callable[..., File]) -> None:
    received: list[Mapping[str, Any]] = []

    def factory(options: Mapping[str, Any]) -> FakeEngine:
        received.append(options)
        return FakeEngine(tmp_path)

    _run(lint({"globals": ["jQuery"], "quiet": True}, engine_factory=factory), make_file("a.js"))

    assert received == [{"overrideConfig": {"globals": {"jQuery": False}}}]

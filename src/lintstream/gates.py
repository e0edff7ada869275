# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stages failing the pipeline when lint errors are present."""

from __future__ import annotations

from .aggregate import ResultsCollector
from .errors import GateFailure
from .files import File
from .models import LintResult, ResultCollection
from .severity import is_error_message
from .streams import TransformStage, create_transform


def _errors_phrase(count: int) -> str:
    return f"{count} error" if count == 1 else f"{count} errors"


def _raise_on_error(result: LintResult) -> None:
    if result.error_count <= 0:
        return
    first = next((message for message in result.messages if is_error_message(message)), None)
    detail = f": {first.message}" if first is not None and first.message else ""
    raise GateFailure(
        f"Failed with {_errors_phrase(result.error_count)} in {result.file_path}{detail}",
        file_name=result.file_path,
        line_number=first.line if first is not None else None,
    )


def fail_on_error() -> TransformStage:
    """Fail as soon as a file with lint errors reaches the stage.

    Later files are not processed by this stage or anything downstream.
    """

    def handle_file(file: File) -> None:
        if file.lint_result is not None:
            _raise_on_error(file.lint_result)

    return create_transform(handle_file, error_type=GateFailure, name="fail_on_error")


def _raise_on_total(collection: ResultCollection) -> None:
    if collection.error_count > 0:
        raise GateFailure(f"Failed with {_errors_phrase(collection.error_count)}")


def fail_after_error() -> TransformStage:
    """Let every file through, then fail at end of stream if any errors were seen."""

    collector = ResultsCollector(_raise_on_total)
    return create_transform(collector.add, collector.finish, error_type=GateFailure, name="fail_after_error")


__all__ = ["fail_after_error", "fail_on_error"]

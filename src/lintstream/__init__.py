# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stream files through a lint engine and act on the results.

Typical use::

    from lintstream import Pipeline, fail_after_error, format_all, lint, read_files

    Pipeline(lint({"rules": {"no-var": "error"}}), format_all(), fail_after_error()).run_sync(
        read_files(["src/app.js"]),
    )
"""

from __future__ import annotations

from .aggregate import result, results
from .errors import (
    FatalEngineError,
    GateFailure,
    HandlerFailure,
    InvalidOptionsError,
    LintFailure,
    PluginError,
)
from .files import RESULT_SLOT, File, read_files
from .fixing import fix
from .formatting import format_all, format_each, resolve_formatter, resolve_writer
from .gates import fail_after_error, fail_on_error
from .interfaces.engine import LintContext, LintEngine
from .linter import lint
from .models import LintMessage, LintResult, ResultCollection
from .options import NormalizedOptions, migrate_options
from .results import compare_results_by_file_path, create_ignore_result, filter_result
from .streams import Pipeline, TransformStage, create_transform

__version__ = "0.1.0"

__all__ = [
    "File",
    "FatalEngineError",
    "GateFailure",
    "HandlerFailure",
    "InvalidOptionsError",
    "LintContext",
    "LintEngine",
    "LintFailure",
    "LintMessage",
    "LintResult",
    "NormalizedOptions",
    "Pipeline",
    "PluginError",
    "RESULT_SLOT",
    "ResultCollection",
    "TransformStage",
    "__version__",
    "compare_results_by_file_path",
    "create_ignore_result",
    "create_transform",
    "fail_after_error",
    "fail_on_error",
    "filter_result",
    "fix",
    "format_all",
    "format_each",
    "lint",
    "migrate_options",
    "read_files",
    "resolve_formatter",
    "resolve_writer",
    "result",
    "results",
]

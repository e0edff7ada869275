# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line entry point running a lint pipeline over files on disk."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from .aggregate import results
from .engines import EslintCliEngine
from .errors import ConfigError, GateFailure, InvalidOptionsError, PluginError
from .files import read_files
from .fixing import fix
from .formatting import format_all
from .gates import fail_after_error, fail_on_error
from .interfaces.engine import LintEngine
from .linter import lint
from .logging import fail, ok, warn
from .models import ResultCollection
from .streams import Pipeline, Stage

EXIT_LINT_FAILED = 1
EXIT_BAD_OPTIONS = 2


class FailMode(str, Enum):
    """When the pipeline should fail on lint errors."""

    AFTER = "after"
    IMMEDIATE = "immediate"
    NEVER = "never"


@dataclass(slots=True)
class LintCLIOptions:
    """Normalized flags of the ``lint`` command."""

    paths: list[Path]
    config: Path | None = None
    fix: bool = False
    quiet: bool = False
    warn_ignored: bool = False
    formatter: str = "stylish"
    fail_mode: FailMode = FailMode.AFTER
    extensions: list[str] = field(default_factory=list)
    ignore_patterns: list[str] = field(default_factory=list)
    global_names: list[str] = field(default_factory=list)
    emoji: bool = True

    def to_raw_options(self) -> dict[str, Any]:
        """Return the raw options handed to :func:`lintstream.linter.lint`."""

        raw: dict[str, Any] = {"cwd": str(Path.cwd()), "fix": self.fix, "quiet": self.quiet}
        if self.config is not None:
            raw["configFile"] = str(self.config)
        if self.warn_ignored:
            raw["warnIgnored"] = True
        if self.ignore_patterns:
            raw["ignorePattern"] = list(self.ignore_patterns)
        if self.global_names:
            raw["globals"] = list(self.global_names)
        return raw


def build_engine(engine_options: Mapping[str, Any]) -> LintEngine:
    """Return the engine used by the CLI."""

    return EslintCliEngine.from_options(engine_options)


def build_pipeline(options: LintCLIOptions, summary: ResultCollection) -> Pipeline:
    """Assemble the stages for ``options``; totals are copied into ``summary``."""

    stages: list[Stage] = [
        lint(options.to_raw_options(), engine_factory=build_engine, extensions=options.extensions or None),
    ]
    if options.fix:
        stages.append(fix())
    stages.append(results(summary.extend))
    stages.append(format_all(options.formatter))
    if options.fail_mode is FailMode.IMMEDIATE:
        stages.append(fail_on_error())
    elif options.fail_mode is FailMode.AFTER:
        stages.append(fail_after_error())

    def report(error: PluginError) -> None:
        fail(str(error), use_emoji=options.emoji)

    return Pipeline(*stages, on_error=report)


app = typer.Typer(help="Stream files through a lint engine.", add_completion=False, no_args_is_help=True)


@app.callback()
def main() -> None:
    """Stream files through a lint engine."""


@app.command("lint")
def lint_command(
    paths: Annotated[list[Path], typer.Argument(exists=True, dir_okay=False, help="Files to lint.")],
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Override config file.")] = None,
    apply_fix: Annotated[bool, typer.Option("--fix", help="Apply fixes and write files back.")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", help="Report errors only.")] = False,
    warn_ignored: Annotated[bool, typer.Option("--warn-ignored", help="Warn about ignored files.")] = False,
    formatter: Annotated[str, typer.Option("--format", "-f", help="Formatter name.")] = "stylish",
    fail_mode: Annotated[FailMode, typer.Option("--fail", help="When to fail on lint errors.")] = FailMode.AFTER,
    extensions: Annotated[list[str] | None, typer.Option("--ext", help="Lintable file extension.")] = None,
    ignore_patterns: Annotated[
        list[str] | None,
        typer.Option("--ignore-pattern", help="Additional ignore pattern."),
    ] = None,
    global_names: Annotated[list[str] | None, typer.Option("--global", help="Global name[:true].")] = None,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Use emoji in messages.")] = True,
) -> None:
    """Lint PATHS and print a report."""

    options = LintCLIOptions(
        paths=paths,
        config=config,
        fix=apply_fix,
        quiet=quiet,
        warn_ignored=warn_ignored,
        formatter=formatter,
        fail_mode=fail_mode,
        extensions=extensions or [],
        ignore_patterns=ignore_patterns or [],
        global_names=global_names or [],
        emoji=emoji,
    )
    summary = ResultCollection()
    try:
        pipeline = build_pipeline(options, summary)
        pipeline.run_sync(read_files(options.paths))
    except (InvalidOptionsError, ConfigError) as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_BAD_OPTIONS) from exc
    except GateFailure as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_LINT_FAILED) from exc
    except PluginError as exc:
        fail(f"{exc.plugin}: {exc}", use_emoji=emoji)
        raise typer.Exit(code=EXIT_LINT_FAILED) from exc

    totals = summary.totals()
    if totals["warning_count"]:
        warn(f"{totals['warning_count']} warning(s) in {len(summary)} file(s)", use_emoji=emoji)
    if totals["fixable_error_count"] or totals["fixable_warning_count"]:
        fixable = totals["fixable_error_count"] + totals["fixable_warning_count"]
        warn(f"{fixable} problem(s) can be fixed with --fix", use_emoji=emoji)
    ok(f"Linted {len(summary)} file(s) with {totals['error_count']} error(s)", use_emoji=emoji)


__all__ = ["FailMode", "LintCLIOptions", "app", "build_engine", "build_pipeline", "lint_command"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Engine adapter invoking the ESLint command-line interface."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Mapping, Sequence
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Any, Final

from pydantic import ValidationError

from ..config import EngineConfig
from ..models import LintResult
from ..process_utils import run_command
from .formatters import BUILTIN_FORMATTERS, DEFAULT_FORMATTER, CompactFormatter, JsonFormatter, StylishFormatter

LOGGER = logging.getLogger(__name__)

# ESLint exits with 0 (clean) or 1 (lint errors); anything else is a crash or bad config.
LINT_EXIT_CODES: Final[frozenset[int]] = frozenset({0, 1})
NEGATION_PREFIX: Final[str] = "!"
NODE_MODULES: Final[str] = "node_modules"


class EslintCliError(RuntimeError):
    """Raised when the ESLint executable fails or emits unreadable output."""


def _boolean_map_arg(mapping: Mapping[str, bool], *, with_values: bool) -> str:
    if with_values:
        return ",".join(f"{key}:{str(value).lower()}" for key, value in mapping.items())
    return ",".join(key for key, value in mapping.items() if value)


def _override_args(override_config: Mapping[str, Any]) -> list[str]:
    """Translate ``overrideConfig`` entries into ESLint CLI flags."""

    args: list[str] = []
    env = override_config.get("env")
    if env:
        enabled = _boolean_map_arg(env, with_values=False)
        if enabled:
            args.extend(["--env", enabled])
    globals_ = override_config.get("globals")
    if globals_:
        args.extend(["--global", _boolean_map_arg(globals_, with_values=True)])
    parser = override_config.get("parser")
    if parser:
        args.extend(["--parser", str(parser)])
    for key, value in (override_config.get("parserOptions") or {}).items():
        args.extend(["--parser-options", f"{key}:{json.dumps(value)}"])
    for plugin in override_config.get("plugins") or []:
        args.extend(["--plugin", str(plugin)])
    for name, setting in (override_config.get("rules") or {}).items():
        args.extend(["--rule", json.dumps({name: setting})])
    return args


def _segments(relative: str) -> list[str]:
    return [part for part in PurePosixPath(relative).parts if part not in ("", ".")]


def _is_default_ignored(relative: str) -> bool:
    parts = _segments(relative)
    if any(part.startswith(".") and part != ".." for part in parts):
        return True
    return NODE_MODULES in parts[:-1]


def _pattern_matches(relative: str, pattern: str) -> bool:
    """Return ``True`` when ``pattern`` matches ``relative`` or one of its parent directories."""

    pattern = pattern.strip().lstrip("/").rstrip("/")
    if not pattern:
        return False
    parts = _segments(relative)
    candidates = ["/".join(parts[:index]) for index in range(1, len(parts) + 1)]
    if "/" not in pattern:
        candidates.extend(parts)
    return any(fnmatchcase(candidate, pattern) for candidate in candidates)


class EslintCliEngine:
    """Lint engine backed by the ``eslint`` executable.

    Each file is linted through ``--stdin`` so the pipeline's in-memory
    contents are checked rather than the copy on disk.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.cwd = self.config.cwd

    @classmethod
    def from_options(cls, engine_options: Mapping[str, Any]) -> EslintCliEngine:
        """Build an engine from migrated engine options."""

        config = EngineConfig.from_engine_options(engine_options)
        if config.unsupported:
            LOGGER.debug("Options not forwarded to the eslint CLI: %s", sorted(config.unsupported))
        return cls(config)

    def build_command(self, path: Path) -> list[str]:
        """Return the command linting stdin as ``path``."""

        config = self.config
        command = [config.executable, "--format", "json", "--stdin", "--stdin-filename", str(path)]
        if config.fix:
            command.append("--fix-dry-run")
        if config.override_config_file is not None:
            command.extend(["--config", str(config.override_config_file)])
        if not config.ignore:
            command.append("--no-ignore")
        for pattern in config.ignore_patterns:
            command.extend(["--ignore-pattern", pattern])
        command.extend(_override_args(config.override_config))
        command.extend(config.extra_args)
        return command

    def _run(self, text: str, path: Path) -> list[LintResult]:
        command = self.build_command(path)
        LOGGER.debug("Running %s", " ".join(command))
        completed = run_command(command, cwd=self.cwd, check=False, input_text=text, timeout=self.config.timeout)
        if completed.returncode not in LINT_EXIT_CODES:
            detail = (completed.stderr or completed.stdout or "").strip() or "<no output>"
            raise EslintCliError(f"eslint exited with status {completed.returncode}: {detail}")
        try:
            payload = json.loads(completed.stdout or "[]")
            return [LintResult.model_validate(entry) for entry in payload]
        except (json.JSONDecodeError, TypeError, ValidationError) as exc:
            raise EslintCliError(f"Unable to parse eslint output for {path}: {exc}") from exc

    async def lint_text(self, text: str, path: Path) -> list[LintResult]:
        """Lint ``text`` as ``path`` in a worker thread."""

        return await asyncio.to_thread(self._run, text, path)

    def is_path_ignored(self, path: Path) -> bool:
        """Apply the default and configured ignore patterns to ``path``.

        Patterns are evaluated in order; a later ``!pattern`` re-includes a
        path matched by an earlier one, including the defaults.
        """

        if not self.config.ignore:
            return False
        relative = Path(os.path.relpath(path, self.cwd)).as_posix()
        ignored = _is_default_ignored(relative)
        for pattern in self.config.ignore_patterns:
            if pattern.startswith(NEGATION_PREFIX):
                if _pattern_matches(relative, pattern[len(NEGATION_PREFIX) :]):
                    ignored = False
            elif _pattern_matches(relative, pattern):
                ignored = True
        return ignored

    def load_formatter(self, name: str | None = None) -> JsonFormatter | CompactFormatter | StylishFormatter:
        """Return the built-in formatter called ``name``.

        Raises:
            ValueError: If no built-in formatter has that name.
        """

        key = name or DEFAULT_FORMATTER
        formatter_type = BUILTIN_FORMATTERS.get(key)
        if formatter_type is None:
            raise ValueError(f"There was a problem loading formatter: {key}")
        return formatter_type()

    def get_rules_meta_for_results(self, results: Sequence[LintResult]) -> dict[str, Any]:
        """Return an empty mapping; the CLI does not expose rule metadata."""

        return {}


__all__ = ["EslintCliEngine", "EslintCliError"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Engine and formatter interfaces.

Engine methods may either return their value directly or return an awaitable;
callers always go through :func:`lintstream.callbacks.maybe_await`.
"""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import LintResult

Writer = Callable[[str], Any]


@runtime_checkable
class LoadedFormatter(Protocol):
    """Formatter object rendering a list of results."""

    def format(self, results: Sequence[LintResult]) -> str | Awaitable[str]:
        """Return the rendered report for ``results``."""

        raise NotImplementedError


FormatterFunction = Callable[..., "str | Awaitable[str]"]


@runtime_checkable
class LintEngine(Protocol):
    """Static analysis engine consumed by the lint stage."""

    cwd: Path

    def lint_text(self, text: str, path: Path) -> Sequence[LintResult] | Awaitable[Sequence[LintResult]]:
        """Lint ``text`` as the contents of ``path`` and return zero or one result."""

        raise NotImplementedError

    def is_path_ignored(self, path: Path) -> bool | Awaitable[bool]:
        """Return ``True`` when the engine's ignore settings exclude ``path``."""

        raise NotImplementedError

    def load_formatter(self, name: str | None = None) -> LoadedFormatter | Awaitable[LoadedFormatter]:
        """Return the formatter registered under ``name`` (the default when ``None``)."""

        raise NotImplementedError

    def get_rules_meta_for_results(self, results: Sequence[LintResult]) -> Mapping[str, Any]:
        """Return rule metadata for the rules referenced by ``results``."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class LintContext:
    """Engine instance and working directory shared by every file a lint stage processes."""

    cwd: Path
    engine: LintEngine


__all__ = ["FormatterFunction", "LintContext", "LintEngine", "LoadedFormatter", "Writer"]

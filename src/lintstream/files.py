# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-flight file objects carried through the pipeline."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .interfaces.engine import LintContext
    from .models import LintResult

RESULT_SLOT: Final[str] = "lint_result"


@dataclass(slots=True, eq=False)
class File:
    """Unit of work flowing through the pipeline.

    Attributes:
        path: Absolute path of the file.
        base: Directory the file path is relative to when written back.
        contents: File contents, ``None`` for null files that carry no data.
        cwd: Working directory the file was read from.
        lint_result: Result attached by the lint stage (see :data:`RESULT_SLOT`).
        lint_context: Engine context that produced ``lint_result``.
    """

    path: Path
    base: Path
    contents: bytes | None = None
    cwd: Path = field(default_factory=Path.cwd)
    lint_result: LintResult | None = None
    lint_context: LintContext | None = None

    def __post_init__(self) -> None:
        self.path = Path(os.path.abspath(self.path))
        self.base = Path(os.path.abspath(self.base))

    @classmethod
    def from_text(cls, path: str | os.PathLike[str], text: str, *, base: str | os.PathLike[str] | None = None) -> File:
        """Build a file from text, defaulting ``base`` to the parent directory."""

        resolved = Path(os.path.abspath(path))
        return cls(path=resolved, base=Path(base) if base is not None else resolved.parent, contents=text.encode())

    def is_null(self) -> bool:
        """Return ``True`` when the file carries no contents."""

        return self.contents is None

    @property
    def relative(self) -> Path:
        """Return ``path`` relative to ``base``."""

        return Path(os.path.relpath(self.path, self.base))

    @property
    def text(self) -> str:
        """Return the contents decoded as UTF-8."""

        return (self.contents or b"").decode("utf-8")

    @text.setter
    def text(self, value: str) -> None:
        self.contents = value.encode("utf-8")


def read_files(
    paths: Iterable[str | os.PathLike[str]],
    *,
    base: str | os.PathLike[str] | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> Iterator[File]:
    """Yield :class:`File` objects read from ``paths``.

    Args:
        paths: File paths, resolved against ``cwd`` when relative.
        base: Base directory for every file; defaults to ``cwd``.
        cwd: Working directory; defaults to the process working directory.

    Yields:
        File: One file per path with its contents loaded.
    """

    root = Path(cwd) if cwd is not None else Path.cwd()
    base_dir = Path(base) if base is not None else root
    for raw in paths:
        path = Path(raw)
        if not path.is_absolute():
            path = root / path
        yield File(path=path, base=base_dir, contents=path.read_bytes(), cwd=root)


__all__ = ["File", "RESULT_SLOT", "read_files"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write files whose contents were fixed by the engine."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .files import File
from .streams import TransformStage, create_transform

LOGGER = logging.getLogger(__name__)

Destination = str | os.PathLike[str] | Callable[[Path], str | os.PathLike[str]] | None


def is_fixed(file: File) -> bool:
    """Return ``True`` when the lint stage replaced the file's contents."""

    return file.lint_result is not None and bool(file.lint_result.fixed) and file.contents is not None


def _resolve_destination(dest: Destination, file: File) -> Path:
    if dest is None:
        return file.base
    if callable(dest):
        return Path(dest(file.base))
    return Path(dest)


def fix(dest: Destination = None) -> TransformStage:
    """Write fixed files below ``dest``, keeping their path relative to ``file.base``.

    Args:
        dest: Output directory, a function receiving ``file.base`` and
            returning the output directory, or ``None`` to overwrite the files
            in place.

    Returns:
        TransformStage: Stage forwarding every file; only fixed files are written.
    """

    def handle_file(file: File) -> None:
        if not is_fixed(file):
            return
        target = _resolve_destination(dest, file) / file.relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(file.contents or b"")
        LOGGER.debug("Wrote fixed file %s", target)

    return create_transform(handle_file, name="fix")


__all__ = ["Destination", "fix", "is_fixed"]

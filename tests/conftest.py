# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from lintstream.files import File
from tests.support import FakeEngine


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., File]:
    """Return a factory creating in-memory files below ``tmp_path``."""

    def factory(name: str, text: str = "var a = 1\n") -> File:
        return File.from_text(tmp_path / name, text, base=tmp_path)

    return factory


@pytest.fixture
def engine(tmp_path: Path) -> FakeEngine:
    return FakeEngine(tmp_path)

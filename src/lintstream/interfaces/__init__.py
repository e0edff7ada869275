# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the collaborators consumed by lintstream."""

from __future__ import annotations

from .engine import FormatterFunction, LintContext, LintEngine, LoadedFormatter, Writer

__all__ = ["FormatterFunction", "LintContext", "LintEngine", "LoadedFormatter", "Writer"]

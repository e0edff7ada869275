# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete lint engine adapters."""

from __future__ import annotations

from .eslint_cli import EslintCliEngine, EslintCliError

__all__ = ["EslintCliEngine", "EslintCliError"]

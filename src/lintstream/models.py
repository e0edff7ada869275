# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintstream package."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, overload

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .severity import is_error_message, is_fatal_message, is_fixable_message, is_warning_message

COUNT_FIELDS: tuple[str, ...] = (
    "error_count",
    "warning_count",
    "fixable_error_count",
    "fixable_warning_count",
    "fatal_error_count",
)


class LintMessage(BaseModel):
    """Single finding reported by the engine.

    Only ``severity``, ``fatal`` and the presence of ``fix`` are inspected; the
    remaining fields are carried through to formatters untouched.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    severity: int
    message: str = ""
    rule_id: str | None = None
    fatal: bool | None = None
    fix: dict[str, Any] | None = None
    line: int | None = None
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None


def count_messages(messages: Iterable[LintMessage]) -> dict[str, int]:
    """Return the five aggregate counts for ``messages``.

    Args:
        messages: Messages to classify.

    Returns:
        dict[str, int]: Mapping keyed by the names in :data:`COUNT_FIELDS`.
    """

    counts = dict.fromkeys(COUNT_FIELDS, 0)
    for message in messages:
        counts["error_count"] += is_error_message(message)
        counts["warning_count"] += is_warning_message(message)
        counts["fixable_error_count"] += is_fixable_message(message, "error")
        counts["fixable_warning_count"] += is_fixable_message(message, "warning")
        counts["fatal_error_count"] += is_fatal_message(message)
    return counts


class LintResult(BaseModel):
    """Per-file lint result attached to files by the lint stage.

    Counts are derived from ``messages`` whenever the model is validated; use
    :meth:`with_messages` to replace the message sequence so the counts stay in
    step.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    file_path: str
    messages: list[LintMessage] = Field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    fixable_error_count: int = 0
    fixable_warning_count: int = 0
    fatal_error_count: int = 0
    fixed: bool | None = None
    output: str | None = None
    source: str | None = None

    @model_validator(mode="after")
    def _recount(self) -> LintResult:
        """Derive the aggregate counts from the message sequence."""
        for name, value in count_messages(self.messages).items():
            setattr(self, name, value)
        return self

    def with_messages(self, messages: Sequence[LintMessage]) -> LintResult:
        """Return a copy holding ``messages`` with all counts recomputed."""

        update: dict[str, Any] = {"messages": list(messages), **count_messages(messages)}
        return self.model_copy(update=update)

    def to_payload(self) -> dict[str, Any]:
        """Return the engine-shaped (camelCase) representation of the result."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResultCollection(Sequence[LintResult]):
    """Ordered results of a pipeline run with running totals.

    The collection is read-only apart from :meth:`append` and :meth:`extend`,
    which keep the totals equal to the sum over the contained results. It is
    frozen once the end-of-stream hook fires.
    """

    def __init__(self, results: Iterable[LintResult] = ()) -> None:
        self._results: list[LintResult] = []
        self.error_count = 0
        self.warning_count = 0
        self.fixable_error_count = 0
        self.fixable_warning_count = 0
        self.fatal_error_count = 0
        self._frozen = False
        self.extend(results)

    @overload
    def __getitem__(self, index: int) -> LintResult: ...

    @overload
    def __getitem__(self, index: slice) -> list[LintResult]: ...

    def __getitem__(self, index: int | slice) -> LintResult | list[LintResult]:
        return self._results[index]

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._results!r}, frozen={self._frozen})"

    @property
    def frozen(self) -> bool:
        """Return ``True`` once the collection no longer accepts results."""

        return self._frozen

    def append(self, result: LintResult) -> None:
        """Add ``result`` and fold its counts into the totals."""
        if self._frozen:
            raise RuntimeError("ResultCollection is frozen")
        self._results.append(result)
        for name in COUNT_FIELDS:
            setattr(self, name, getattr(self, name) + getattr(result, name))

    def extend(self, results: Iterable[LintResult]) -> None:
        for result in results:
            self.append(result)

    def freeze(self) -> ResultCollection:
        """Stop accepting results and return ``self``."""

        self._frozen = True
        return self

    def totals(self) -> dict[str, int]:
        """Return the five running totals keyed by count name."""

        return {name: getattr(self, name) for name in COUNT_FIELDS}


__all__ = [
    "COUNT_FIELDS",
    "LintMessage",
    "LintResult",
    "ResultCollection",
    "count_messages",
]

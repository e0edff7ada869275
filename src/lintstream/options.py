# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Migrate legacy and mixed user options into engine options."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidOptionsError
from .models import LintMessage, LintResult

QuietOption = bool | Callable[[LintMessage, int, LintResult], object] | None

RESERVED_KEY: Final[str] = "__proto__"
MAP_VALUE_SEPARATOR: Final[str] = ":"

FORBIDDEN_OPTIONS: Final[tuple[str, ...]] = (
    "cache",
    "cacheFile",
    "cacheLocation",
    "cacheStrategy",
    "errorOnUnmatchedPattern",
    "extensions",
    "globInputPaths",
)


class NormalizedOptions(BaseModel):
    """Options consumed by the lint stage, created once per pipeline."""

    model_config = ConfigDict(frozen=True)

    engine_options: dict[str, Any] = Field(default_factory=dict)
    quiet: QuietOption = None
    warn_ignored: bool | None = None


def to_boolean_map(entries: object, default: bool, display_name: str) -> dict[str, bool] | None:
    """Convert ``["name", "name:true"]`` style entries into a boolean mapping.

    Args:
        entries: List of ``key`` or ``key:value`` strings, or ``None``.
        default: Value used for entries without an explicit value.
        display_name: Option name used in error messages.

    Returns:
        dict[str, bool] | None: Mapping, or ``None`` when there are no entries.

    Raises:
        InvalidOptionsError: If ``entries`` is not a list.
    """

    if entries and not isinstance(entries, list):
        raise InvalidOptionsError(f"Option {display_name} must be a list")
    if not entries:
        return None
    mapping: dict[str, bool] = {}
    for entry in entries:
        key, *values = str(entry).split(MAP_VALUE_SEPARATOR)
        if key == RESERVED_KEY:
            continue
        mapping[key] = default if not values else values[0] == "true"
    return mapping


def _normalize_quiet(quiet: Any) -> QuietOption:
    """Keep predicates as-is; any other non-``None`` value selects errors-only output."""

    if quiet is None or callable(quiet):
        return quiet
    return bool(quiet)


def _identity(value: Any) -> Any:
    return value


def _always(value: Any) -> bool:
    return True


def _is_list(value: Any) -> bool:
    return isinstance(value, list)


@dataclass(frozen=True, slots=True)
class LegacyOptionRule:
    """Move a legacy top-level option into ``overrideConfig``.

    Attributes:
        name: Legacy option name.
        target: Key written inside ``overrideConfig``.
        convert: Conversion applied to the legacy value.
        applies: Predicate deciding whether the legacy value is migrated at all;
            values it rejects stay engine options.
    """

    name: str
    target: str
    convert: Callable[[Any], Any] = _identity
    applies: Callable[[Any], bool] = _always


def _env_map(value: Any) -> dict[str, bool] | None:
    return to_boolean_map(value, True, "envs")


def _globals_map(value: Any) -> dict[str, bool] | None:
    return to_boolean_map(value, False, "globals")


LEGACY_OPTION_RULES: Final[tuple[LegacyOptionRule, ...]] = (
    LegacyOptionRule("envs", "env", _env_map),
    LegacyOptionRule("extends", "extends"),
    LegacyOptionRule("globals", "globals", _globals_map),
    LegacyOptionRule("ignorePattern", "ignorePatterns"),
    LegacyOptionRule("parser", "parser"),
    LegacyOptionRule("parserOptions", "parserOptions"),
    LegacyOptionRule("plugins", "plugins", applies=_is_list),
    LegacyOptionRule("rules", "rules"),
)


def migrate_options(options: str | Mapping[str, Any] | None = None) -> NormalizedOptions:
    """Normalise user options into :class:`NormalizedOptions`.

    Args:
        options: A config file path, a mapping of engine and legacy options, or
            ``None``.

    Returns:
        NormalizedOptions: Engine options plus the ``quiet`` and
        ``warn_ignored`` settings handled by the lint stage.

    Raises:
        InvalidOptionsError: If forbidden options are present or an option has
            the wrong shape.
    """

    if isinstance(options, str):
        return NormalizedOptions(engine_options={"overrideConfigFile": options})
    raw = dict(options or {})

    invalid = [name for name in raw if name in FORBIDDEN_OPTIONS]
    if invalid:
        raise InvalidOptionsError(f"Invalid options: {', '.join(invalid)}")

    raw_override = raw.pop("overrideConfig", None)
    if raw_override is not None and not isinstance(raw_override, Mapping):
        raise InvalidOptionsError("Option overrideConfig must be an object or null")
    quiet = raw.pop("quiet", None)
    warn_file_ignored = raw.pop("warnFileIgnored", None)
    warn_ignored = raw.pop("warnIgnored", None)

    override_config: dict[str, Any] = dict(raw_override or {})
    engine_options = raw
    config_file = engine_options.pop("configFile", None)
    if config_file is not None:
        engine_options["overrideConfigFile"] = config_file
    for rule in LEGACY_OPTION_RULES:
        if rule.name not in engine_options or not rule.applies(engine_options[rule.name]):
            continue
        value = engine_options.pop(rule.name)
        if value is None:
            continue
        converted = rule.convert(value)
        if converted is not None:
            override_config[rule.target] = converted
    engine_options["overrideConfig"] = override_config

    try:
        return NormalizedOptions(
            engine_options=engine_options,
            quiet=_normalize_quiet(quiet),
            warn_ignored=warn_file_ignored if warn_file_ignored is not None else warn_ignored,
        )
    except ValidationError as exc:
        raise InvalidOptionsError(f"Invalid options: {exc}") from exc


__all__ = [
    "FORBIDDEN_OPTIONS",
    "LEGACY_OPTION_RULES",
    "LegacyOptionRule",
    "NormalizedOptions",
    "QuietOption",
    "migrate_options",
    "to_boolean_map",
]

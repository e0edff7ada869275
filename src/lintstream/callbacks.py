# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Adapt user hooks with different calling conventions to one async contract.

User hooks may be plain functions, coroutine functions, or callback-style
functions receiving a ``done`` continuation. Each is wrapped into an
:data:`AsyncHook` so stages only ever ``await hook(value)``.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

AsyncHook = Callable[[T], Awaitable[None]]
Done = Callable[..., None]


async def maybe_await(value: Any) -> Any:
    """Await ``value`` when it is awaitable and return the settled value."""

    if inspect.isawaitable(value):
        return await value
    return value


def from_sync(action: Callable[[T], Any]) -> AsyncHook[T]:
    """Wrap a plain function; an awaitable return value is awaited."""

    async def hook(value: T) -> None:
        await maybe_await(action(value))

    return hook


def from_coroutine(action: Callable[[T], Awaitable[Any]]) -> AsyncHook[T]:
    """Wrap a coroutine function."""

    async def hook(value: T) -> None:
        await action(value)

    return hook


def from_callback(action: Callable[[T, Done], Any]) -> AsyncHook[T]:
    """Wrap a function called as ``action(value, done)``.

    The hook settles when ``done()`` is called; ``done(error)`` with a non-``None``
    error raises it. Calls after the first are ignored.
    """

    async def hook(value: T) -> None:
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def done(error: BaseException | str | None = None) -> None:
            if future.done():
                return
            if error is None:
                future.set_result(None)
            elif isinstance(error, BaseException):
                future.set_exception(error)
            else:
                future.set_exception(RuntimeError(error))

        action(value, done)
        await future

    return hook


def _required_positional_arity(action: Callable[..., Any]) -> int:
    """Count positional parameters without defaults."""

    try:
        signature = inspect.signature(action)
    except (TypeError, ValueError):
        return 1
    kinds = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in kinds and param.default is inspect.Parameter.empty
    )


def adapt_hook(action: Callable[..., Any]) -> AsyncHook[Any]:
    """Select the adapter matching ``action``'s calling convention.

    Args:
        action: User hook.

    Returns:
        AsyncHook: Awaitable hook taking a single value.

    Raises:
        TypeError: If ``action`` is not callable.
    """

    if not callable(action):
        raise TypeError("Expected a callable hook")
    if inspect.iscoroutinefunction(action):
        return from_coroutine(action)
    if _required_positional_arity(action) > 1:
        return from_callback(action)
    return from_sync(action)


__all__ = ["AsyncHook", "Done", "adapt_hook", "from_callback", "from_coroutine", "from_sync", "maybe_await"]

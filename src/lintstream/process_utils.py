# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run engine executables and capture their text output."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list without ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404

# Same status GNU ``timeout`` reports for an expired command.
TIMEOUT_RETURNCODE = 124


class SubprocessExecutionError(RuntimeError):
    """Raised by :func:`run_command` when ``check`` is set and the command fails."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        detail = (stderr or "").strip() or "<none>"
        super().__init__(f"{Path(command[0]).name} failed with exit status {returncode}: {detail}")
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _resolve_executable(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable replaced by its absolute path."""

    if not args:
        raise ValueError("run_command() needs an executable")
    executable, *arguments = args
    if not Path(executable).is_absolute():
        located = shutil.which(executable)
        if located is None:
            raise FileNotFoundError(f"Cannot find '{executable}' on PATH")
        executable = located
    return [str(executable), *arguments]


def _as_text(value: str | bytes | None) -> str:
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value or ""


def _timed_out(command: list[str], exc: subprocess.TimeoutExpired) -> _CompletedProcess[str]:
    """Describe an expired command as a completed process with :data:`TIMEOUT_RETURNCODE`."""

    notice = f"{Path(command[0]).name} timed out after {exc.timeout:g}s"
    stderr = _as_text(exc.stderr).rstrip()
    return subprocess.CompletedProcess(
        args=command,
        returncode=TIMEOUT_RETURNCODE,
        stdout=_as_text(exc.stdout),
        stderr=f"{stderr}\n{notice}" if stderr else notice,
    )


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    input_text: str | None = None,
    timeout: float | None = None,
) -> _CompletedProcess[str]:
    """Execute ``args`` capturing text output, optionally feeding ``input_text`` on stdin.

    Args:
        args: Command and arguments; the executable is resolved on ``PATH``.
        cwd: Working directory for the command.
        env: Environment for the command.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.
        input_text: Text written to stdin; stdin is closed when ``None``.
        timeout: Seconds before the command is abandoned.

    Returns:
        CompletedProcess[str]: Completed process; a timeout is reported with
        return code ``124``.
    """

    command = _resolve_executable(args)
    try:
        completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
            command,
            cwd=cwd,
            env=None if env is None else dict(env),
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=input_text,
            stdin=subprocess.DEVNULL if input_text is None else None,
        )
    except subprocess.TimeoutExpired as exc:
        completed = _timed_out(command, exc)

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(command, completed.returncode, completed.stdout, completed.stderr)
    return completed


__all__ = ["SubprocessExecutionError", "TIMEOUT_RETURNCODE", "run_command"]

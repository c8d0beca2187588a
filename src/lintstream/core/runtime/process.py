# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around asynchronous ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
import threading
from collections.abc import Sequence
from pathlib import Path

from lintstream.core.models import ProcessResult
from lintstream.errors import ToolNotFoundError
from lintstream.interfaces.runtime import CompletionCallback

LOGGER = logging.getLogger(__name__)


def find_executable(cmd: str) -> str | None:
    """Return the fully-qualified path to ``cmd`` if it exists on ``PATH``.

    Args:
        cmd: Executable name or path to resolve.

    Returns:
        str | None: Absolute path to the executable, or ``None`` when not found.
    """

    candidate = Path(cmd)
    if candidate.is_absolute():
        return str(candidate) if candidate.is_file() else None
    return shutil.which(cmd)


def normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose head is the resolved executable path.

    Raises:
        ValueError: If no arguments are provided.
        ToolNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    resolved = find_executable(head)
    if resolved is None:
        raise ToolNotFoundError(head)
    return [resolved, *rest]


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


class SubprocessHandle:
    """Handle around a :class:`subprocess.Popen` owned by a reader thread."""

    def __init__(self, process: subprocess.Popen[bytes]) -> None:
        self._process = process
        self._killed = threading.Event()

    @property
    def pid(self) -> int:
        """Return the operating system process identifier."""

        return self._process.pid

    @property
    def killed(self) -> bool:
        """Return ``True`` once :meth:`kill` has been requested."""

        return self._killed.is_set()

    def is_alive(self) -> bool:
        """Return ``True`` while the process has not exited."""

        return self._process.poll() is None

    def kill(self) -> None:
        """Send ``SIGKILL`` to the process when it is still running."""

        self._killed.set()
        if self._process.poll() is None:
            try:
                self._process.kill()
            except ProcessLookupError:
                LOGGER.debug("process %s exited before it could be killed", self._process.pid)


class SubprocessLauncher:
    """Spawn linter processes, feed them stdin and observe exit from a thread."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def spawn(
        self,
        command: Sequence[str],
        *,
        cwd: Path,
        stdin_text: str,
        on_exit: CompletionCallback,
    ) -> SubprocessHandle:
        """Start ``command`` in ``cwd`` and return without waiting for it.

        Args:
            command: Executable followed by its arguments.
            cwd: Working directory for the process.
            stdin_text: Content written to standard input before it is closed.
            on_exit: Callback receiving the captured output once the process exits.

        Returns:
            SubprocessHandle: Handle used to kill the process.

        Raises:
            ToolNotFoundError: If the executable cannot be resolved or started.
        """

        normalized = normalize_args(command)
        try:
            # Bandit: commands are assembled from the checker configuration; we pass
            # argument lists directly without shell expansion.
            process = subprocess.Popen(  # nosec B603 - controlled arguments, not user supplied
                normalized,
                cwd=str(cwd),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(command[0]) from exc
        handle = SubprocessHandle(process)
        LOGGER.debug("spawned pid=%s cwd=%s command=%s", process.pid, cwd, normalized)
        payload = stdin_text.encode(self._encoding)
        thread = threading.Thread(
            target=self._communicate,
            args=(handle, process, payload, on_exit),
            name=f"lintstream-{process.pid}",
            daemon=True,
        )
        thread.start()
        return handle

    def _communicate(
        self,
        handle: SubprocessHandle,
        process: subprocess.Popen[bytes],
        payload: bytes,
        on_exit: CompletionCallback,
    ) -> None:
        try:
            stdout, stderr = process.communicate(input=payload)
        except (BrokenPipeError, ValueError, OSError) as exc:
            # Killed processes close their pipes underneath ``communicate``.
            LOGGER.debug("pid=%s stream closed early: %s", process.pid, exc)
            process.wait()
            stdout, stderr = b"", b""
        result = ProcessResult(
            returncode=process.returncode,
            stdout=_ensure_text(stdout),
            stderr=_ensure_text(stderr),
            killed=handle.killed,
        )
        LOGGER.debug("pid=%s exited returncode=%s killed=%s", process.pid, result.returncode, result.killed)
        on_exit(result)


__all__ = [
    "SubprocessHandle",
    "SubprocessLauncher",
    "find_executable",
    "normalize_args",
]

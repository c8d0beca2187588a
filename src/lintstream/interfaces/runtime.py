# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols for process execution and project detection collaborators."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable

from lintstream.core.models import Diagnostic, ProcessResult

CompletionCallback: TypeAlias = Callable[[ProcessResult], None]
ReportCallback: TypeAlias = Callable[[list[Diagnostic]], None]


@runtime_checkable
class ProcessHandle(Protocol):
    """Handle to a spawned linter process."""

    def kill(self) -> None:
        """Terminate the process immediately without draining its output."""

        raise NotImplementedError

    def is_alive(self) -> bool:
        """Return ``True`` while the process has not exited."""

        raise NotImplementedError


@runtime_checkable
class ProcessLauncher(Protocol):
    """Spawn linter processes and report their completion asynchronously."""

    def spawn(
        self,
        command: Sequence[str],
        *,
        cwd: Path,
        stdin_text: str,
        on_exit: CompletionCallback,
    ) -> ProcessHandle:
        """Start ``command`` and return immediately.

        Args:
            command: Executable followed by its arguments.
            cwd: Working directory for the process.
            stdin_text: Content written to standard input before it is closed.
            on_exit: Callback invoked once with the captured output after the
                process exits or is killed.

        Returns:
            ProcessHandle: Handle used to kill the process.
        """

        raise NotImplementedError


@runtime_checkable
class ProjectDetector(Protocol):
    """Optional capability returning a project root for a directory."""

    def project_root(self, start: Path) -> Path | None:
        """Return the project root containing ``start`` when one is known."""

        raise NotImplementedError


__all__ = [
    "CompletionCallback",
    "ProcessHandle",
    "ProcessLauncher",
    "ProjectDetector",
    "ReportCallback",
]

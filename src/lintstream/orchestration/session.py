# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document check sessions owning at most one live linter process."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from lintstream.config.models import LintConfig
from lintstream.core.models import ProcessResult
from lintstream.diagnostics import clamp_diagnostics, diagnostics_from_output
from lintstream.interfaces.document import DocumentLike
from lintstream.interfaces.runtime import ProcessHandle, ProcessLauncher, ProjectDetector, ReportCallback
from lintstream.parsers import OutputFormat
from lintstream.workspace import resolve_root

from .command import build_command, document_start_directory

LOGGER = logging.getLogger(__name__)


class CheckState(str, Enum):
    """Lifecycle of the current check for a document."""

    IDLE = "idle"
    RUNNING = "running"
    SUPERSEDED = "superseded"


@dataclass(slots=True, frozen=True)
class Invocation:
    """One execution of the linter against a document's content."""

    token: int
    working_directory: Path
    command: tuple[str, ...]
    output_format: OutputFormat
    config: LintConfig


class DocumentSession:
    """Run checks for one document, delivering only the latest results.

    Every :meth:`check` bumps a generation token and kills the previous
    process. Completion handlers compare their captured token against the
    current one, so output from superseded or cancelled processes is dropped.
    """

    def __init__(
        self,
        document: DocumentLike,
        *,
        config: LintConfig,
        report: ReportCallback,
        launcher: ProcessLauncher,
        detector: ProjectDetector | None = None,
        json_supported: bool = True,
    ) -> None:
        self._document = document
        self._config = config
        self._report = report
        self._launcher = launcher
        self._detector = detector
        self._json_supported = json_supported
        self._lock = threading.RLock()
        self._token = 0
        self._state = CheckState.IDLE
        self._handle: ProcessHandle | None = None
        self._current: Invocation | None = None

    @property
    def document(self) -> DocumentLike:
        """Return the document checked by this session."""

        return self._document

    @property
    def config(self) -> LintConfig:
        """Return the configuration used for subsequent checks."""

        return self._config

    @config.setter
    def config(self, value: LintConfig) -> None:
        self._config = value

    @property
    def state(self) -> CheckState:
        """Return the current lifecycle state."""

        with self._lock:
            return self._state

    @property
    def current(self) -> Invocation | None:
        """Return the invocation whose results will be delivered, if any."""

        with self._lock:
            return self._current

    def check(self) -> Invocation | None:
        """Start a check of the document's current content.

        Any in-flight process is killed first. Empty documents are reported as
        clean immediately without spawning a process.

        Returns:
            Invocation | None: The started invocation, or ``None`` for an empty
            document.

        Raises:
            ToolNotFoundError: If the linter executable cannot be started.
        """

        config = self._config
        text = self._document.text
        with self._lock:
            self._supersede_locked()
            self._token += 1
            if not text:
                self._state = CheckState.IDLE
                self._current = None
                self._report([])
                return None
            output_format = config.output_format(json_supported=self._json_supported)
            invocation = Invocation(
                token=self._token,
                working_directory=resolve_root(
                    document_start_directory(self._document),
                    config=config,
                    detector=self._detector,
                ),
                command=build_command(self._document, config=config, output_format=output_format),
                output_format=output_format,
                config=config,
            )
            self._current = invocation
            self._state = CheckState.RUNNING

        try:
            handle = self._launcher.spawn(
                invocation.command,
                cwd=invocation.working_directory,
                stdin_text=text,
                on_exit=lambda result: self._on_exit(invocation, result),
            )
        except Exception:
            with self._lock:
                if self._token == invocation.token:
                    self._state = CheckState.IDLE
                    self._current = None
            raise

        with self._lock:
            if self._token == invocation.token and self._state is CheckState.RUNNING:
                self._handle = handle
            elif handle.is_alive():
                # A newer check or a cancel slipped in while spawning.
                handle.kill()
        return invocation

    def cancel(self) -> None:
        """Kill the in-flight process, if any, without reporting results."""

        with self._lock:
            self._supersede_locked()
            self._token += 1
            self._state = CheckState.IDLE
            self._current = None

    def _supersede_locked(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is None or not handle.is_alive():
            return
        self._state = CheckState.SUPERSEDED
        LOGGER.debug("killing superseded check token=%s", self._token)
        handle.kill()

    def _on_exit(self, invocation: Invocation, result: ProcessResult) -> None:
        if not self._is_current(invocation):
            LOGGER.debug("discarding stale output for token=%s", invocation.token)
            return
        diagnostics = diagnostics_from_output(
            result.stdout,
            self._document,
            output_format=invocation.output_format,
            show_rule_name=invocation.config.show_rule_name,
            tool=invocation.config.tool_name,
        )
        with self._lock:
            if self._token != invocation.token:
                LOGGER.debug("discarding output superseded during parsing token=%s", invocation.token)
                return
            self._state = CheckState.IDLE
            self._handle = None
            self._current = None
            delivered = clamp_diagnostics(diagnostics, len(self._document.text))
            LOGGER.debug("delivering %d diagnostics for token=%s", len(delivered), invocation.token)
            self._report(delivered)

    def _is_current(self, invocation: Invocation) -> bool:
        with self._lock:
            return self._token == invocation.token and self._state is CheckState.RUNNING


__all__ = ["CheckState", "DocumentSession", "Invocation"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Own the check sessions of every attached document."""

from __future__ import annotations

import logging

from lintstream.config.models import LintConfig
from lintstream.core.runtime.process import SubprocessLauncher, find_executable
from lintstream.errors import LintStreamError, ToolNotFoundError
from lintstream.interfaces.document import DocumentLike
from lintstream.interfaces.runtime import ProcessLauncher, ProjectDetector, ReportCallback

from .session import DocumentSession, Invocation

LOGGER = logging.getLogger(__name__)


class LintOrchestrator:
    """Attach documents to check sessions and route check requests to them.

    Sessions are keyed by document identity; each session owns at most one
    live linter process.
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        *,
        launcher: ProcessLauncher | None = None,
        detector: ProjectDetector | None = None,
        json_supported: bool = True,
    ) -> None:
        self._config = config or LintConfig()
        self._launcher: ProcessLauncher = launcher or SubprocessLauncher()
        self._detector = detector
        self._json_supported = json_supported
        self._sessions: dict[int, DocumentSession] = {}

    @property
    def config(self) -> LintConfig:
        """Return the configuration handed to newly attached sessions."""

        return self._config

    def attach(
        self,
        document: DocumentLike,
        report: ReportCallback,
        *,
        config: LintConfig | None = None,
    ) -> DocumentSession:
        """Enable checking for ``document`` and return its session.

        Args:
            document: Host document to check.
            report: Callback receiving each delivered diagnostic list.
            config: Optional per-document configuration overriding the default.

        Returns:
            DocumentSession: New session, replacing any previous one.

        Raises:
            ToolNotFoundError: If the configured executable is not on ``PATH``.
        """

        effective = config or self._config
        if find_executable(effective.executable) is None:
            raise ToolNotFoundError(effective.executable)
        self.detach(document)
        session = DocumentSession(
            document,
            config=effective,
            report=report,
            launcher=self._launcher,
            detector=self._detector,
            json_supported=self._json_supported,
        )
        self._sessions[id(document)] = session
        LOGGER.debug("attached document %r", document)
        return session

    def session_for(self, document: DocumentLike) -> DocumentSession | None:
        """Return the session attached to ``document``, if any."""

        return self._sessions.get(id(document))

    def check(self, document: DocumentLike) -> Invocation | None:
        """Request a check of ``document``; see :meth:`DocumentSession.check`.

        Raises:
            LintStreamError: If ``document`` has not been attached.
        """

        session = self.session_for(document)
        if session is None:
            raise LintStreamError(f"document {document!r} is not attached")
        return session.check()

    def detach(self, document: DocumentLike) -> None:
        """Cancel and forget the session of ``document``."""

        session = self._sessions.pop(id(document), None)
        if session is not None:
            session.cancel()

    def close(self) -> None:
        """Cancel every session."""

        for session in self._sessions.values():
            session.cancel()
        self._sessions.clear()


__all__ = ["LintOrchestrator"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process orchestration for document checks."""

from __future__ import annotations

from .command import NO_IGNORE_FLAG, build_command
from .orchestrator import LintOrchestrator
from .session import CheckState, DocumentSession, Invocation

__all__ = [
    "CheckState",
    "DocumentSession",
    "Invocation",
    "LintOrchestrator",
    "NO_IGNORE_FLAG",
    "build_command",
]

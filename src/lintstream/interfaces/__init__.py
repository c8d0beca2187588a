# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols describing the collaborators lintstream depends on."""

from __future__ import annotations

from .document import DocumentLike
from .runtime import CompletionCallback, ProcessHandle, ProcessLauncher, ProjectDetector, ReportCallback

__all__ = [
    "CompletionCallback",
    "DocumentLike",
    "ProcessHandle",
    "ProcessLauncher",
    "ProjectDetector",
    "ReportCallback",
]

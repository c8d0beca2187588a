# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the lintstream package."""

from __future__ import annotations


class LintStreamError(Exception):
    """Base class for errors raised by lintstream."""


class ConfigError(LintStreamError):
    """Raised when configuration input is invalid."""


class ToolNotFoundError(ConfigError):
    """Raised when the configured linter executable cannot be located."""

    def __init__(self, executable: str) -> None:
        """Initialise the error with the executable that failed to resolve.

        Args:
            executable: Executable name or path looked up on ``PATH``.
        """

        super().__init__(f"Executable '{executable}' was not found on PATH")
        self.executable = executable


__all__ = ["ConfigError", "LintStreamError", "ToolNotFoundError"]

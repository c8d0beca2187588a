# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution primitives."""

from __future__ import annotations

from .process import SubprocessHandle, SubprocessLauncher, find_executable, normalize_args

__all__ = ["SubprocessHandle", "SubprocessLauncher", "find_executable", "normalize_args"]

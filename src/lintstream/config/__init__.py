# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from .loader import CONFIG_FILENAME, ConfigLoadResult, build_config, load_config, load_config_result
from .models import DEFAULT_PROJECT_MARKERS, DEFAULT_STDIN_FILENAME, LintConfig

__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoadResult",
    "DEFAULT_PROJECT_MARKERS",
    "DEFAULT_STDIN_FILENAME",
    "LintConfig",
    "build_config",
    "load_config",
    "load_config_result",
]

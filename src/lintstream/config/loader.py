# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load :class:`LintConfig` from ``.lintstream.toml`` or ``[tool.lintstream]``."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from lintstream.errors import ConfigError
from lintstream.workspace import iter_ancestors

from .models import LintConfig

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME: Final[str] = ".lintstream.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintstream"


@dataclass(slots=True, frozen=True)
class ConfigLoadResult:
    """Configuration together with the file it was read from."""

    config: LintConfig
    source: Path | None = None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any] | None:
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return None
    return section


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def build_config(payload: Mapping[str, Any], *, source: Path | None = None) -> LintConfig:
    """Validate ``payload`` into a :class:`LintConfig`.

    Relative ``project-root`` values are resolved against the directory of
    ``source``.

    Args:
        payload: Configuration table using snake_case or kebab-case keys.
        source: File the payload came from, when any.

    Returns:
        LintConfig: Validated configuration.

    Raises:
        ConfigError: If the payload contains unknown keys or invalid values.
    """

    data = _normalise_keys(payload)
    root = data.get("project_root")
    if source is not None and isinstance(root, str) and root.strip() and not Path(root).expanduser().is_absolute():
        data["project_root"] = source.parent / root
    try:
        return LintConfig.model_validate(data)
    except ValidationError as exc:
        origin = f" in {source}" if source is not None else ""
        raise ConfigError(f"Invalid lintstream configuration{origin}: {exc}") from exc


def load_config_result(start: Path) -> ConfigLoadResult:
    """Locate and load the configuration governing ``start``.

    The nearest ancestor holding ``.lintstream.toml``, or a ``pyproject.toml``
    with a ``[tool.lintstream]`` table, wins. Without either the defaults apply.

    Args:
        start: File or directory the configuration should apply to.

    Returns:
        ConfigLoadResult: Loaded configuration and its source file.

    Raises:
        ConfigError: If a discovered configuration file is invalid.
    """

    for directory in iter_ancestors(start):
        dedicated = directory / CONFIG_FILENAME
        if dedicated.is_file():
            LOGGER.debug("loading configuration from %s", dedicated)
            return ConfigLoadResult(build_config(_read_toml(dedicated), source=dedicated), dedicated)
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file():
            section = _pyproject_section(pyproject)
            if section is not None:
                LOGGER.debug("loading configuration from %s", pyproject)
                return ConfigLoadResult(build_config(section, source=pyproject), pyproject)
    return ConfigLoadResult(LintConfig())


def load_config(start: Path) -> LintConfig:
    """Return the configuration governing ``start``; see :func:`load_config_result`."""

    return load_config_result(start).config


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoadResult",
    "build_config",
    "load_config",
    "load_config_result",
]

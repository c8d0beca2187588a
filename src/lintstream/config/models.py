# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for the lintstream checker."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lintstream.parsers import DEFAULT_TOOL_NAME, OutputFormat

DEFAULT_PROJECT_MARKERS: Final[tuple[str, ...]] = (".oxlintrc.json", "oxlintrc.json", "package.json")
DEFAULT_STDIN_FILENAME: Final[str] = "stdin.js"


class LintConfig(BaseModel):
    """Read-only configuration snapshot used for one invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    executable: str = DEFAULT_TOOL_NAME
    extra_args: tuple[str, ...] = Field(default_factory=tuple)
    show_rule_name: bool = True
    prefer_json: bool = False
    project_root: Path | None = None
    project_markers: tuple[str, ...] = DEFAULT_PROJECT_MARKERS
    stdin_filename: str = DEFAULT_STDIN_FILENAME

    @field_validator("executable", "stdin_filename")
    @classmethod
    def _require_text(cls, value: str) -> str:
        """Reject blank executable and file names.

        Args:
            value: Candidate value supplied by the caller.

        Returns:
            str: The stripped value.

        Raises:
            ValueError: If the value is blank.
        """

        stripped = value.strip()
        if not stripped:
            raise ValueError("value must not be blank")
        return stripped

    @field_validator("project_root", mode="before")
    @classmethod
    def _expand_root(cls, value: str | Path | None) -> Path | None:
        """Expand ``~`` in the project root override.

        Args:
            value: Raw override supplied by the caller.

        Returns:
            Path | None: Expanded path or ``None`` when unset.
        """

        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return Path(value).expanduser()

    @property
    def tool_name(self) -> str:
        """Return the bare tool name used to label synthetic diagnostics."""

        return Path(self.executable).name

    def output_format(self, *, json_supported: bool = True) -> OutputFormat:
        """Return the output format selected for an invocation."""

        return OutputFormat.select(prefer_json=self.prefer_json, json_supported=json_supported)


__all__ = ["DEFAULT_PROJECT_MARKERS", "DEFAULT_STDIN_FILENAME", "LintConfig"]

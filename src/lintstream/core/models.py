# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintstream package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import TypeAliasType

from lintstream.core.severity import Severity

JsonScalar = TypeAliasType("JsonScalar", "str | int | float | bool | None")
JsonValue = TypeAliasType("JsonValue", "JsonScalar | list[JsonValue] | dict[str, JsonValue]")


class Diagnostic(BaseModel):
    """Position-anchored lint finding delivered to the host editor.

    Offsets are 0-based character offsets into the document text and describe
    the half-open region ``[start, end)`` highlighted by the host.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    severity: Severity
    message: str = Field(min_length=1)
    rule: str | None = None

    @model_validator(mode="after")
    def _check_region(self) -> Diagnostic:
        """Ensure the highlighted region is not inverted.

        Returns:
            Diagnostic: The validated diagnostic.

        Raises:
            ValueError: If ``end`` precedes ``start``.
        """

        if self.end < self.start:
            raise ValueError(f"diagnostic end {self.end} precedes start {self.start}")
        return self

    def clamped(self, length: int) -> Diagnostic:
        """Return a copy whose offsets fit within a document of ``length`` characters.

        Args:
            length: Current length of the target document.

        Returns:
            Diagnostic: ``self`` when already in range, otherwise a clamped copy.
        """

        bound = max(length, 0)
        start = min(self.start, bound)
        end = max(min(self.end, bound), start)
        if start == self.start and end == self.end:
            return self
        return self.model_copy(update={"start": start, "end": end})


class RawDiagnostic(BaseModel):
    """Capture tool-native diagnostic structures prior to normalisation."""

    model_config = ConfigDict(validate_assignment=True)

    line: int | None = None
    column: int | None = None
    severity: Severity
    message: str
    code: str | None = None
    severity_token: str | None = None
    whole_document: bool = False
    synthetic: bool = False

    @field_validator("code", mode="before")
    @classmethod
    def _blank_code_is_none(cls, value: str | None) -> str | None:
        """Treat empty rule codes as missing.

        Args:
            value: Rule code emitted by the tool.

        Returns:
            str | None: ``None`` for blank codes, otherwise the stripped code.
        """

        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None


class ProcessResult(BaseModel):
    """Raw output captured from a single linter invocation."""

    model_config = ConfigDict(frozen=True)

    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    killed: bool = False


__all__ = ["Diagnostic", "JsonScalar", "JsonValue", "ProcessResult", "RawDiagnostic"]

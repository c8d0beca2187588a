# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final, Protocol, cast

from lintstream.core.models import JsonValue, RawDiagnostic
from lintstream.core.severity import Severity

LOGGER = logging.getLogger(__name__)

DEFAULT_TOOL_NAME: Final[str] = "oxlint"


class OutputFormat(str, Enum):
    """Output format requested from the linter for one invocation."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def select(cls, *, prefer_json: bool, json_supported: bool = True) -> OutputFormat:
        """Return the format to request given user preference and host support.

        Args:
            prefer_json: ``True`` when structured output was requested.
            json_supported: ``False`` when the host cannot consume structured output.

        Returns:
            OutputFormat: :attr:`JSON` only when preferred and supported.
        """

        return cls.JSON if prefer_json and json_supported else cls.TEXT

    def command_args(self) -> tuple[str, ...]:
        """Return the command-line flags selecting this format."""

        if self is OutputFormat.JSON:
            return ("--format", "json")
        return ()


@dataclass(slots=True, frozen=True)
class ParseContext:
    """Information about the invocation whose output is being parsed."""

    tool: str = DEFAULT_TOOL_NAME


class PayloadShapeError(ValueError):
    """Raised when structured output decodes but does not match the expected layout."""


class Parser(Protocol):
    """Turn raw tool output into intermediate diagnostic records."""

    def parse(self, stdout: str, *, context: ParseContext) -> Sequence[RawDiagnostic]:
        """Return the records contained in ``stdout``."""

        raise NotImplementedError


JsonTransform = Callable[[JsonValue, ParseContext], Sequence[RawDiagnostic]]
TextTransform = Callable[[Sequence[str], ParseContext], Sequence[RawDiagnostic]]


def iter_pattern_matches(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    *,
    skip_blank: bool = True,
) -> Iterator[re.Match[str]]:
    """Yield regex matches from ``lines`` while filtering unwanted entries.

    Args:
        lines: Sequence of raw lines emitted by a tool.
        pattern: Compiled regular expression used to match diagnostic lines.
        skip_blank: When ``True`` blank lines are ignored.

    Yields:
        re.Match[str]: Match objects produced by ``pattern``.
    """

    for raw_line in lines:
        # Trailing whitespace is kept; it may hold a field separator.
        line = raw_line.lstrip()
        if skip_blank and not line.strip():
            continue
        match = pattern.match(line)
        if match:
            yield match


def load_json_payload(stdout: str) -> JsonValue:
    """Decode ``stdout`` as a single JSON document.

    Raises:
        json.JSONDecodeError: If ``stdout`` is not valid JSON.
    """

    return cast(JsonValue, json.loads(stdout))


def fallback_diagnostic(stdout: str, *, context: ParseContext) -> RawDiagnostic:
    """Return the synthetic record used when structured output is unusable.

    Args:
        stdout: Entire raw output produced by the tool.
        context: Invocation context naming the tool.

    Returns:
        RawDiagnostic: Error record at line 1, column 1 carrying ``stdout`` verbatim.
    """

    return RawDiagnostic(
        line=1,
        column=1,
        severity=Severity.ERROR,
        message=stdout,
        code=context.tool,
        synthetic=True,
    )


@dataclass(slots=True)
class JsonParser:
    """Parse stdout as JSON and delegate to a transform function.

    The parser never raises: output that does not decode into the expected
    layout, whitespace-only output included, degrades to a single
    :func:`fallback_diagnostic` record. Only empty output yields no records.
    """

    transform: JsonTransform

    def parse(self, stdout: str, *, context: ParseContext) -> Sequence[RawDiagnostic]:
        if not stdout:
            return []
        try:
            payload = load_json_payload(stdout)
            return self.transform(payload, context)
        except (json.JSONDecodeError, PayloadShapeError, RecursionError) as exc:
            LOGGER.debug("%s produced unusable structured output: %s", context.tool, exc)
            return [fallback_diagnostic(stdout, context=context)]


@dataclass(slots=True)
class TextParser:
    """Parse stdout via text transformation function."""

    transform: TextTransform

    def parse(self, stdout: str, *, context: ParseContext) -> Sequence[RawDiagnostic]:
        return self.transform(stdout.splitlines(), context)


__all__ = [
    "DEFAULT_TOOL_NAME",
    "JsonParser",
    "JsonTransform",
    "OutputFormat",
    "ParseContext",
    "Parser",
    "PayloadShapeError",
    "TextParser",
    "TextTransform",
    "fallback_diagnostic",
    "iter_pattern_matches",
    "load_json_payload",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning linter output into intermediate diagnostic records."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from .base import (
    DEFAULT_TOOL_NAME,
    JsonParser,
    OutputFormat,
    ParseContext,
    Parser,
    PayloadShapeError,
    TextParser,
    fallback_diagnostic,
)
from .structured import parse_json_diagnostics
from .text import parse_crash_output, parse_text

PARSERS: Final[Mapping[OutputFormat, Parser]] = MappingProxyType(
    {
        OutputFormat.TEXT: TextParser(parse_text),
        OutputFormat.JSON: JsonParser(parse_json_diagnostics),
    },
)


def parser_for(output_format: OutputFormat) -> Parser:
    """Return the parser handling ``output_format``."""

    return PARSERS[output_format]


__all__ = [
    "DEFAULT_TOOL_NAME",
    "JsonParser",
    "OutputFormat",
    "PARSERS",
    "ParseContext",
    "Parser",
    "PayloadShapeError",
    "TextParser",
    "fallback_diagnostic",
    "parse_crash_output",
    "parse_json_diagnostics",
    "parse_text",
    "parser_for",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the linter's ``--format json`` diagnostic payload."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from lintstream.core.models import JsonValue, RawDiagnostic
from lintstream.core.serialization import coerce_optional_int, coerce_optional_str, iter_dicts
from lintstream.core.severity import severity_from_json_label

from .base import ParseContext, PayloadShapeError

DIAGNOSTICS_KEY: Final[str] = "diagnostics"
LABELS_KEY: Final[str] = "labels"
SPAN_KEY: Final[str] = "span"


def _diagnostic_entries(payload: JsonValue) -> JsonValue:
    if not isinstance(payload, Mapping):
        raise PayloadShapeError(f"expected a JSON object, got {type(payload).__name__}")
    entries = payload.get(DIAGNOSTICS_KEY)
    if not isinstance(entries, list):
        raise PayloadShapeError(f"expected a '{DIAGNOSTICS_KEY}' array")
    return entries


def parse_json_diagnostics(payload: JsonValue, _context: ParseContext) -> Sequence[RawDiagnostic]:
    """Parse structured diagnostics into one record per label.

    A diagnostic carrying several labels yields several records that share its
    message, severity and rule code. Diagnostics without labels yield nothing.

    Args:
        payload: Decoded JSON payload with a top-level ``diagnostics`` array.
        _context: Invocation context (unused).

    Returns:
        Sequence[RawDiagnostic]: Records in payload order.

    Raises:
        PayloadShapeError: If the payload lacks a ``diagnostics`` array.
    """

    results: list[RawDiagnostic] = []
    for entry in iter_dicts(_diagnostic_entries(payload)):
        severity = severity_from_json_label(entry.get("severity"))
        message = coerce_optional_str(entry.get("message")) or ""
        code = coerce_optional_str(entry.get("code"))
        for label in iter_dicts(entry.get(LABELS_KEY)):
            span = label.get(SPAN_KEY)
            if not isinstance(span, Mapping):
                span = {}
            results.append(
                RawDiagnostic(
                    line=coerce_optional_int(span.get("line")),
                    column=coerce_optional_int(span.get("column")),
                    severity=severity,
                    message=message,
                    code=code,
                ),
            )
    return results


__all__ = ["parse_json_diagnostics"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting diagnostics and tool payloads to and from JSON data."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from lintstream.core.models import Diagnostic, JsonValue

SerializableMapping = dict[str, JsonValue]


def serialize_diagnostic(diag: Diagnostic) -> SerializableMapping:
    """Convert a diagnostic into a JSON-friendly mapping."""
    return {
        "start": diag.start,
        "end": diag.end,
        "severity": diag.severity.value,
        "message": diag.message,
        "rule": diag.rule,
    }


def coerce_optional_int(value: JsonValue) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def coerce_optional_str(value: JsonValue) -> str | None:
    """Return a string representation of ``value`` or ``None`` when unset."""
    if value is None:
        return None
    return str(value)


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            if isinstance(item, Mapping):
                yield item


__all__ = [
    "SerializableMapping",
    "coerce_optional_int",
    "coerce_optional_str",
    "iter_dicts",
    "serialize_diagnostic",
]

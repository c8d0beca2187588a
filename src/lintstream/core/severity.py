# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels surfaced to the host editor."""

    ERROR = "error"
    WARNING = "warning"


_WARNING_TOKEN: Final[str] = "warning"
_ERROR_TOKEN: Final[str] = "error"


def severity_from_text_token(token: str | None) -> Severity:
    """Map a text-format severity token onto :class:`Severity`.

    Only ``warning`` downgrades a finding; every other token, including
    ``error``, is reported as an error.

    Args:
        token: Severity token captured from the tool's text output.

    Returns:
        Severity: Normalised severity.
    """

    if token == _WARNING_TOKEN:
        return Severity.WARNING
    return Severity.ERROR


def severity_from_json_label(label: object) -> Severity:
    """Map a JSON-format severity label onto :class:`Severity`.

    Only ``"error"`` is treated as an error; anything else becomes a warning.

    Args:
        label: Severity value taken from the structured payload.

    Returns:
        Severity: Normalised severity.
    """

    if label == _ERROR_TOKEN:
        return Severity.ERROR
    return Severity.WARNING


__all__ = ["Severity", "severity_from_json_label", "severity_from_text_token"]

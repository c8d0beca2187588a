# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the linter's default human-readable output."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from lintstream.core.models import RawDiagnostic
from lintstream.core.severity import Severity, severity_from_text_token

from .base import ParseContext, iter_pattern_matches

# ``<line>:<column>  <error|warning>  <message>  <rule>``. The message is the
# shortest run ending before the first gap of two or more spaces; whatever
# follows that gap is the rule name, possibly empty. Lines without the gap
# do not match.
TEXT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<line>\d+):(?P<column>\d+)\s+(?P<severity>error|warning)\s+"
    r"(?P<message>.+?)\s{2,}(?P<rule>.*)$",
)
CRASH_PREFIX: Final[str] = "Error:"


def parse_crash_output(lines: Sequence[str]) -> RawDiagnostic | None:
    """Return a whole-document record when the tool reported a crash.

    Args:
        lines: Output lines emitted by the tool.

    Returns:
        RawDiagnostic | None: Error record carrying the first output line
        verbatim, or ``None`` when the output does not start with ``Error:``.
    """

    if not lines or not lines[0].startswith(CRASH_PREFIX):
        return None
    return RawDiagnostic(
        severity=Severity.ERROR,
        message=lines[0],
        whole_document=True,
        synthetic=True,
    )


def parse_text(lines: Sequence[str], _context: ParseContext) -> Sequence[RawDiagnostic]:
    """Parse text-format diagnostics, one per matching line.

    Args:
        lines: Output lines emitted by the tool.
        _context: Invocation context (unused).

    Returns:
        Sequence[RawDiagnostic]: Records in output order; a single crash record
        when the first line starts with ``Error:``.
    """

    crash = parse_crash_output(lines)
    if crash is not None:
        return [crash]
    results: list[RawDiagnostic] = []
    for match in iter_pattern_matches(lines, TEXT_PATTERN):
        token = match.group("severity")
        results.append(
            RawDiagnostic(
                line=int(match.group("line")),
                column=int(match.group("column")),
                severity=severity_from_text_token(token),
                severity_token=token,
                message=match.group("message"),
                code=match.group("rule"),
            ),
        )
    return results


__all__ = ["CRASH_PREFIX", "TEXT_PATTERN", "parse_crash_output", "parse_text"]

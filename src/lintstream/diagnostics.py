# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalise intermediate records into document-anchored diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from lintstream.core.models import Diagnostic, RawDiagnostic
from lintstream.interfaces.document import DocumentLike
from lintstream.parsers import OutputFormat, ParseContext, parser_for
from lintstream.positions import default_region, resolve_position

LOGGER = logging.getLogger(__name__)


def compose_message(raw: RawDiagnostic, *, show_rule_name: bool) -> str:
    """Return the user-facing message for ``raw``.

    Text-format records are prefixed with their severity token. The rule name
    is appended as ``" [rule]"`` when enabled and present; synthetic records
    keep their message verbatim.

    Args:
        raw: Intermediate record produced by a parser.
        show_rule_name: ``True`` to append the rule name.

    Returns:
        str: Message text for the normalised diagnostic.
    """

    if raw.synthetic:
        return raw.message
    message = raw.message
    if raw.severity_token is not None:
        message = f"{raw.severity_token}: {message}"
    if show_rule_name and raw.code:
        message = f"{message} [{raw.code}]"
    return message


def normalize_diagnostic(
    raw: RawDiagnostic,
    document: DocumentLike,
    *,
    show_rule_name: bool,
) -> Diagnostic | None:
    """Anchor ``raw`` in ``document``.

    Args:
        raw: Intermediate record produced by a parser.
        document: Document the tool was run against.
        show_rule_name: ``True`` to append rule names to messages.

    Returns:
        Diagnostic | None: The anchored diagnostic, or ``None`` when the record
        cannot be placed or carries no message.
    """

    length = len(document.text)
    message = compose_message(raw, show_rule_name=show_rule_name)
    if not message:
        LOGGER.debug("dropping diagnostic without message at %s:%s", raw.line, raw.column)
        return None
    if raw.whole_document:
        start, end = 0, length
    else:
        start = resolve_position(raw.line, raw.column, document)
        if start is None or raw.line is None:
            LOGGER.debug("dropping unplaceable diagnostic line=%s column=%s: %s", raw.line, raw.column, message)
            return None
        _, end = default_region(raw.line, document)
        end = min(max(end, start), length)
    return Diagnostic(start=start, end=end, severity=raw.severity, message=message, rule=raw.code)


def normalize_diagnostics(
    records: Iterable[RawDiagnostic],
    document: DocumentLike,
    *,
    show_rule_name: bool,
) -> list[Diagnostic]:
    """Normalise ``records`` in order, skipping those that cannot be placed."""

    results: list[Diagnostic] = []
    for raw in records:
        diagnostic = normalize_diagnostic(raw, document, show_rule_name=show_rule_name)
        if diagnostic is not None:
            results.append(diagnostic)
    return results


def clamp_diagnostics(diagnostics: Sequence[Diagnostic], length: int) -> list[Diagnostic]:
    """Clamp every diagnostic to a document of ``length`` characters."""

    return [diagnostic.clamped(length) for diagnostic in diagnostics]


def diagnostics_from_output(
    stdout: str,
    document: DocumentLike,
    *,
    output_format: OutputFormat,
    show_rule_name: bool,
    tool: str,
) -> list[Diagnostic]:
    """Parse ``stdout`` in ``output_format`` and anchor the results in ``document``.

    Args:
        stdout: Raw standard output captured from the tool.
        document: Document the tool was run against.
        output_format: Format requested from the tool for this invocation.
        show_rule_name: ``True`` to append rule names to messages.
        tool: Tool name used for synthetic fallback records.

    Returns:
        list[Diagnostic]: Diagnostics in the order the tool reported them.
    """

    records = parser_for(output_format).parse(stdout, context=ParseContext(tool=tool))
    return normalize_diagnostics(records, document, show_rule_name=show_rule_name)


__all__ = [
    "clamp_diagnostics",
    "compose_message",
    "diagnostics_from_output",
    "normalize_diagnostic",
    "normalize_diagnostics",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map tool line/column coordinates onto document offsets."""

from __future__ import annotations

from lintstream.interfaces.document import DocumentLike


def resolve_position(line: int | None, column: int | None, document: DocumentLike) -> int | None:
    """Return the offset of a 1-based ``line``/``column`` pair within ``document``.

    Args:
        line: 1-based line number reported by the tool.
        column: 1-based column number reported by the tool.
        document: Document providing coordinate resolution.

    Returns:
        int | None: Offset into the document, or ``None`` when either coordinate
        is missing or not positive. Columns running past the end of the line
        clamp to the line end.
    """

    if line is None or column is None or line < 1 or column < 1:
        return None
    return document.offset_at(line, column)


def default_region(line: int, document: DocumentLike) -> tuple[int, int]:
    """Return the highlight span used for a diagnostic anchored to ``line``.

    The span covers the line from its first non-blank character to its last
    non-blank character. Blank lines yield the whole, possibly empty, line.

    Args:
        line: 1-based line number.
        document: Document providing line lookup.

    Returns:
        tuple[int, int]: ``(start, end)`` offsets with ``end >= start``.
    """

    start, end = document.line_bounds(line)
    content = document.text[start:end]
    stripped = content.strip()
    if not stripped:
        return start, end
    leading = len(content) - len(content.lstrip())
    trailing = len(content) - len(content.rstrip())
    return start + leading, end - trailing


__all__ = ["default_region", "resolve_position"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory text document implementing :class:`~lintstream.interfaces.DocumentLike`."""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for index, char in enumerate(text):
        if char == "\n":
            starts.append(index + 1)
    return starts


class TextDocument:
    """Mutable text buffer addressed by 1-based line and column coordinates.

    Lines are separated by ``\\n``; a trailing ``\\r`` is treated as part of the
    line terminator when computing line bounds.
    """

    __slots__ = ("_starts", "_text", "path")

    def __init__(self, text: str = "", *, path: Path | None = None) -> None:
        self._text = text
        self._starts = _line_starts(text)
        self.path = path

    def __repr__(self) -> str:
        return f"TextDocument(path={self.path!r}, length={len(self._text)})"

    @classmethod
    def from_path(cls, path: Path, *, encoding: str = "utf-8") -> TextDocument:
        """Load a document from ``path`` keeping the path as its backing file."""

        return cls(path.read_text(encoding=encoding), path=path)

    @property
    def text(self) -> str:
        """Return the full current text content."""

        return self._text

    @property
    def line_count(self) -> int:
        """Return the number of lines, counting a trailing empty line."""

        return len(self._starts)

    def __len__(self) -> int:
        return len(self._text)

    def set_text(self, text: str) -> None:
        """Replace the document content, as a host edit would."""

        self._text = text
        self._starts = _line_starts(text)

    def line_bounds(self, line: int) -> tuple[int, int]:
        """Return the ``(start, end)`` offsets of ``line`` excluding its terminator.

        Args:
            line: 1-based line number; values outside the document clamp to
                the first or last line.

        Returns:
            tuple[int, int]: Offsets delimiting the line content.
        """

        index = min(max(line, 1), len(self._starts)) - 1
        start = self._starts[index]
        if index + 1 < len(self._starts):
            end = self._starts[index + 1] - 1
            if end > start and self._text[end - 1] == "\r":
                end -= 1
        else:
            end = len(self._text)
        return start, end

    def offset_at(self, line: int, column: int) -> int:
        """Return the offset of ``line``/``column``, clamping columns to the line end.

        Args:
            line: 1-based line number.
            column: 1-based column number.

        Returns:
            int: 0-based offset into :attr:`text`.
        """

        start, end = self.line_bounds(line)
        return min(start + max(column, 1) - 1, end)

    def position_of(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of ``offset``.

        Args:
            offset: 0-based offset, clamped to the document extent.

        Returns:
            tuple[int, int]: Line and column numbers.
        """

        bounded = min(max(offset, 0), len(self._text))
        index = bisect_right(self._starts, bounded) - 1
        return index + 1, bounded - self._starts[index] + 1


__all__ = ["TextDocument"]

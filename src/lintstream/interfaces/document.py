# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocol describing the host document checked by lintstream."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class DocumentLike(Protocol):
    """Host buffer capability consumed by the diagnostic pipeline."""

    @property
    def text(self) -> str:
        """Return the full current text content of the document."""

        raise NotImplementedError

    @property
    def path(self) -> Path | None:
        """Return the backing file path, or ``None`` for unsaved buffers."""

        raise NotImplementedError

    def offset_at(self, line: int, column: int) -> int:
        """Return the 0-based offset of 1-based ``line``/``column``.

        Implementations clamp out-of-range coordinates rather than raising.

        Args:
            line: 1-based line number.
            column: 1-based column number.

        Returns:
            int: Offset into :attr:`text`.
        """

        raise NotImplementedError

    def line_bounds(self, line: int) -> tuple[int, int]:
        """Return the ``(start, end)`` offsets of 1-based ``line`` excluding its newline.

        Args:
            line: 1-based line number, clamped to the document extent.

        Returns:
            tuple[int, int]: Offsets delimiting the line content.
        """

        raise NotImplementedError


__all__ = ["DocumentLike"]

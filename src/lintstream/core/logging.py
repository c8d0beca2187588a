# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging
import sys
from functools import cache
from typing import Final, Literal

from rich.console import Console
from rich.text import Text

PACKAGE_LOGGER: Final[str] = "lintstream"
_VERBOSE_FLAG: Final[str] = "_lintstream_verbose_configured"


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a Rich console configured for ``color`` and ``emoji`` preferences.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Cached console matching the preferences.
    """

    tty = detect_tty()
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, use_color: bool | None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def configure_logging(*, verbose: bool) -> logging.Logger:
    """Stream package debug records to stderr when ``verbose`` is requested.

    Args:
        verbose: ``True`` to emit debug records, ``False`` to keep warnings only.

    Returns:
        logging.Logger: The package root logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not getattr(logger, _VERBOSE_FLAG, False):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        setattr(logger, _VERBOSE_FLAG, True)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "detect_tty",
    "emoji",
    "fail",
    "get_console",
    "info",
    "ok",
    "warn",
]

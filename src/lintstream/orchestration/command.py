# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the linter command line for one invocation."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from lintstream.config.models import LintConfig
from lintstream.interfaces.document import DocumentLike
from lintstream.parsers import OutputFormat

NO_IGNORE_FLAG: Final[str] = "--no-ignore"


def document_start_directory(document: DocumentLike) -> Path:
    """Return the directory root resolution starts from for ``document``."""

    if document.path is not None:
        return document.path.expanduser().absolute().parent
    return Path.cwd()


def document_name(document: DocumentLike, config: LintConfig) -> str:
    """Return the file name passed to the linter for ``document``.

    Relative paths are made absolute against the current directory, since the
    linter runs in the resolved project root.
    """

    if document.path is not None:
        return str(document.path.expanduser().absolute())
    return config.stdin_filename


def build_command(
    document: DocumentLike,
    *,
    config: LintConfig,
    output_format: OutputFormat,
) -> tuple[str, ...]:
    """Return ``<executable> --no-ignore [--format json] <name> <extra...>``.

    User-configured extra arguments come last so they can override defaults.

    Args:
        document: Document being checked.
        config: Configuration snapshot for the invocation.
        output_format: Output format requested from the tool.

    Returns:
        tuple[str, ...]: Command and arguments.
    """

    return (
        config.executable,
        NO_IGNORE_FLAG,
        *output_format.command_args(),
        document_name(document, config),
        *config.extra_args,
    )


__all__ = ["NO_IGNORE_FLAG", "build_command", "document_name", "document_start_directory"]

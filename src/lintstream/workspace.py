# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the working directory used when invoking the linter."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from itertools import chain
from pathlib import Path
from typing import TYPE_CHECKING

from lintstream.interfaces.runtime import ProjectDetector

if TYPE_CHECKING:
    from lintstream.config.models import LintConfig

LOGGER = logging.getLogger(__name__)


def iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield unique directories from ``start`` up to the filesystem root.

    Args:
        start: File or directory whose ancestors should be traversed. Files
            start the walk at their parent directory.

    Yields:
        Path: Candidate directories, nearest first.
    """

    origin = start.expanduser().absolute()
    if origin.is_file():
        origin = origin.parent
    seen: set[Path] = set()
    for candidate in chain([origin], origin.parents):
        if candidate in seen:
            continue
        seen.add(candidate)
        yield candidate


def find_marker_root(start: Path, markers: Sequence[str]) -> Path | None:
    """Return the nearest ancestor of ``start`` containing any of ``markers``.

    Args:
        start: Directory where the search begins; it is itself a candidate.
        markers: File names whose presence marks a project root.

    Returns:
        Path | None: Matching directory, or ``None`` when no ancestor matches.
    """

    if not markers:
        return None
    for candidate in iter_ancestors(start):
        if _has_marker(candidate, markers):
            return candidate
    return None


def _has_marker(directory: Path, markers: Iterable[str]) -> bool:
    return any((directory / marker).exists() for marker in markers)


def resolve_root(
    start: Path,
    *,
    config: LintConfig,
    detector: ProjectDetector | None = None,
) -> Path:
    """Return the directory the linter should run in.

    Precedence, first match wins: the configured ``project_root`` override;
    the nearest ancestor of ``start`` holding a configured project marker;
    the root reported by ``detector``; ``start`` itself.

    Args:
        start: Directory of the checked document.
        config: Configuration snapshot carrying the override and markers.
        detector: Optional external project-detection capability.

    Returns:
        Path: Working directory for the spawned process.
    """

    if config.project_root is not None:
        return config.project_root
    marker_root = find_marker_root(start, config.project_markers)
    if marker_root is not None:
        return marker_root
    if detector is not None:
        detected = detector.project_root(start)
        if detected is not None:
            return detected
    LOGGER.debug("no project root found above %s; using it directly", start)
    return start


__all__ = ["find_marker_root", "iter_ancestors", "resolve_root"]

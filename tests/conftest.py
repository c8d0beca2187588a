# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from lintstream.core.models import Diagnostic
from tests.helpers.launchers import FakeLauncher


@pytest.fixture
def launcher() -> FakeLauncher:
    """Return a launcher recording spawned processes."""
    return FakeLauncher()


@pytest.fixture
def reports() -> list[list[Diagnostic]]:
    """Return a list collecting every delivered diagnostic batch."""
    return []


@pytest.fixture
def fake_linter(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory writing executable shell scripts that stand in for the linter."""

    def _write(body: str, name: str = "fake-oxlint") -> Path:
        script = tmp_path / "bin" / name
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IEXEC | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _write

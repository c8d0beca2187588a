# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration models and loaders."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from lintstream.config import (
    CONFIG_FILENAME,
    DEFAULT_PROJECT_MARKERS,
    LintConfig,
    build_config,
    load_config,
    load_config_result,
)
from lintstream.errors import ConfigError
from lintstream.parsers import OutputFormat


def test_defaults() -> None:
    cfg = LintConfig()
    assert cfg.executable == "oxlint"
    assert cfg.extra_args == ()
    assert cfg.show_rule_name is True
    assert cfg.prefer_json is False
    assert cfg.project_root is None
    assert cfg.project_markers == DEFAULT_PROJECT_MARKERS
    assert "package.json" in cfg.project_markers


def test_config_is_frozen() -> None:
    cfg = LintConfig()
    with pytest.raises(ValueError):
        cfg.executable = "eslint"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("prefer_json", "supported", "expected"),
    [
        (False, True, OutputFormat.TEXT),
        (True, True, OutputFormat.JSON),
        (True, False, OutputFormat.TEXT),
        (False, False, OutputFormat.TEXT),
    ],
)
def test_output_format_selection(prefer_json: bool, supported: bool, expected: OutputFormat) -> None:
    cfg = LintConfig(prefer_json=prefer_json)
    assert cfg.output_format(json_supported=supported) is expected


def test_tool_name_strips_directories() -> None:
    assert LintConfig(executable="/opt/bin/oxlint").tool_name == "oxlint"


def test_dedicated_file_with_kebab_keys(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        dedent(
            """
            executable = "oxlint-nightly"
            extra-args = ["--deny-warnings", "-D", "correctness"]
            show-rule-name = false
            prefer-json = true
            project-markers = ["package.json"]
            """,
        ),
        encoding="utf-8",
    )
    nested = tmp_path / "src" / "deep"
    nested.mkdir(parents=True)

    result = load_config_result(nested)

    assert result.source == tmp_path / CONFIG_FILENAME
    cfg = result.config
    assert cfg.executable == "oxlint-nightly"
    assert cfg.extra_args == ("--deny-warnings", "-D", "correctness")
    assert cfg.show_rule_name is False
    assert cfg.prefer_json is True
    assert cfg.project_markers == ("package.json",)


def test_pyproject_section_with_relative_root(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        dedent(
            """
            [project]
            name = "demo"

            [tool.lintstream]
            project_root = "frontend"
            """,
        ),
        encoding="utf-8",
    )
    cfg = load_config(tmp_path / "frontend" / "app.js")
    assert cfg.project_root == tmp_path / "frontend"


def test_nearest_config_wins(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.lintstream]\nexecutable = "outer"\n', encoding="utf-8")
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / CONFIG_FILENAME).write_text('executable = "inner"\n', encoding="utf-8")
    assert load_config(inner).executable == "inner"
    assert load_config(tmp_path).executable == "outer"


def test_pyproject_without_section_is_skipped(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    (tmp_path / CONFIG_FILENAME).write_text('executable = "parent"\n', encoding="utf-8")
    assert load_config(project).executable == "parent"


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("executable = \n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [{"unknown-key": 1}, {"executable": "  "}, {"show-rule-name": "sometimes"}],
)
def test_invalid_values_raise_config_error(payload: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        build_config(payload)

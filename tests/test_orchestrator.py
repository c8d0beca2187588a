# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for check sessions and the orchestrator that owns them."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from lintstream.config import LintConfig
from lintstream.core.models import Diagnostic
from lintstream.core.severity import Severity
from lintstream.document import TextDocument
from lintstream.errors import LintStreamError, ToolNotFoundError
from lintstream.orchestration import NO_IGNORE_FLAG, CheckState, LintOrchestrator, build_command
from lintstream.parsers import OutputFormat
from tests.helpers.launchers import FailingLauncher, FakeLauncher, ImmediateLauncher

_ERROR_LINE = "1:1  error  Boom  no-boom"


def _config(tmp_path: Path, **overrides: object) -> LintConfig:
    return LintConfig.model_validate({"executable": sys.executable, "project_root": tmp_path, **overrides})


def _orchestrator(tmp_path: Path, launcher: object, **kwargs: object) -> LintOrchestrator:
    config = kwargs.pop("config", None) or _config(tmp_path)
    return LintOrchestrator(config, launcher=launcher, **kwargs)  # type: ignore[arg-type]


def test_build_command_for_file_document(tmp_path: Path) -> None:
    doc = TextDocument("x", path=tmp_path / "app.js")
    config = LintConfig(executable="oxlint", extra_args=("-D", "correctness"))
    assert build_command(doc, config=config, output_format=OutputFormat.TEXT) == (
        "oxlint",
        NO_IGNORE_FLAG,
        str(tmp_path / "app.js"),
        "-D",
        "correctness",
    )


def test_build_command_requests_json_before_name() -> None:
    config = LintConfig(executable="oxlint", extra_args=("--quiet",))
    assert build_command(TextDocument("x"), config=config, output_format=OutputFormat.JSON) == (
        "oxlint",
        NO_IGNORE_FLAG,
        "--format",
        "json",
        "stdin.js",
        "--quiet",
    )


def test_build_command_makes_relative_paths_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    doc = TextDocument("x", path=Path("src") / "app.js")
    command = build_command(doc, config=LintConfig(executable="oxlint"), output_format=OutputFormat.TEXT)
    assert command[2] == str(Path.cwd() / "src" / "app.js")


def test_relative_document_resolves_from_project_root(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    launcher: FakeLauncher,
) -> None:
    project = tmp_path / "proj"
    workdir = project / "sub"
    (workdir / "src").mkdir(parents=True)
    (project / "package.json").write_text("{}", encoding="utf-8")
    (workdir / "src" / "app.js").write_text("let a;\n", encoding="utf-8")
    monkeypatch.chdir(workdir)

    doc = TextDocument("let a;\n", path=Path("src/app.js"))
    config = LintConfig(executable=sys.executable, project_markers=("package.json",))
    orchestrator = LintOrchestrator(config, launcher=launcher)
    orchestrator.attach(doc, lambda _diags: None)
    invocation = orchestrator.check(doc)

    assert invocation is not None
    assert invocation.working_directory == Path.cwd().parent
    name = invocation.command[2]
    assert Path(name).is_absolute()
    assert (invocation.working_directory / name).exists()


def test_attach_rejects_missing_executable(launcher: FakeLauncher) -> None:
    orchestrator = LintOrchestrator(launcher=launcher)
    config = LintConfig(executable="lintstream-definitely-missing-tool")
    with pytest.raises(ToolNotFoundError) as excinfo:
        orchestrator.attach(TextDocument("x"), lambda _diags: None, config=config)
    assert excinfo.value.executable == "lintstream-definitely-missing-tool"
    assert launcher.spawned == []


def test_check_delivers_once_and_returns_to_idle(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("const a = 1;\n", path=tmp_path / "app.js")
    orchestrator = _orchestrator(tmp_path, launcher)
    session = orchestrator.attach(doc, reports.append)

    invocation = orchestrator.check(doc)

    assert invocation is not None
    assert session.state is CheckState.RUNNING
    assert session.current == invocation
    (process,) = launcher.spawned
    assert process.cwd == tmp_path
    assert process.stdin_text == "const a = 1;\n"
    assert process.command == invocation.command

    process.finish(_ERROR_LINE, returncode=1)

    assert len(reports) == 1
    assert [(d.start, d.end, d.severity, d.message) for d in reports[0]] == [
        (0, 12, Severity.ERROR, "error: Boom [no-boom]"),
    ]
    assert session.state is CheckState.IDLE
    assert session.current is None


def test_new_check_supersedes_running_one(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("let a;\n", path=tmp_path / "app.js")
    orchestrator = _orchestrator(tmp_path, launcher)
    session = orchestrator.attach(doc, reports.append)

    orchestrator.check(doc)
    first = launcher.spawned[0]
    observed: list[CheckState] = []
    first.on_kill = lambda: observed.append(session.state)

    doc.set_text("let b;\n")
    orchestrator.check(doc)
    second = launcher.spawned[1]

    assert first.killed
    assert observed == [CheckState.SUPERSEDED]
    assert second.stdin_text == "let b;\n"

    first.finish(_ERROR_LINE)
    assert reports == []
    assert session.state is CheckState.RUNNING

    second.finish("")
    assert reports == [[]]
    assert session.state is CheckState.IDLE


def test_empty_document_reports_clean_without_spawning(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("")
    orchestrator = _orchestrator(tmp_path, launcher)
    orchestrator.attach(doc, reports.append)

    assert orchestrator.check(doc) is None
    assert reports == [[]]
    assert launcher.spawned == []


def test_empty_document_kills_in_flight_check(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("x")
    orchestrator = _orchestrator(tmp_path, launcher)
    session = orchestrator.attach(doc, reports.append)
    orchestrator.check(doc)

    doc.set_text("")
    orchestrator.check(doc)
    launcher.spawned[0].finish(_ERROR_LINE)

    assert launcher.spawned[0].killed
    assert reports == [[]]
    assert session.state is CheckState.IDLE


def test_cancel_discards_results(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("x")
    orchestrator = _orchestrator(tmp_path, launcher)
    session = orchestrator.attach(doc, reports.append)
    orchestrator.check(doc)

    session.cancel()
    launcher.spawned[0].finish(_ERROR_LINE)

    assert launcher.spawned[0].killed
    assert reports == []
    assert session.state is CheckState.IDLE


def test_results_are_clamped_to_current_document(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("first line\nsecond line\n")
    orchestrator = _orchestrator(tmp_path, launcher)
    orchestrator.attach(doc, reports.append)
    orchestrator.check(doc)

    doc.set_text("x")
    launcher.spawned[0].finish("Error: Failed to parse\n", returncode=2)

    assert len(reports) == 1
    (diag,) = reports[0]
    assert (diag.start, diag.end) == (0, 1)
    assert diag.message == "Error: Failed to parse"


def test_spawn_failure_propagates_and_resets_state(
    tmp_path: Path,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("x")
    orchestrator = _orchestrator(tmp_path, FailingLauncher(ToolNotFoundError("oxlint")))
    session = orchestrator.attach(doc, reports.append)

    with pytest.raises(ToolNotFoundError):
        orchestrator.check(doc)

    assert session.state is CheckState.IDLE
    assert session.current is None
    assert reports == []


def test_synchronous_completion_is_delivered(
    tmp_path: Path,
    reports: list[list[Diagnostic]],
) -> None:
    launcher = ImmediateLauncher(stdout=_ERROR_LINE)
    doc = TextDocument("boom();\n")
    orchestrator = _orchestrator(tmp_path, launcher)
    session = orchestrator.attach(doc, reports.append)

    orchestrator.check(doc)

    assert launcher.calls == 1
    assert len(reports) == 1
    assert reports[0][0].rule == "no-boom"
    assert session.state is CheckState.IDLE


def test_prefer_json_requests_structured_output(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("a = 1\n")
    orchestrator = _orchestrator(tmp_path, launcher, config=_config(tmp_path, prefer_json=True))
    orchestrator.attach(doc, reports.append)
    invocation = orchestrator.check(doc)

    assert invocation is not None
    assert invocation.output_format is OutputFormat.JSON
    assert "--format" in invocation.command

    label = {"span": {"line": 1, "column": 1}}
    payload = {"diagnostics": [{"message": "m", "code": "c", "severity": "error", "labels": [label]}]}
    launcher.spawned[0].finish(json.dumps(payload))
    assert [(d.start, d.end, d.message) for d in reports[0]] == [(0, 5, "m [c]")]


def test_json_unsupported_falls_back_to_text(tmp_path: Path, launcher: FakeLauncher) -> None:
    doc = TextDocument("a = 1\n")
    orchestrator = _orchestrator(
        tmp_path,
        launcher,
        config=_config(tmp_path, prefer_json=True),
        json_supported=False,
    )
    orchestrator.attach(doc, lambda _diags: None)
    invocation = orchestrator.check(doc)

    assert invocation is not None
    assert invocation.output_format is OutputFormat.TEXT
    assert "--format" not in invocation.command


def test_check_requires_attached_document(tmp_path: Path, launcher: FakeLauncher) -> None:
    orchestrator = _orchestrator(tmp_path, launcher)
    with pytest.raises(LintStreamError, match="not attached"):
        orchestrator.check(TextDocument("x"))


def test_detach_cancels_running_check(
    tmp_path: Path,
    launcher: FakeLauncher,
    reports: list[list[Diagnostic]],
) -> None:
    doc = TextDocument("x")
    orchestrator = _orchestrator(tmp_path, launcher)
    orchestrator.attach(doc, reports.append)
    orchestrator.check(doc)

    orchestrator.detach(doc)
    launcher.spawned[0].finish(_ERROR_LINE)

    assert launcher.spawned[0].killed
    assert orchestrator.session_for(doc) is None
    assert reports == []


def test_sessions_are_independent_per_document(
    tmp_path: Path,
    launcher: FakeLauncher,
) -> None:
    first_reports: list[list[Diagnostic]] = []
    second_reports: list[list[Diagnostic]] = []
    first, second = TextDocument("a"), TextDocument("b")
    orchestrator = _orchestrator(tmp_path, launcher)
    orchestrator.attach(first, first_reports.append)
    orchestrator.attach(second, second_reports.append)

    orchestrator.check(first)
    orchestrator.check(second)

    assert not launcher.spawned[0].killed
    launcher.spawned[1].finish(_ERROR_LINE)
    launcher.spawned[0].finish("")
    assert first_reports == [[]]
    assert len(second_reports[0]) == 1

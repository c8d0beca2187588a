# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line front end running a single check and printing its diagnostics."""

from __future__ import annotations

import json
import sys
import threading
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.table import Table
from rich.text import Text

from lintstream.config import LintConfig, build_config, load_config_result
from lintstream.core.logging import configure_logging, detect_tty, fail, get_console, info, ok, warn
from lintstream.core.models import Diagnostic
from lintstream.core.serialization import serialize_diagnostic
from lintstream.core.severity import Severity
from lintstream.document import TextDocument
from lintstream.errors import ConfigError
from lintstream.orchestration import LintOrchestrator

EXIT_CLEAN: Final[int] = 0
EXIT_DIAGNOSTICS: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}

app = typer.Typer(help="Stream linter diagnostics for a single document.", no_args_is_help=True)


class OutputMode(str, Enum):
    """Rendering used for reported diagnostics."""

    TABLE = "table"
    JSON = "json"


@app.callback()
def main() -> None:
    """Stream linter diagnostics for a single document."""


def _config_overrides(
    *,
    executable: str | None,
    prefer_json: bool | None,
    show_rule_name: bool | None,
    project_root: Path | None,
    extra_args: Sequence[str],
) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if executable is not None:
        overrides["executable"] = executable
    if prefer_json is not None:
        overrides["prefer_json"] = prefer_json
    if show_rule_name is not None:
        overrides["show_rule_name"] = show_rule_name
    if project_root is not None:
        overrides["project_root"] = project_root.expanduser()
    if extra_args:
        overrides["extra_args"] = tuple(extra_args)
    return overrides


def run_check(document: TextDocument, config: LintConfig) -> list[Diagnostic]:
    """Check ``document`` once and block until its diagnostics are reported.

    Args:
        document: Document to check.
        config: Configuration for the invocation.

    Returns:
        list[Diagnostic]: Delivered diagnostics.

    Raises:
        ToolNotFoundError: If the linter executable cannot be found.
    """

    done = threading.Event()
    delivered: list[Diagnostic] = []

    def _report(diagnostics: list[Diagnostic]) -> None:
        delivered.extend(diagnostics)
        done.set()

    orchestrator = LintOrchestrator(config)
    try:
        orchestrator.attach(document, _report)
        orchestrator.check(document)
        done.wait()
    finally:
        orchestrator.close()
    return delivered


def render_table(document: TextDocument, diagnostics: Sequence[Diagnostic], *, use_color: bool) -> Table:
    """Return a Rich table listing ``diagnostics`` by ``line:column``."""

    table = Table(show_header=True, header_style="bold" if use_color else None, box=None)
    table.add_column("Location", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Message")
    for diagnostic in diagnostics:
        line, column = document.position_of(diagnostic.start)
        style = _SEVERITY_STYLES[diagnostic.severity] if use_color else None
        # Messages carry "[rule]" suffixes that Rich would otherwise parse as markup.
        table.add_row(f"{line}:{column}", diagnostic.severity.value, Text(diagnostic.message), style=style)
    return table


@app.command("check")
def check_command(
    path: Annotated[Path | None, typer.Argument(help="File to check.")] = None,
    extra_args: Annotated[
        list[str] | None,
        typer.Argument(help="Extra linter arguments, given after '--'.", show_default=False),
    ] = None,
    stdin: Annotated[bool, typer.Option("--stdin", help="Read content from standard input.")] = False,
    prefer_json: Annotated[
        bool | None,
        typer.Option("--json/--text", help="Request structured or text output from the linter."),
    ] = None,
    show_rule_name: Annotated[
        bool | None,
        typer.Option("--rule-names/--no-rule-names", help="Append rule names to messages."),
    ] = None,
    executable: Annotated[str | None, typer.Option("--executable", help="Linter executable.")] = None,
    project_root: Annotated[
        Path | None,
        typer.Option("--project-root", help="Directory to run the linter in."),
    ] = None,
    output: Annotated[OutputMode, typer.Option("--output", "-o", help="Output rendering.")] = OutputMode.TABLE,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Colourise output.")] = True,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")] = False,
) -> None:
    """Run the linter against one document and print its diagnostics.

    Raises:
        typer.Exit: Always raised with the command's exit status.
    """

    configure_logging(verbose=verbose)
    use_color = color and detect_tty()
    if path is None and not stdin:
        fail("Provide a PATH or --stdin.", use_emoji=emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    if path is not None and stdin and output is OutputMode.TABLE:
        warn(f"Reading content from stdin; {path} only names the document.", use_emoji=emoji, use_color=use_color)
    try:
        loaded = load_config_result(path if path is not None else Path.cwd())
        if verbose and output is OutputMode.TABLE and loaded.source is not None:
            info(f"Using configuration from {loaded.source}", use_emoji=emoji, use_color=use_color)
        base = loaded.config
        overrides = _config_overrides(
            executable=executable,
            prefer_json=prefer_json,
            show_rule_name=show_rule_name,
            project_root=project_root,
            extra_args=extra_args or (),
        )
        config = build_config({**base.model_dump(), **overrides}) if overrides else base
        if path is not None and not stdin:
            document = TextDocument.from_path(path)
        else:
            document = TextDocument(sys.stdin.read(), path=path)
        diagnostics = run_check(document, config)
    except (ConfigError, OSError) as exc:
        fail(str(exc), use_emoji=emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    if output is OutputMode.JSON:
        typer.echo(json.dumps([serialize_diagnostic(diagnostic) for diagnostic in diagnostics], indent=2))
    elif diagnostics:
        get_console(color=use_color, emoji=emoji).print(render_table(document, diagnostics, use_color=use_color))
    else:
        ok("No diagnostics reported.", use_emoji=emoji, use_color=use_color)

    has_errors = any(diagnostic.severity is Severity.ERROR for diagnostic in diagnostics)
    raise typer.Exit(code=EXIT_DIAGNOSTICS if has_errors else EXIT_CLEAN)


__all__ = ["app", "check_command", "render_table", "run_check"]

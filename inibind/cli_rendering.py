"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for bind diagnostics,
bound values, and bind summaries.
"""

from __future__ import annotations

from dataclasses import asdict
import json
from typing import NoReturn

import typer

from .binder import BindReport
from .errors import IniBindError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    if isinstance(exc, IniBindError) and exc.hint:
        typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=1) from exc


def echo_bound_value(target: object) -> None:
    """Print a bound dataclass instance as indented JSON."""

    typer.echo(json.dumps(asdict(target), indent=2, default=str))


def echo_bind_summary(report: BindReport) -> None:
    """Print section and assignment counters for one bind."""

    typer.echo(f"Sections: {report.sections}")
    typer.echo(f"Applied: {report.applied}")
    typer.echo(f"Skipped: {report.skipped}")

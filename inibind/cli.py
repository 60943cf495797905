"""Command-line interface for inibind.

Responsibilities:
- Expose user-facing commands that bind a file into a dataclass schema.
- Convert CLI arguments into `BindConfig` and render results or diagnostics.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Annotated

import typer

from .binder import BindReport, IniBinder
from .cli_rendering import echo_bind_summary, echo_bound_value, exit_with_command_error
from .config import BindConfig, ConfigLoader
from .errors import UsageError
from .telemetry.logger import BindLogger, configure_cli_logging

app = typer.Typer(
    name="inibind",
    no_args_is_help=True,
    help="Bind section/key-value config files into dataclasses.",
)

_DEFAULT_SCHEMA = "inibind.sample:AppConfig"

SchemaOption = Annotated[
    str,
    typer.Option(
        "--schema",
        help="Dataclass to bind into, as `module:Class`.",
    ),
]
TagOption = Annotated[
    str | None,
    typer.Option("--tag", help="Field metadata key holding section/key names."),
]
LineEndingsOption = Annotated[
    str | None,
    typer.Option("--line-endings", help="`universal` (CRLF and LF) or `crlf`."),
]
UnsupportedKindsOption = Annotated[
    str | None,
    typer.Option(
        "--unsupported-kinds",
        help="`error` or `ignore` for keys bound to non-scalar fields.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log skipped sections and keys to stderr."),
]


def _load_schema_class(reference: str) -> type:
    """Import a `module:Class` reference to a dataclass type."""

    module_name, separator, class_name = reference.partition(":")
    if not separator or not module_name or not class_name:
        raise UsageError(
            detail=f"schema `{reference}` is not a `module:Class` reference",
            hint=f"For example `--schema {_DEFAULT_SCHEMA}`.",
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UsageError(detail=f"cannot import schema module `{module_name}`: {exc}") from exc
    schema = getattr(module, class_name, None)
    if not isinstance(schema, type):
        raise UsageError(detail=f"schema module `{module_name}` has no class `{class_name}`")
    return schema


def _resolve_config(
    tag: str | None,
    line_endings: str | None,
    unsupported_kinds: str | None,
    verbose: bool,
) -> BindConfig:
    """Resolve effective binder settings from CLI flags and `INIBIND_*` variables."""

    try:
        return ConfigLoader.resolve(
            cli={
                "tag": tag,
                "line_endings": line_endings,
                "unsupported_kinds": unsupported_kinds,
                "log_level": "DEBUG" if verbose else None,
            }
        )
    except ValueError as exc:
        raise UsageError(detail=str(exc)) from exc


def _bind(
    path: Path,
    schema: str,
    tag: str | None,
    line_endings: str | None,
    unsupported_kinds: str | None,
    verbose: bool,
) -> tuple[object, BindReport]:
    """Bind `path` into a fresh instance of `schema`."""

    config = _resolve_config(tag, line_endings, unsupported_kinds, verbose)
    configure_cli_logging(config.log_level)
    target = _load_schema_class(schema)()
    report = IniBinder(config=config, logger=BindLogger()).bind_file(path, target)
    return target, report


@app.command("show")
def show_command(
    path: Annotated[Path, typer.Argument(help="Path to the config file.")],
    schema: SchemaOption = _DEFAULT_SCHEMA,
    tag: TagOption = None,
    line_endings: LineEndingsOption = None,
    unsupported_kinds: UnsupportedKindsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Bind a config file and print the resulting value as JSON."""

    try:
        target, _ = _bind(path, schema, tag, line_endings, unsupported_kinds, verbose)
    except Exception as exc:
        exit_with_command_error("show", exc)

    echo_bound_value(target)


@app.command("check")
def check_command(
    path: Annotated[Path, typer.Argument(help="Path to the config file.")],
    schema: SchemaOption = _DEFAULT_SCHEMA,
    tag: TagOption = None,
    line_endings: LineEndingsOption = None,
    unsupported_kinds: UnsupportedKindsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate that a config file binds cleanly into the schema."""

    try:
        _, report = _bind(path, schema, tag, line_endings, unsupported_kinds, verbose)
    except Exception as exc:
        exit_with_command_error("check", exc)

    typer.echo("OK")
    echo_bind_summary(report)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()

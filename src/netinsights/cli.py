# src/netinsights/cli.py
"""netinsights Command Line Interface.

Usage:
    netinsights summarize session.json                      # Console summary
    netinsights summarize session.jsonl --format json       # JSON snapshot
    netinsights summarize session.json --state failure      # Failed tasks only
    netinsights summarize session.json --host api.example.com --method GET
    netinsights summarize session.json --config insights.yaml
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import pydantic
import typer
import yaml

from netinsights import __version__
from netinsights.contracts.enums import TaskState
from netinsights.contracts.errors import TaskRecordLoadError
from netinsights.core.config import load_settings
from netinsights.core.logging import configure_logging, get_logger
from netinsights.formatters import format_console, snapshot_to_dict
from netinsights.insights.session import InsightsSession
from netinsights.sources.json_source import load_tasks

logger = get_logger(__name__)

app = typer.Typer(
    name="netinsights",
    help="netinsights: Session insights for network logs.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"netinsights version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose/debug logging."),
    ] = False,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Output structured JSON logs (for machine processing)."),
    ] = False,
) -> None:
    """netinsights: Session insights for network logs."""
    # Configure early so configuration errors are logged consistently;
    # commands reconfigure once settings are loaded.
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}


@app.command()
def summarize(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Task record export (JSON array, JSON object or JSONL)."),
    ],
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to YAML configuration file.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: console or json."),
    ] = None,
    states: Annotated[
        list[TaskState] | None,
        typer.Option("--state", "-s", help="Only include tasks in this state (repeatable)."),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", help="Only include requests to this host."),
    ] = None,
    url_contains: Annotated[
        str | None,
        typer.Option("--url-contains", help="Only include requests whose URL contains this text."),
    ] = None,
    methods: Annotated[
        list[str] | None,
        typer.Option("--method", "-m", help="Only include requests with this HTTP method (repeatable)."),
    ] = None,
    min_duration: Annotated[
        float | None,
        typer.Option("--min-duration", help="Only include tasks lasting at least this many seconds.", min=0.0),
    ] = None,
    data_key: Annotated[
        str | None,
        typer.Option("--data-key", help="Key holding the task array in a JSON object export."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with an error if any task record is rejected."),
    ] = False,
) -> None:
    """Aggregate a task record export into session insights.

    Configuration precedence (highest to lowest):
    1. Command-line flags
    2. Config file (--config)
    3. Built-in defaults
    """
    flags: dict[str, Any] = ctx.obj or {}
    cli_overrides: dict[str, Any] = {}

    logging_overrides: dict[str, Any] = {}
    if flags.get("verbose"):
        logging_overrides["level"] = "DEBUG"
    if flags.get("json_logs"):
        logging_overrides["json_output"] = True
    if logging_overrides:
        cli_overrides["logging"] = logging_overrides

    filter_overrides: dict[str, Any] = {}
    if states:
        filter_overrides["states"] = [state.value for state in states]
    if host is not None:
        filter_overrides["host"] = host
    if url_contains is not None:
        filter_overrides["url_contains"] = url_contains
    if methods:
        filter_overrides["methods"] = methods
    if min_duration is not None:
        filter_overrides["min_duration"] = min_duration
    if filter_overrides:
        cli_overrides["filter"] = filter_overrides

    if data_key is not None:
        cli_overrides["source"] = {"data_key": data_key}
    if output_format is not None:
        cli_overrides["output"] = {"format": output_format}

    try:
        settings = load_settings(config_file=config_file, cli_overrides=cli_overrides)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e
    except (pydantic.ValidationError, yaml.YAMLError, ValueError) as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    configure_logging(json_output=settings.logging.json_output, level=settings.logging.level)

    try:
        result = load_tasks(path, settings.source)
    except TaskRecordLoadError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    session = InsightsSession(settings.filter)
    snapshot = session.reload(result.tasks)
    logger.info(
        "Summarized task records",
        path=str(path),
        loaded=len(result.tasks),
        rejected=len(result.rejections),
        filtered=not settings.filter.is_unrestricted,
    )

    if settings.output.format == "json":
        payload = snapshot_to_dict(snapshot)
        payload["rejected"] = [{"index": r.index, "reason": r.reason} for r in result.rejections]
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(format_console(snapshot))
        if result.rejections:
            typer.secho(
                f"\n⚠ {len(result.rejections):,} task record(s) rejected",
                fg=typer.colors.YELLOW,
                err=True,
            )

    if strict and result.rejections:
        raise typer.Exit(1)


def main() -> None:
    """Entry point for netinsights CLI."""
    app()


if __name__ == "__main__":
    main()

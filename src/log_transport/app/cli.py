from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer

from .config import FormatterConfig, LoggingConfig, OutputConfig, TransportConfig
from .container import Container
from ..core.domain.exceptions import DestinationError, InvalidRecordError

app = typer.Typer(add_completion=False, no_args_is_help=True)


COLOR_MODES = {"auto": None, "always": True, "never": False}


def _build_config(
    *,
    json_output: bool,
    dest: Optional[str],
    fsync: bool,
    target_padding: Optional[int],
    timezone: Optional[str],
    color: Optional[str],
    log_level: Optional[str],
) -> TransportConfig:
    """Layer CLI flags over the environment-derived configuration.

    Flags only ever switch features on; leaving one out keeps the value from
    the environment.
    """
    base = TransportConfig()

    output = base.output.model_dump()
    if json_output:
        output["json_output"] = True
    if dest is not None:
        output["dest"] = dest
    if fsync:
        output["fsync"] = True

    formatter = base.formatter.model_dump()
    if target_padding is not None:
        formatter["target_padding"] = target_padding
    if timezone is not None:
        formatter["timezone"] = timezone
    if color is not None:
        if color.lower() not in COLOR_MODES:
            raise typer.BadParameter(f"expected one of {', '.join(COLOR_MODES)}", param_hint="--color")
        formatter["color"] = COLOR_MODES[color.lower()]

    logging_cfg = base.logging.model_dump()
    if log_level is not None:
        logging_cfg["level"] = log_level

    return TransportConfig(
        output=OutputConfig(**output),
        formatter=FormatterConfig(**formatter),
        logging=LoggingConfig(**logging_cfg),
    )


@app.command()
def run(
    json_output: bool = typer.Option(False, "--json", help="Emit JSON lines instead of colorized text"),
    dest: Optional[str] = typer.Option(None, "--dest", "-d", help="Destination path or fd number (default: stdout)"),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="Read records from a file instead of stdin"),
    target_padding: Optional[int] = typer.Option(None, "--target-padding", min=0, help="Width of the target column"),
    timezone: Optional[str] = typer.Option(None, "--timezone", help="IANA timezone for timestamps"),
    color: Optional[str] = typer.Option(None, "--color", help="Colors: auto, always or never", case_sensitive=False),
    fsync: bool = typer.Option(False, "--fsync", help="fsync the destination at the end"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Diagnostics log level", case_sensitive=False),
):
    """Format line-delimited JSON records from stdin (or --input) to the destination."""
    config = _build_config(
        json_output=json_output,
        dest=dest,
        fsync=fsync,
        target_padding=target_padding,
        timezone=timezone,
        color=color,
        log_level=log_level,
    )

    container = Container()
    container.config.from_pydantic(config)

    try:
        container.init_resources()
        uc = container.stream_uc()
        if input_path is not None:
            with input_path.open("rb") as fh:
                uc.execute(fh)
        else:
            uc.execute(sys.stdin.buffer)
    except DestinationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        # Always shutdown resources to flush and close the destination
        container.shutdown_resources()


@app.command(name="format")
def format_command(
    record: str = typer.Argument(..., help="One record as a JSON object"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON instead of colorized text"),
    target_padding: Optional[int] = typer.Option(None, "--target-padding", min=0, help="Width of the target column"),
    timezone: Optional[str] = typer.Option(None, "--timezone", help="IANA timezone for timestamps"),
    color: Optional[str] = typer.Option(None, "--color", help="Colors: auto, always or never", case_sensitive=False),
):
    """Format a single record and print it."""
    config = _build_config(
        json_output=json_output,
        dest=None,
        fsync=False,
        target_padding=target_padding,
        timezone=timezone,
        color=color,
        log_level=None,
    )

    try:
        data = json.loads(record)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: record is not valid JSON: {e}", err=True)
        raise typer.Exit(code=2)

    container = Container()
    container.config.from_pydantic(config)

    uc = container.format_uc()
    try:
        line = uc.execute(data)
    except InvalidRecordError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(line, nl=False)


if __name__ == "__main__":
    app()

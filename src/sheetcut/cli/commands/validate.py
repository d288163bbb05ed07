"""Validate command for checking configuration files.

Checks a JSON configuration for syntax and schema errors, duplicate piece
ids, and pieces that will not fit the configured sheet.
"""

from pathlib import Path
from typing import Annotated

import typer

from sheetcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a cut plan configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        sheetcut validate kitchen.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Print a configuration loading error to stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            path = detail.get("path") or "(root)"
            typer.echo(f"  {path}: {detail.get('message', 'Unknown error')}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")

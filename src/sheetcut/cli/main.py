"""Typer CLI for sheet cutting optimization."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from sheetcut.application import OptimizeCutPlanCommand
from sheetcut.application.config import (
    ConfigError,
    load_config,
    merge_config_with_cli,
)
from sheetcut.cli.commands import display_load_error, validate_command
from sheetcut.infrastructure import CutPlanFormatter, ExporterRegistry, ExportManager

OUTPUT_FORMATS = ("text", "json", "csv")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_formats(output_formats: str) -> list[str]:
    """Parse a comma-separated format list or "all"."""
    available = ExporterRegistry.available_formats()
    if output_formats.strip().lower() == "all":
        return available

    formats = [f.strip().lower() for f in output_formats.split(",") if f.strip()]
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)
    return formats


app = typer.Typer(
    name="sheetcut",
    help="Arrange rectangular pieces onto stock sheets and report the cut plan.",
)

app.command(name="validate")(validate_command)


@app.command()
def optimize(
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ],
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Sheet width in mm"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Sheet height in mm"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Saw kerf in mm"),
    ] = None,
    trim: Annotated[
        float | None,
        typer.Option("--trim", help="Trim margin on each sheet edge in mm"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, csv"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: json,csv (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "cutplan",
    max_placements: Annotated[
        int | None,
        typer.Option("--max-placements", help="Stop after placing this many pieces"),
    ] = None,
    time_limit: Annotated[
        float | None,
        typer.Option("--time-limit", help="Stop packing after this many seconds"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Optimize a cut plan from a configuration file.

    CLI options override the corresponding values in the config file.
    Pieces that do not fit a sheet are reported as warnings; the command
    still succeeds with the remaining layout.

    Examples:
        sheetcut optimize --config kitchen.json
        sheetcut optimize --config kitchen.json --kerf 4 --format json -o plan.json
        sheetcut optimize --config kitchen.json --output-formats all --output-dir ./out
    """
    _configure_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format: {output_format}. Use one of: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
        config = merge_config_with_cli(
            config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            kerf=kerf,
            trim_margin=trim,
            max_placements=max_placements,
            time_limit=time_limit,
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = OptimizeCutPlanCommand().execute(config)

    if not result.is_valid:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(code=1)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    plan = result.plan

    if output_formats is not None:
        formats = _parse_formats(output_formats)
        manager = ExportManager(output_dir or Path("."))
        try:
            files = manager.export_all(formats, plan, project_name)
        except OSError as e:
            typer.echo(f"Export error: {e}", err=True)
            raise typer.Exit(code=1)

        typer.echo("Exported files:")
        for fmt, path in files.items():
            typer.echo(f"  {fmt.upper()}: {path}")
        return

    if output_format == "text":
        content = CutPlanFormatter(
            min_offcut_size=result.config.min_offcut_size
        ).format(plan)
    else:
        content = ExporterRegistry.get(output_format)().export_string(plan)

    if output_file is not None:
        output_file.write_text(content, encoding="utf-8")
        typer.echo(f"Cut plan written to: {output_file}")
    else:
        typer.echo(content)


if __name__ == "__main__":
    app()

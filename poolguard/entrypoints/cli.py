from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from poolguard.config import RuleConfig
from poolguard.loaders import (
    JsonReportLoader,
    TextReportLoader,
    YamlReportLoader,
    format_text,
)
from poolguard.models.diagnostic import Diagnostic
from poolguard.models.rules import VALIDATION_RULES
from poolguard.services.scanner import scan_paths

app = typer.Typer(
    name="poolguard",
    add_completion=False,
    no_args_is_help=True,
    help="Check connection pool settings passed to database clients.",
)


class OutputFormat(Enum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_config(targets: list[str] | None) -> RuleConfig:
    """Create a rule config from CLI overrides and environment-backed defaults.

    Args:
        targets: Fully qualified client class names given on the command line.

    Returns:
        RuleConfig: Configuration to scan with.
    """
    if not targets:
        return RuleConfig()
    return RuleConfig(target_constructors=tuple(targets))


def _write_report(
    diagnostics: list[Diagnostic], output_format: OutputFormat, output_path: Path | None
) -> None:
    if output_format is OutputFormat.TEXT and output_path is None:
        for diagnostic in diagnostics:
            typer.echo(format_text(diagnostic))
        return

    path: Path = output_path or Path(f"poolguard-report.{output_format.value}")
    if output_format is OutputFormat.TEXT:
        TextReportLoader(path).load(diagnostics)
    elif output_format is OutputFormat.JSON:
        JsonReportLoader(path).load(diagnostics)
    else:
        YamlReportLoader(path).load(diagnostics)
    typer.echo(f"Report written to {path}")


@app.command("check")
def check(
    paths: Annotated[
        list[Path],
        typer.Argument(
            help="Python files or directories to scan.",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            case_sensitive=False,
            help="Report format (text, json or yaml).",
        ),
    ] = OutputFormat.TEXT,
    output_path: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Report file; text reports go to stdout when omitted.",
            file_okay=True,
            dir_okay=False,
            writable=True,
        ),
    ] = None,
    targets: Annotated[
        Optional[list[str]],
        typer.Option(
            "--target",
            "-t",
            help="Fully qualified client class to check; repeatable.",
        ),
    ] = None,
    skip_errors: Annotated[
        bool,
        typer.Option(
            "--skip-errors/--fail-on-errors",
            help="Whether files that fail to scan are logged and skipped.",
        ),
    ] = False,
    exit_zero: Annotated[
        bool,
        typer.Option("--exit-zero", help="Exit with 0 even when diagnostics are found."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Scan sources and report connection pool settings below their minimum.

    Args:
        paths: Files or directories to scan.
        output_format: Report format.
        output_path: Report file; text goes to stdout and json or yaml to
            `poolguard-report.<format>` when omitted.
        targets: Client classes to check instead of the configured ones.
        skip_errors: Whether to skip files that fail to scan.
        exit_zero: Whether to succeed regardless of findings.
        verbose: Whether to log at debug level.
    """
    _configure_logging(verbose)
    config = _build_config(targets)

    diagnostics = scan_paths(
        paths, config, on_error="skip" if skip_errors else "raise"
    )
    _write_report(diagnostics, output_format, output_path)

    if diagnostics:
        typer.secho(
            f"Found {len(diagnostics)} connection pool issue(s)",
            fg=typer.colors.RED,
            err=True,
        )
        if not exit_zero:
            raise typer.Exit(code=1)
        return

    typer.secho("No connection pool issues found", fg=typer.colors.GREEN, err=True)


@app.command("rules")
def rules() -> None:
    """List the connection pool fields that are checked."""
    for rule in VALIDATION_RULES.values():
        typer.echo(
            f"{rule.code.code}  {rule.key.value} ({rule.value_kind.value}) "
            f">= {rule.minimum:g}: {rule.code.message}"
        )


def main() -> None:
    """Entry point for executing the Typer application."""
    app()


if __name__ == "__main__":
    main()

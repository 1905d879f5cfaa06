"""Main entry point for shorthand-codegen.

This module provides the command-line interface, including commands for:
- Generating the properties and extension wrapper files
- Checking that committed generated files are up to date
- Reporting how each contract method is classified
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from shorthand_codegen.cli import check_command, classify_command, generate_command

load_dotenv()

app = typer.Typer(name="shorthand-codegen", no_args_is_help=True)

DescriptorArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the contract descriptor file (YAML or JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Generator configuration YAML file (defaults describe IoFluently)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
OutputRootOption = Annotated[
    Path | None,
    typer.Option(
        "--output-root",
        help="Directory the configured output paths are relative to",
        file_okay=False,
        dir_okay=True,
        show_default="enclosing git repository root",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]


@app.command()
def generate(
    descriptor: DescriptorArgument,
    config: ConfigOption = None,
    output_root: OutputRootOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Generate the properties and extension wrapper files.

    Example:
        shorthand-codegen generate contracts/io_service.yaml --output-root .

    """
    generate_command(descriptor, config, output_root, log_level)


@app.command()
def check(
    descriptor: DescriptorArgument,
    config: ConfigOption = None,
    output_root: OutputRootOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Verify the generated files match a fresh generation."""
    check_command(descriptor, config, output_root, log_level)


@app.command()
def classify(
    descriptor: DescriptorArgument,
    config: ConfigOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Show how each contract method is classified."""
    classify_command(descriptor, config, log_level)


if __name__ == "__main__":
    app()

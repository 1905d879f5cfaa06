"""CLI command implementations for generating and checking artifacts."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from shorthand_codegen.cli.errors import cli_error_handler
from shorthand_codegen.cli.infrastructure import build_generator
from shorthand_codegen.logging import setup_logging
from shorthand_codegen.utils import default_output_root

logger = logging.getLogger(__name__)
console = Console()


def generate_command(
    descriptor_path: Path,
    config_path: Path | None = None,
    output_root: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for writing both generated artifacts.

    Args:
        descriptor_path: Path to the contract descriptor file
        config_path: Optional generator configuration file
        output_root: Directory the configured output paths are relative to
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("generate", "Generation failed"):
        generator = build_generator(descriptor_path, config_path)
        root = output_root or default_output_root()
        written = generator.generate(root)

        for path in written:
            console.print(f"[green]✅ Generated {path}[/green]")
        logger.info("Generated %d files under %s", len(written), root)


def check_command(
    descriptor_path: Path,
    config_path: Path | None = None,
    output_root: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for verifying committed artifacts are current.

    Exits with code 1 when any artifact is missing or out of date.

    Args:
        descriptor_path: Path to the contract descriptor file
        config_path: Optional generator configuration file
        output_root: Directory the configured output paths are relative to
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("check", "Check failed"):
        generator = build_generator(descriptor_path, config_path)
        stale = generator.check(output_root or default_output_root())

    if stale:
        for path in stale:
            console.print(f"[red]❌ Out of date: {path}[/red]")
        raise typer.Exit(1)

    console.print("[green]✅ Generated files are up to date[/green]")

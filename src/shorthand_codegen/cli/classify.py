"""CLI command implementation for reporting method classification."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shorthand_codegen.classification import MethodRole
from shorthand_codegen.cli.errors import cli_error_handler
from shorthand_codegen.cli.infrastructure import build_generator
from shorthand_codegen.logging import setup_logging
from shorthand_codegen.rendering import render_type_name

logger = logging.getLogger(__name__)
console = Console()

_ROLE_STYLES = {
    MethodRole.PROPERTY: "[green]property[/green]",
    MethodRole.EXTENSION: "[cyan]extension[/cyan]",
    MethodRole.SKIPPED: "[dim]skipped[/dim]",
}


def classify_command(
    descriptor_path: Path,
    config_path: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for listing how each method is classified.

    Args:
        descriptor_path: Path to the contract descriptor file
        config_path: Optional generator configuration file
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("classify", "Classification failed"):
        generator = build_generator(descriptor_path, config_path)
        classifier = generator.classifier
        methods = generator.describe_contract()

        table = Table(title=f"Classification of {generator.config.contract}")
        table.add_column("Method", style="bold")
        table.add_column("Receiver")
        table.add_column("Returns")
        table.add_column("Role")

        for method in methods:
            receiver = method.first_parameter
            table.add_row(
                escape(method.name),
                escape(render_type_name(receiver.type)) if receiver else "-",
                escape(render_type_name(method.return_type)),
                _ROLE_STYLES[classifier.role_of(method)],
            )

        console.print(table)

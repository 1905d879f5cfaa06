"""CLI error handling for shorthand-codegen.

Generator errors are shown as a Rich panel whose title names the failing
stage (descriptor, configuration, type model, output) and whose body adds a
hint on what to fix. Anything else is reported as a CLIError for the command.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import NamedTuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from typing_extensions import override

from shorthand_codegen.errors import (
    CodegenError,
    ConfigError,
    ContractNotFoundError,
    DescriptorError,
    ModelError,
    OutputWriteError,
)

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class ErrorReport(NamedTuple):
    """Panel title and remediation hint for one family of generator errors."""

    title: str
    hint: str


# Most specific classes first; the first isinstance match wins.
ERROR_REPORTS: tuple[tuple[type[CodegenError], ErrorReport], ...] = (
    (
        ContractNotFoundError,
        ErrorReport(
            "Contract not found",
            "Set 'contract' in the configuration file or SHORTHAND_CODEGEN_CONTRACT "
            "to a contract declared in the descriptor.",
        ),
    ),
    (
        ModelError,
        ErrorReport(
            "Type model unavailable",
            "The contract could not be described; no files were written.",
        ),
    ),
    (
        DescriptorError,
        ErrorReport(
            "Invalid descriptor",
            "Fix the descriptor file; no files were written.",
        ),
    ),
    (
        ConfigError,
        ErrorReport(
            "Invalid configuration",
            "Fix the configuration file or SHORTHAND_CODEGEN_* environment variables.",
        ),
    ),
    (
        OutputWriteError,
        ErrorReport(
            "Cannot write generated sources",
            "Previously generated files were left untouched.",
        ),
    ),
)


class CLIError(Exception):
    """Unexpected failure of a CLI command, with the command name for context."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialise CLI error with context.

        Args:
            message: Human-readable error message describing what went wrong
            command: Name of the CLI command that failed (e.g., "generate")
            original_error: The underlying exception that caused this CLI error

        """
        super().__init__(message)
        self.command = command
        self.original_error = original_error

    @override
    def __str__(self) -> str:
        base_message = super().__str__()
        if self.command:
            return f"CLI command '{self.command}' failed: {base_message}"
        return base_message


def report_for(error: CodegenError) -> ErrorReport | None:
    """Find the panel title and hint for a generator error, if it has one."""
    for error_type, report in ERROR_REPORTS:
        if isinstance(error, error_type):
            return report
    return None


def _show(title: str, message: str, hint: str | None = None) -> None:
    body = f"[red]{escape(message)}[/red]"
    if hint:
        body += f"\n[dim]{escape(hint)}[/dim]"
    console.print(Panel(body, title=f"❌ {escape(title)}", border_style="red"))


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Context manager for unified CLI error handling.

    Generator errors get the panel title of their family from
    ERROR_REPORTS. Other exceptions are wrapped in CLIError and shown under
    ``title``. Either way the command exits with code 1.

    Args:
        command: CLI command name for error context.
        title: Panel title for errors without a dedicated report.

    """
    try:
        yield
    except CodegenError as e:
        report = report_for(e)
        panel_title = report.title if report else title
        logger.error("%s: %s", panel_title, e)
        _show(panel_title, str(e), report.hint if report else None)
        raise typer.Exit(1) from e
    except Exception as e:
        cli_error = CLIError(str(e), command=command, original_error=e)
        logger.error("%s: %s", title, cli_error)
        _show(title, str(cli_error))
        raise typer.Exit(1) from cli_error

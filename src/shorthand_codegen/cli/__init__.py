"""CLI command implementations for shorthand-codegen."""

from shorthand_codegen.cli.classify import classify_command
from shorthand_codegen.cli.errors import CLIError
from shorthand_codegen.cli.generate import check_command, generate_command

__all__ = [
    "CLIError",
    "check_command",
    "classify_command",
    "generate_command",
]

"""CLI commands for spec-delta."""

from src.cli.commands.archive import archive
from src.cli.commands.diff import diff_command
from src.cli.commands.list_specs import list_items
from src.cli.commands.rules import rules_command
from src.cli.commands.show import show
from src.cli.commands.validate import validate

__all__ = [
    "archive",
    "diff_command",
    "list_items",
    "rules_command",
    "show",
    "validate",
]

"""Main CLI entry point for spec-delta."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from src.config import load_config
from src.workspace import Workspace
from src.cli.commands.archive import archive
from src.cli.commands.diff import diff_command
from src.cli.commands.list_specs import list_items
from src.cli.commands.rules import rules_command
from src.cli.commands.show import show
from src.cli.commands.validate import validate


@click.group()
@click.version_option(version="0.3.0")
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Project root directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, root: str, verbose: bool) -> None:
    """Spec Delta - spec and change proposal workflow CLI.

    Specs live in openspec/specs/<capability>/spec.md. Change proposals live
    in openspec/changes/<change>/ and describe edits to specs with
    ADDED/MODIFIED/REMOVED/RENAMED requirement blocks.

    \b
    COMMANDS:
      spec-delta list                    List active changes
      spec-delta list --specs            List specs
      spec-delta show <spec>             Display a spec
      spec-delta validate <item>         Validate a spec or change
      spec-delta validate --all --strict Validate everything, warnings fail
      spec-delta diff <change>           Preview spec updates for a change
      spec-delta archive <change>        Merge a change into specs and archive it
      spec-delta rules                   List validation rules
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace(Path(root))
    ctx.obj["config"] = load_config(root)


cli.add_command(list_items, name="list")
cli.add_command(show)
cli.add_command(validate)
cli.add_command(diff_command, name="diff")
cli.add_command(archive)
cli.add_command(rules_command, name="rules")


if __name__ == "__main__":
    cli()

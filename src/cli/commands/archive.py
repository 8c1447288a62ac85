"""Archive command for completing a change."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape

from src.archive.archiver import ArchiveError, Archiver
from src.config import ValidationConfig
from src.validation.validator import Validator
from src.workspace import Workspace

console = Console()


@click.command()
@click.argument("change_id")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip confirmation prompts")
@click.option("--skip-specs", is_flag=True, help="Archive without updating specs")
@click.option("--json", "output_json", is_flag=True, help="Output the result as JSON")
@click.pass_context
def archive(
    ctx: click.Context,
    change_id: str,
    assume_yes: bool,
    skip_specs: bool,
    output_json: bool,
) -> None:
    """Merge a change into the main specs and archive it.

    Every affected spec is rebuilt and validated before anything is
    written. The change directory is then moved to
    openspec/changes/archive/YYYY-MM-DD-CHANGE_ID.
    """
    workspace: Workspace = ctx.obj["workspace"]
    config: ValidationConfig = ctx.obj["config"]
    archiver = Archiver(workspace, Validator(config=config))

    if workspace.change_exists(change_id) and not output_json:
        incomplete = archiver.count_incomplete_tasks(change_id)
        if incomplete:
            console.print(f"[yellow]Warning: {incomplete} incomplete task(s) found.[/yellow]")
            if not assume_yes and not click.confirm("Continue with archive?", default=False):
                console.print("Archive cancelled.")
                return

        if not skip_specs:
            updates = archiver.find_spec_updates(change_id)
            if updates:
                console.print("Specs to update:")
                for update in updates:
                    status = "update" if update.exists else "create"
                    console.print(f"  {escape(update.capability)}: {status}")
                if not assume_yes and not click.confirm("Proceed with spec updates?", default=True):
                    console.print("Archive cancelled.")
                    return

    try:
        result = archiver.archive(change_id, skip_specs=skip_specs)
    except ArchiveError as e:
        if output_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for prepared in result.updates:
        counts = prepared.counts
        console.print(
            f"Applying changes to {escape(str(prepared.update.target))}: "
            f"[green]+{counts.added}[/green] added, "
            f"[yellow]~{counts.modified}[/yellow] modified, "
            f"[red]-{counts.removed}[/red] removed, "
            f"{counts.renamed} renamed"
        )

    if result.updates:
        totals = result.totals
        console.print(
            f"Totals: +{totals.added}, ~{totals.modified}, -{totals.removed}, {totals.renamed} renamed"
        )
    console.print(f"[green]Change '{escape(change_id)}' archived as '{escape(result.archive_name)}'.[/green]")

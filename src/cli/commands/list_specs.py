"""List command for displaying changes and specs."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.spec.parser import MarkdownParser, SpecParseError
from src.spec.requirement_blocks import parse_delta_spec
from src.workspace import Workspace

console = Console()


def _change_rows(workspace: Workspace) -> list[dict]:
    rows = []
    for change_id in workspace.get_active_change_ids():
        delta_files = workspace.get_change_delta_files(change_id)
        operations = sum(
            parse_delta_spec(workspace.read_text(path)).operation_count
            for path in delta_files.values()
        )
        completed, total = workspace.task_progress(change_id)
        rows.append({
            "id": change_id,
            "capabilities": sorted(delta_files),
            "deltaCount": operations,
            "completedTasks": completed,
            "totalTasks": total,
        })
    return rows


def _spec_rows(workspace: Workspace) -> list[dict]:
    rows = []
    for spec_id in workspace.get_spec_ids():
        try:
            spec = MarkdownParser(workspace.read_text(workspace.spec_path(spec_id))).parse_spec(spec_id)
            rows.append({"id": spec_id, "requirementCount": len(spec.requirements), "error": None})
        except SpecParseError as e:
            rows.append({"id": spec_id, "requirementCount": 0, "error": str(e)})
    return rows


@click.command("list")
@click.option("--specs", "list_specs", is_flag=True, help="List specs instead of changes")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_items(ctx: click.Context, list_specs: bool, output_json: bool) -> None:
    """List active changes, or specs with --specs."""
    workspace: Workspace = ctx.obj["workspace"]

    rows = _spec_rows(workspace) if list_specs else _change_rows(workspace)

    if output_json:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        kind = "specs" if list_specs else "active changes"
        console.print(f"[yellow]No {kind} found[/yellow]")
        return

    if list_specs:
        table = Table(show_header=True, title="Specs")
        table.add_column("Spec")
        table.add_column("Requirements")
        for row in rows:
            count = "[red]parse error[/red]" if row["error"] else str(row["requirementCount"])
            table.add_row(escape(row["id"]), count)
    else:
        table = Table(show_header=True, title="Changes")
        table.add_column("Change")
        table.add_column("Capabilities")
        table.add_column("Deltas")
        table.add_column("Tasks")
        for row in rows:
            tasks = f"{row['completedTasks']}/{row['totalTasks']}" if row["totalTasks"] else "-"
            table.add_row(
                escape(row["id"]),
                escape(", ".join(row["capabilities"])) or "-",
                str(row["deltaCount"]),
                tasks,
            )

    console.print(table)

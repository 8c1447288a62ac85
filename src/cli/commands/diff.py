"""Diff command: preview the spec updates a change would apply."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from src.archive.merge import MergeError, build_updated_spec
from src.spec.diff import SpecDiffer, format_diff_for_terminal
from src.spec.requirement_blocks import parse_delta_spec
from src.workspace import Workspace

console = Console()


@click.command("diff")
@click.argument("change_id")
@click.option("--unified", "-u", is_flag=True, help="Also show a unified text diff")
@click.option("--no-color", is_flag=True, help="Disable colors")
@click.pass_context
def diff_command(ctx: click.Context, change_id: str, unified: bool, no_color: bool) -> None:
    """Preview how a change would rewrite each affected spec.

    Nothing is written; each capability delta is merged in memory and
    compared with the current spec.

    Examples:

        spec-delta diff add-logout

        spec-delta diff add-logout --unified
    """
    workspace: Workspace = ctx.obj["workspace"]

    if not workspace.change_exists(change_id):
        console.print(f"[red]Error:[/red] Change '{escape(change_id)}' not found")
        raise SystemExit(1)

    delta_files = workspace.get_change_delta_files(change_id)
    if not delta_files:
        console.print(f"[yellow]Change '{escape(change_id)}' has no spec deltas[/yellow]")
        return

    differ = SpecDiffer()
    failed = False

    for capability, source in delta_files.items():
        plan = parse_delta_spec(workspace.read_text(source))
        target = workspace.spec_path(capability)
        current = workspace.read_text(target) if workspace.spec_exists(capability) else None

        try:
            result = build_updated_spec(capability, plan, current)
        except MergeError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            failed = True
            continue

        label = f"specs/{capability}/spec.md"
        diff = differ.diff_content(
            current or "",
            result.rebuilt,
            old_label=label if current is not None else "(new spec)",
            new_label=f"{label} ({change_id})",
        )
        console.print(format_diff_for_terminal(diff, color=not no_color))
        if unified and diff.unified_diff:
            console.print()
            console.print(escape(diff.unified_diff), highlight=False)
        console.print()

    if failed:
        raise SystemExit(1)

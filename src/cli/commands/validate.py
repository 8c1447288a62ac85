"""Validate command for checking specs and changes."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.config import ValidationConfig
from src.validation.types import ValidationLevel, ValidationReport
from src.validation.validator import Validator
from src.workspace import Workspace

console = Console()

LEVEL_STYLES = {
    ValidationLevel.ERROR: "red",
    ValidationLevel.WARNING: "yellow",
    ValidationLevel.INFO: "blue",
}


def _resolve_items(
    workspace: Workspace,
    item: str | None,
    item_type: str | None,
    validate_all: bool,
    specs_only: bool,
    changes_only: bool,
) -> list[tuple[str, str]]:
    """Work out which (type, id) pairs to validate."""
    if validate_all or specs_only or changes_only:
        items = []
        if validate_all or changes_only:
            items.extend(("change", c) for c in workspace.get_active_change_ids())
        if validate_all or specs_only:
            items.extend(("spec", s) for s in workspace.get_spec_ids())
        return items

    if not item:
        console.print(
            "[red]Nothing to validate.[/red] Pass an item name, or use --all, --specs or --changes."
        )
        raise SystemExit(1)

    is_change = workspace.change_exists(item)
    is_spec = workspace.spec_exists(item)

    if item_type == "change" or (item_type is None and is_change and not is_spec):
        if not is_change:
            console.print(f"[red]Error:[/red] Change '{escape(item)}' not found")
            raise SystemExit(1)
        return [("change", item)]
    if item_type == "spec" or (item_type is None and is_spec and not is_change):
        if not is_spec:
            console.print(f"[red]Error:[/red] Spec '{escape(item)}' not found")
            raise SystemExit(1)
        return [("spec", item)]
    if is_change and is_spec:
        console.print(
            f"[red]Error:[/red] '{escape(item)}' is both a change and a spec. "
            "Use --type change or --type spec."
        )
        raise SystemExit(1)

    console.print(f"[red]Error:[/red] Unknown item '{escape(item)}'")
    raise SystemExit(1)


def _validate_item(workspace: Workspace, validator: Validator, item_type: str, item_id: str) -> ValidationReport:
    if item_type == "change":
        return validator.validate_change(workspace.change_dir(item_id))
    return validator.validate_spec_file(workspace.spec_path(item_id))


def _print_report(item_type: str, item_id: str, report: ValidationReport) -> None:
    label = f"{item_type} '{escape(item_id)}'"
    if report.valid and not report.issues:
        console.print(f"[green]✓[/green] {label} is valid")
        return

    status = "[green]valid[/green]" if report.valid else "[red]invalid[/red]"
    console.print(f"\n[bold]{label}[/bold] is {status}")

    table = Table(show_header=True)
    table.add_column("Level", style="bold")
    table.add_column("Path")
    table.add_column("Message")

    for issue in report.issues:
        style = LEVEL_STYLES.get(issue.level, "white")
        table.add_row(
            f"[{style}]{issue.level.value}[/{style}]",
            escape(issue.path),
            escape(issue.message),
        )

    console.print(table)


@click.command()
@click.argument("item", required=False)
@click.option("--type", "item_type", type=click.Choice(["spec", "change"]), help="Disambiguate the item type")
@click.option("--all", "validate_all", is_flag=True, help="Validate all specs and changes")
@click.option("--specs", "specs_only", is_flag=True, help="Validate all specs")
@click.option("--changes", "changes_only", is_flag=True, help="Validate all active changes")
@click.option("--strict/--no-strict", default=None, help="Treat warnings as errors")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def validate(
    ctx: click.Context,
    item: str | None,
    item_type: str | None,
    validate_all: bool,
    specs_only: bool,
    changes_only: bool,
    strict: bool | None,
    output_json: bool,
) -> None:
    """Validate a spec or a change.

    ITEM is a spec (capability) or change name. Changes are validated through
    their specs/<capability>/spec.md delta files and, when present, their
    proposal.md.

    Examples:

        spec-delta validate user-auth

        spec-delta validate add-logout --type change --json

        spec-delta validate --all --strict
    """
    workspace: Workspace = ctx.obj["workspace"]
    config: ValidationConfig = ctx.obj["config"]
    validator = Validator(strict=strict, config=config)

    items = _resolve_items(workspace, item, item_type, validate_all, specs_only, changes_only)
    results = [
        (kind, item_id, _validate_item(workspace, validator, kind, item_id))
        for kind, item_id in items
    ]

    if output_json:
        if item and len(results) == 1:
            output = results[0][2].to_dict()
        else:
            output = {
                "items": [
                    {"id": item_id, "type": kind, **report.to_dict()}
                    for kind, item_id, report in results
                ],
                "summary": {
                    "totals": {
                        "items": len(results),
                        "passed": sum(1 for _, _, r in results if r.valid),
                        "failed": sum(1 for _, _, r in results if not r.valid),
                    },
                },
            }
        click.echo(json.dumps(output, indent=2))
    else:
        if not results:
            console.print("[yellow]No items found to validate[/yellow]")
        for kind, item_id, report in results:
            _print_report(kind, item_id, report)

        if len(results) > 1:
            passed = sum(1 for _, _, r in results if r.valid)
            console.print(f"\nTotals: {passed} passed, {len(results) - passed} failed ({len(results)} items)")

    if any(not report.valid for _, _, report in results):
        raise SystemExit(1)

"""Rules command for listing validation rules."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from src.config import ValidationConfig
from src.validation.rules import RuleSet

console = Console()

LEVEL_STYLES = {
    "ERROR": "red",
    "WARNING": "yellow",
    "INFO": "blue",
}


@click.command("rules")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def rules_command(ctx: click.Context, output_json: bool) -> None:
    """List validation rules and whether they are enabled.

    Rules are disabled through the validation.disabled_rules list in
    openspec/config.yaml.
    """
    config: ValidationConfig = ctx.obj["config"]
    rules = RuleSet(config).list_rules()

    if output_json:
        click.echo(json.dumps(rules, indent=2))
        return

    table = Table(title="Validation Rules")
    table.add_column("Rule ID", style="cyan")
    table.add_column("Name")
    table.add_column("Level")
    table.add_column("Target")
    table.add_column("Enabled")

    for rule in rules:
        style = LEVEL_STYLES.get(rule["level"], "white")
        table.add_row(
            rule["rule_id"],
            rule["name"],
            f"[{style}]{rule['level']}[/{style}]",
            rule["target"],
            "[green]yes[/green]" if rule["enabled"] else "[dim]no[/dim]",
        )

    console.print(table)

"""Show command for displaying a spec."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape

from src.spec.parser import MarkdownParser, SpecParseError
from src.spec.schemas import Requirement
from src.workspace import Workspace

console = Console()


def _print_scenarios(requirement: Requirement, indent: str) -> None:
    for index, scenario in enumerate(requirement.scenarios, 1):
        title = f"Scenario {index}" + (f": {scenario.name}" if scenario.name else "")
        console.print(f"{indent}[dim]{escape(title)}[/dim]")
        for line in scenario.raw_text.split("\n"):
            console.print(f"{indent}  [dim]{escape(line)}[/dim]")


@click.command()
@click.argument("spec_id")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option("--requirements", "requirements_only", is_flag=True, help="Show only requirements (exclude scenarios)")
@click.option("--scenarios/--no-scenarios", default=True, help="Include scenario content")
@click.option("--requirement", "-r", "requirement_number", type=int, help="Show a single requirement by 1-based number")
@click.pass_context
def show(
    ctx: click.Context,
    spec_id: str,
    output_json: bool,
    requirements_only: bool,
    scenarios: bool,
    requirement_number: int | None,
) -> None:
    """Display a spec.

    SPEC_ID is the capability name under openspec/specs.
    """
    workspace: Workspace = ctx.obj["workspace"]

    if not workspace.spec_exists(spec_id):
        console.print(f"[red]Error:[/red] Spec '{escape(spec_id)}' not found at {workspace.spec_path(spec_id)}")
        raise SystemExit(1)

    path = workspace.spec_path(spec_id)
    try:
        spec = MarkdownParser(workspace.read_text(path)).parse_spec(spec_id, source_path=str(path))
    except SpecParseError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    requirements = list(enumerate(spec.requirements, 1))
    if requirement_number is not None:
        if not 1 <= requirement_number <= len(spec.requirements):
            console.print(f"[red]Error:[/red] Requirement {requirement_number} not found")
            raise SystemExit(1)
        requirements = [requirements[requirement_number - 1]]

    include_scenarios = scenarios and not requirements_only

    if output_json:
        data = spec.to_dict()
        data["requirements"] = [
            {**req.to_dict(), "scenarios": [s.to_dict() for s in req.scenarios] if include_scenarios else []}
            for _, req in requirements
        ]
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[bold blue]Spec: {escape(spec.name)}[/bold blue]\n")
    console.print("[bold]Purpose:[/bold]")
    console.print(escape(spec.overview))
    console.print()
    console.print("[bold]Requirements:[/bold]")

    for number, req in requirements:
        console.print(f"  [green]{number}. {escape(req.text)}[/green]")
        if include_scenarios:
            _print_scenarios(req, "     ")

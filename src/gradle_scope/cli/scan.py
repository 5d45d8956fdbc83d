"""Scan commands: changed files, module graph, or both."""

import json

import typer
from rich.markup import escape
from rich.table import Table

from ..models import Module
from ..orchestrator import ScopeRunner
from . import app
from ._common import console, exit_on_error, resolve_config, start_logging


@app.command()
def scan(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Base revision (e.g. main)"),
    target: str = typer.Argument(..., help="Target revision (e.g. feature/login)"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
) -> None:
    """List changed files between two revisions and the module dependency graph.

    Runs [bold]git diff --name-only BASE..TARGET[/bold], then temporarily
    injects a reporting task into the root build file and runs the Gradle
    wrapper to recover which subprojects depend on which. The build file is
    restored afterwards, also when something fails.

    [bold cyan]Examples:[/bold cyan]

      gradle-scope scan main feature/login

      gradle-scope -C ../android-app scan v1.2.0 HEAD --json
    """
    logger = start_logging(ctx)
    with exit_on_error(logger, verbose=ctx.obj.get("verbose", False)):
        config = resolve_config(ctx, base_ref=base, target_ref=target)
        result = ScopeRunner(config).run()

        if json_output:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            _print_changed_files(result.changed_files)
            console.print()
            _print_modules(result.modules)


@app.command()
def changed(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Base revision"),
    target: str = typer.Argument(..., help="Target revision"),
    json_output: bool = typer.Option(False, "--json", help="Output as a JSON list"),
) -> None:
    """List files changed between two revisions. Does not touch the build."""
    logger = start_logging(ctx)
    with exit_on_error(logger, verbose=ctx.obj.get("verbose", False)):
        config = resolve_config(ctx, base_ref=base, target_ref=target)
        files = ScopeRunner(config).changed_files()

        if json_output:
            print(json.dumps(files, indent=2))
        else:
            _print_changed_files(files)


@app.command()
def modules(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as a JSON list"),
) -> None:
    """Show the subprojects and which other subprojects depend on them."""
    logger = start_logging(ctx)
    with exit_on_error(logger, verbose=ctx.obj.get("verbose", False)):
        config = resolve_config(ctx)
        found = ScopeRunner(config).modules()

        if json_output:
            print(json.dumps([m.to_dict() for m in found], indent=2))
        else:
            _print_modules(found)


def _print_changed_files(files: list[str]) -> None:
    if not files:
        console.print("[yellow]No changed files.[/yellow]")
        return
    console.print(f"[bold cyan]Changed files[/bold cyan] ({len(files)})")
    for path in files:
        console.print(f"  {escape(path)}", highlight=False)


def _print_modules(found: list[Module]) -> None:
    if not found:
        console.print("[yellow]No subprojects reported.[/yellow]")
        return

    table = Table(title="Subprojects", show_lines=False, pad_edge=True)
    table.add_column("Module", style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Dependents")

    for module in found:
        dependents = ", ".join(d for d in module.dependents if d)
        table.add_row(
            escape(module.name),
            escape(module.path),
            escape(dependents) if dependents else "[dim]-[/dim]",
        )

    console.print(table)

"""Restore command: clean up after an interrupted run."""

import typer

from ..orchestrator import recover
from . import app
from ._common import console, exit_on_error, resolve_config, start_logging


@app.command()
def restore(ctx: typer.Context) -> None:
    """Restore the build file and remove leftovers of an interrupted run.

    A run that was killed mid-way can leave the root build file with the
    injected apply line, its [bold].bak[/bold] backup, and the sidecar task
    and report files. This puts the original build file back and deletes the
    rest. Nothing happens when the project is clean.
    """
    logger = start_logging(ctx)
    with exit_on_error(logger, verbose=ctx.obj.get("verbose", False)):
        config = resolve_config(ctx)
        report = recover(config)

        if not report.changed:
            console.print("[green]Nothing to restore.[/green]")
            return
        for name in report.restored:
            console.print(f"[green]Restored[/green] {name}", highlight=False)
        for name in report.removed:
            console.print(f"[green]Removed[/green] {name}", highlight=False)

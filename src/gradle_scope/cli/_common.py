"""Shared CLI helpers."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ScopeConfig, load_config
from ..exceptions import GradleScopeError
from ..logging_config import setup_logging

console = Console()


def resolve_config(
    ctx: typer.Context,
    base_ref: Optional[str] = None,
    target_ref: Optional[str] = None,
) -> ScopeConfig:
    """Build config from the global CLI options and command arguments."""
    obj = ctx.obj or {}
    return load_config(
        obj.get("path", Path.cwd()),
        config_file=obj.get("config"),
        base_ref=base_ref,
        target_ref=target_ref,
    )


def start_logging(ctx: typer.Context) -> logging.Logger:
    obj = ctx.obj or {}
    return setup_logging(
        verbose=obj.get("verbose", False),
        quiet=obj.get("quiet", False),
        log_file=obj.get("log_file"),
    )


@contextmanager
def exit_on_error(logger: logging.Logger, verbose: bool = False) -> Generator[None, None, None]:
    """Turn errors raised by a command body into a printed message and exit code."""
    try:
        yield

    except typer.Exit:
        raise

    except GradleScopeError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        for cleanup_error in e.cleanup_errors:
            console.print(f"[red]Cleanup failed:[/red] {escape(str(cleanup_error))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

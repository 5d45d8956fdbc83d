"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="gradle-scope",
    help="gradle-scope - changed files and subproject dependency graph for Gradle builds",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .scan import scan as _scan, changed as _changed, modules as _modules  # noqa: F401, E402
from .restore import restore as _restore  # noqa: F401, E402

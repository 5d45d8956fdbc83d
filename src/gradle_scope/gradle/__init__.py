"""Gradle build interaction: dialects, backup, task injection, runs, reports."""

from .backup import backed_up, restore
from .dialect import BuildFileDialect, detect_dialect, require_dialect
from .injector import inject, render_sidecar_task, write_sidecar_task
from .invoker import launcher_name, run_task
from .report import parse_report

__all__ = [
    "BuildFileDialect",
    "detect_dialect",
    "require_dialect",
    "restore",
    "backed_up",
    "inject",
    "render_sidecar_task",
    "write_sidecar_task",
    "launcher_name",
    "run_task",
    "parse_report",
]

"""Run the full changed-files + module-graph flow for one Gradle project.

The module step mutates the root build file, so it runs inside a cleanup
stack:

    detect dialect
    backup build file          -> restore on exit
    refuse taken artifact paths
    schedule artifact removal  -> delete sidecar and report on exit
    write sidecar task
    inject apply line
    run Gradle
    parse report

Cleanup runs innermost-first on every exit path, and every cleanup step
runs even if an earlier one failed.
"""

from collections.abc import Generator
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from . import git_diff
from .config import ScopeConfig
from .exceptions import ArtifactExistsError, InvalidConfigError
from .gradle import (
    BuildFileDialect,
    backed_up,
    inject,
    parse_report,
    require_dialect,
    restore,
    run_task,
    write_sidecar_task,
)
from .gradle.backup import backup_path
from .logging_config import get_logger
from .models import Module, ScopeResult

logger = get_logger(__name__)


def remove_artifact(path: Path) -> bool:
    """Delete *path*; return True if it was removed. Failures are only logged."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", path, e)
        return False
    logger.debug("Removed %s", path)
    return True


def ensure_absent(path: Path) -> None:
    """Raise if *path* exists; a run would overwrite and then delete it."""
    if path.exists() or path.is_symlink():
        raise ArtifactExistsError(
            path, "Remove or rename it, or choose another file name in the configuration"
        )


@contextmanager
def temporary_artifact(path: Path) -> Generator[Path, None, None]:
    """Remove *path* on exit, whatever happened inside the block."""
    try:
        yield path
    finally:
        remove_artifact(path)


class ScopeRunner:
    """Compute changed files and the subproject dependency graph.

    Not safe to run concurrently against the same project directory.
    """

    def __init__(self, config: ScopeConfig):
        self.config = config

    @property
    def project_dir(self) -> Path:
        return self.config.project_dir

    def changed_files(self) -> list[str]:
        if not self.config.has_revisions:
            raise InvalidConfigError(
                "base_ref/target_ref", None, "revisions are required to list changed files"
            )
        return git_diff.changed_files(
            self.project_dir,
            self.config.base_ref,
            self.config.target_ref,
            timeout=self.config.git_timeout_seconds,
        )

    def modules(self) -> list[Module]:
        cfg = self.config
        dialect = require_dialect(self.project_dir)
        logger.info("Using %s in %s", dialect.filename, self.project_dir)

        with ExitStack() as stack:
            stack.enter_context(backed_up(self.project_dir, dialect.filename))
            ensure_absent(cfg.sidecar_path)
            ensure_absent(cfg.report_path)
            stack.enter_context(temporary_artifact(cfg.sidecar_path))
            stack.enter_context(temporary_artifact(cfg.report_path))

            write_sidecar_task(
                self.project_dir,
                cfg.sidecar_file,
                cfg.task_name,
                cfg.output_property,
                cfg.report_file,
                cfg.dependency_configurations,
            )
            inject(self.project_dir, dialect, cfg.sidecar_file)
            run_task(
                self.project_dir,
                cfg.task_name,
                cfg.output_property,
                cfg.report_file,
                extra_args=cfg.gradle_args,
            )
            modules = parse_report(cfg.report_path)

        logger.info("Found %d module(s)", len(modules))
        return modules

    def run(self) -> ScopeResult:
        files = self.changed_files()
        return ScopeResult(changed_files=files, modules=self.modules())


@dataclass
class RecoveryReport:
    """What :func:`recover` cleaned up."""

    restored: list[str] = field(default_factory=list)  # build files restored from .bak
    removed: list[str] = field(default_factory=list)  # leftover artifacts deleted

    @property
    def changed(self) -> bool:
        return bool(self.restored or self.removed)


def recover(config: ScopeConfig) -> RecoveryReport:
    """Undo what an interrupted run left behind.

    Restores any build file that still has a ``.bak`` backup. Sidecar and
    report files are only deleted alongside a restored backup; on their own
    they may belong to the user.

    Raises:
        RestoreError: If a backup exists but cannot be moved back
    """
    report = RecoveryReport()
    for dialect in BuildFileDialect:
        if backup_path(config.project_dir, dialect.filename).is_file():
            restore(config.project_dir, dialect.filename)
            logger.info("Restored %s", dialect.filename)
            report.restored.append(dialect.filename)

    if report.restored:
        for path in (config.sidecar_path, config.report_path):
            if remove_artifact(path):
                report.removed.append(path.name)

    return report

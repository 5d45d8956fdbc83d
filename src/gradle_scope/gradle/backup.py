"""
Back up and restore the root build file around an injection.

The build file is copied to ``<name>.bak`` before it is touched and moved
back afterwards. :func:`backed_up` pairs the two so the restore runs on
every exit path.
"""

import os
import shutil
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Union

from ..exceptions import BackupError, GradleScopeError, RestoreError
from ..logging_config import get_logger
from .dialect import BACKUP_SUFFIX

logger = get_logger(__name__)


def backup_path(project_dir: Union[str, Path], build_file: str) -> Path:
    return Path(project_dir) / (build_file + BACKUP_SUFFIX)


def backup(project_dir: Union[str, Path], build_file: str) -> Path:
    """
    Copy the build file to its ``.bak`` sibling.

    Args:
        project_dir: Directory holding the build file
        build_file: Build file name (e.g. ``build.gradle``)

    Returns:
        Path of the backup file

    Raises:
        BackupError: If the source cannot be read, the backup cannot be
            written or is incomplete, or a backup already exists
    """
    source = Path(project_dir) / build_file
    target = backup_path(project_dir, build_file)

    if not source.is_file():
        raise BackupError(source, "Build file does not exist")
    # A leftover backup is the only pristine copy from an interrupted run
    if target.exists():
        raise BackupError(target, "Backup already exists; run 'gradle-scope restore' first")

    try:
        shutil.copy2(source, target)
        source_size = source.stat().st_size
        target_size = target.stat().st_size
    except OSError as e:
        _discard(target)
        raise BackupError(source, f"Copy failed: {e}") from e

    if source_size != target_size:
        _discard(target)
        raise BackupError(
            source, f"Incomplete copy: wrote {target_size} of {source_size} bytes"
        )

    logger.debug("Backed up %s to %s", source, target)
    return target


def restore(project_dir: Union[str, Path], build_file: str) -> None:
    """
    Replace the (mutated) build file with its backup.

    Raises:
        RestoreError: If the backup is missing or cannot be moved back. The
            current build file is left untouched when there is no backup.
    """
    original = Path(project_dir) / build_file
    saved = backup_path(project_dir, build_file)

    if not saved.is_file():
        raise RestoreError(original, f"Backup not found: {saved}")

    try:
        os.replace(saved, original)
    except OSError as e:
        raise RestoreError(original, f"Rename failed: {e}") from e

    logger.debug("Restored %s from %s", original, saved)


@contextmanager
def backed_up(project_dir: Union[str, Path], build_file: str) -> Generator[Path, None, None]:
    """
    Context manager that backs up the build file and always restores it.

    If the body raises, a failing restore is logged and attached to the
    body's error instead of replacing it.

    Yields:
        Path of the backup file
    """
    saved = backup(project_dir, build_file)
    try:
        yield saved
    except BaseException as primary:
        try:
            restore(project_dir, build_file)
        except RestoreError as restore_error:
            logger.error("%s", restore_error)
            if isinstance(primary, GradleScopeError):
                primary.cleanup_errors.append(restore_error)
        raise
    restore(project_dir, build_file)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove partial backup %s: %s", path, e)

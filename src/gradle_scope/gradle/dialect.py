"""Gradle build file dialects and their detection."""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..exceptions import DialectNotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)

BACKUP_SUFFIX = ".bak"


class BuildFileDialect(Enum):
    """Scripting syntax of the root build file.

    Member order is the detection priority.
    """

    GROOVY = ("build.gradle", "apply from: '{sidecar}'")
    KOTLIN = ("build.gradle.kts", 'apply(from = "{sidecar}")')

    def __init__(self, filename: str, apply_template: str):
        self.filename = filename
        self.apply_template = apply_template

    @property
    def backup_filename(self) -> str:
        return self.filename + BACKUP_SUFFIX

    def apply_statement(self, sidecar_file: str) -> str:
        """Statement that applies *sidecar_file* from the root build file."""
        return self.apply_template.format(sidecar=sidecar_file)


def detect_dialect(project_dir: Union[str, Path]) -> Optional[BuildFileDialect]:
    """Return the dialect of the first build file present, or None."""
    project_dir = Path(project_dir)
    for dialect in BuildFileDialect:
        if (project_dir / dialect.filename).is_file():
            logger.debug("Detected %s build file %s", dialect.name.lower(), dialect.filename)
            return dialect
    return None


def require_dialect(project_dir: Union[str, Path]) -> BuildFileDialect:
    """Like :func:`detect_dialect` but raise when no build file exists."""
    dialect = detect_dialect(project_dir)
    if dialect is None:
        raise DialectNotFoundError(Path(project_dir), [d.filename for d in BuildFileDialect])
    return dialect

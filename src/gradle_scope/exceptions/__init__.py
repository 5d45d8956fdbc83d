"""Exception hierarchy for gradle-scope."""

from .base import GradleScopeError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .gradle import (
    ArtifactExistsError,
    BackupError,
    BuildFileError,
    BuildInvocationError,
    DialectNotFoundError,
    InjectionError,
    ReportParseError,
    RestoreError,
    SidecarWriteError,
)
from .taxonomy import ErrorCode
from .vcs import DiffError

__all__ = [
    "ErrorCode",
    "GradleScopeError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "DiffError",
    "DialectNotFoundError",
    "BuildFileError",
    "BackupError",
    "RestoreError",
    "SidecarWriteError",
    "InjectionError",
    "ArtifactExistsError",
    "BuildInvocationError",
    "ReportParseError",
]

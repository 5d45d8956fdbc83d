"""Gradle exceptions: build file handling, task injection, build runs, reports."""

from pathlib import Path
from typing import Dict, Iterable, Optional

from .base import GradleScopeError
from .taxonomy import ErrorCode


class DialectNotFoundError(GradleScopeError):
    """Raised when a project has no recognised primary build file."""

    code = ErrorCode.GS200

    def __init__(self, project_dir: Path, probed: Iterable[str]):
        probed = list(probed)
        super().__init__(
            f"No Gradle build file found in {project_dir}",
            details={"project_dir": str(project_dir), "probed": ", ".join(probed)},
        )
        self.project_dir = project_dir
        self.probed = probed


class BuildFileError(GradleScopeError):
    """Base class for errors touching a single file on disk."""

    def __init__(self, message: str, filepath: Path, reason: str):
        super().__init__(message, details={"filepath": str(filepath), "reason": reason})
        self.filepath = filepath
        self.reason = reason


class BackupError(BuildFileError):
    """Raised when the build file cannot be copied aside."""

    code = ErrorCode.GS201

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot back up build file: {filepath}", filepath, reason)


class RestoreError(BuildFileError):
    """Raised when the build file cannot be restored from its backup."""

    code = ErrorCode.GS202

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot restore build file: {filepath}", filepath, reason)


class SidecarWriteError(BuildFileError):
    """Raised when the sidecar task file cannot be written."""

    code = ErrorCode.GS300

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot write sidecar task file: {filepath}", filepath, reason)


class InjectionError(BuildFileError):
    """Raised when the apply statement cannot be appended to the build file."""

    code = ErrorCode.GS301

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot inject task into build file: {filepath}", filepath, reason)


class ArtifactExistsError(BuildFileError):
    """Raised when a temporary artifact path is already taken by another file."""

    code = ErrorCode.GS302

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Temporary file already exists: {filepath}", filepath, reason)


class BuildInvocationError(GradleScopeError):
    """Raised when the Gradle launcher is missing, fails to start, or fails."""

    code = ErrorCode.GS400

    def __init__(
        self,
        launcher: Path,
        reason: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        details: Dict[str, str] = {"launcher": str(launcher), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        if stderr:
            details["stderr"] = stderr
        super().__init__(f"Gradle run failed: {launcher}", details=details)
        self.launcher = launcher
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr


class ReportParseError(GradleScopeError):
    """Raised when the dependency report is unreadable or malformed."""

    code = ErrorCode.GS500

    def __init__(self, filepath: Path, reason: str, line: Optional[int] = None):
        details: Dict[str, str] = {"filepath": str(filepath), "reason": reason}
        if line is not None:
            details["line"] = str(line)
        super().__init__(f"Cannot parse dependency report: {filepath}", details=details)
        self.filepath = filepath
        self.reason = reason
        self.line = line

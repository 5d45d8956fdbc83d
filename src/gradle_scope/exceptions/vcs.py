"""Version control exceptions."""

from pathlib import Path

from .base import GradleScopeError
from .taxonomy import ErrorCode


class DiffError(GradleScopeError):
    """Raised when the changed files between two revisions cannot be listed."""

    code = ErrorCode.GS100

    def __init__(self, repo_path: Path, revision_range: str, reason: str):
        super().__init__(
            f"Cannot diff {revision_range} in {repo_path}",
            details={"repo": str(repo_path), "range": revision_range, "reason": reason},
        )
        self.repo_path = repo_path
        self.revision_range = revision_range
        self.reason = reason

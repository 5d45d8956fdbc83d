"""Base exception for gradle-scope."""

from typing import Any, Dict, List, Optional

from .taxonomy import ErrorCode


class GradleScopeError(Exception):
    """Base exception for all gradle-scope errors.

    Attributes:
        message: Human-readable error description
        details: Additional context (paths, exit codes, stderr)
        code: Structured error code for categorization
        cleanup_errors: Errors raised by cleanup actions while this error
            was propagating. They never replace the primary error.
    """

    code: ErrorCode = ErrorCode.GS900

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cleanup_errors: List["GradleScopeError"] = []

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_json(self) -> Dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cleanup_errors": [e.to_json() for e in self.cleanup_errors],
        }

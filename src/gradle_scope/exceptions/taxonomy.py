"""Structured error codes for gradle-scope failures.

Error Code Convention:
    GS1xx - Revision diff errors
    GS2xx - Build file errors (detection, backup, restore)
    GS3xx - Task injection errors
    GS4xx - Build invocation errors
    GS5xx - Report parsing errors
    GS9xx - Configuration errors
"""

from enum import Enum


class ErrorCode(Enum):
    """Structured error codes for observability and debugging."""

    # Revision diff errors (GS1xx)
    GS100 = "GS100"  # git diff failed or could not start

    # Build file errors (GS2xx)
    GS200 = "GS200"  # No recognised build file
    GS201 = "GS201"  # Backup copy failed
    GS202 = "GS202"  # Restore from backup failed

    # Injection errors (GS3xx)
    GS300 = "GS300"  # Sidecar task file write failed
    GS301 = "GS301"  # Apply statement append failed
    GS302 = "GS302"  # Sidecar or report path already taken

    # Build invocation errors (GS4xx)
    GS400 = "GS400"  # Launcher missing, not startable, or non-zero exit

    # Report errors (GS5xx)
    GS500 = "GS500"  # Dependency report unreadable or malformed

    # Configuration errors (GS9xx)
    GS900 = "GS900"  # Generic configuration error
    GS901 = "GS901"  # Invalid path
    GS902 = "GS902"  # Invalid configuration value

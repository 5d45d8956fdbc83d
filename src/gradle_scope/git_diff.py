"""List files changed between two revisions using ``git diff --name-only``."""

import subprocess
from pathlib import Path
from typing import Union

from .exceptions import DiffError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


def changed_files(
    repo_path: Union[str, Path],
    base: str,
    target: str,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> list[str]:
    """Get files changed between *base* and *target*.

    Parameters
    ----------
    repo_path:
        Directory inside the git work tree; git runs with it as cwd.
    base, target:
        Revisions compared as ``<base>..<target>``.
    timeout:
        Seconds to wait for git before giving up.

    Returns
    -------
    list[str]
        Changed paths in the order git printed them.

    Raises
    ------
    DiffError
        If git cannot be started, times out or exits non-zero.
    """
    repo_path = Path(repo_path)
    revision_range = f"{base}..{target}"
    cmd = ["git", "diff", "--name-only", revision_range]

    try:
        result = subprocess.run(
            cmd,
            cwd=str(repo_path),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except NotADirectoryError as e:
        raise DiffError(repo_path, revision_range, f"not a directory: {e}") from e
    except OSError as e:
        raise DiffError(repo_path, revision_range, f"git could not be started: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise DiffError(repo_path, revision_range, f"git timed out after {timeout}s") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise DiffError(
            repo_path,
            revision_range,
            stderr or f"git exited with status {result.returncode}",
        )

    files = parse_name_only(result.stdout)
    logger.debug("%d file(s) changed in %s", len(files), revision_range)
    return files


def parse_name_only(output: str) -> list[str]:
    """Split ``git diff --name-only`` output into paths.

    The trailing newline git prints does not produce an empty entry, so an
    empty diff is ``[]``.
    """
    return [line for line in output.splitlines() if line]

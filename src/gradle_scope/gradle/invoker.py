"""Run the project's Gradle wrapper."""

import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from ..exceptions import BuildInvocationError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Lines of Gradle stderr kept in the error when a run fails
_STDERR_TAIL_LINES = 20


def launcher_name(platform: Optional[str] = None) -> str:
    """Wrapper script name for *platform* (defaults to ``sys.platform``)."""
    platform = sys.platform if platform is None else platform
    return "gradlew.bat" if platform.startswith("win") else "gradlew"


def build_command(
    launcher: Path,
    task_name: str,
    output_property: str,
    report_file: str,
    extra_args: Sequence[str] = (),
) -> list[str]:
    return [str(launcher), task_name, f"-P{output_property}={report_file}", *extra_args]


def run_task(
    project_dir: Union[str, Path],
    task_name: str,
    output_property: str,
    report_file: str,
    extra_args: Sequence[str] = (),
    platform: Optional[str] = None,
) -> None:
    """Run ``<launcher> <task_name> -P<output_property>=<report_file>``.

    Blocks until Gradle exits; no timeout is applied. Output is captured and
    only used for diagnostics.

    Raises:
        BuildInvocationError: If the launcher is missing, cannot be started,
            or exits non-zero
    """
    project_dir = Path(project_dir)
    launcher = project_dir / launcher_name(platform)
    if not launcher.is_file():
        raise BuildInvocationError(launcher, "Gradle wrapper not found")

    cmd = build_command(launcher, task_name, output_property, report_file, extra_args)
    logger.info("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            cwd=str(project_dir),
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise BuildInvocationError(launcher, f"Could not start Gradle: {e}") from e

    if result.stdout:
        logger.debug("Gradle output:\n%s", result.stdout.rstrip())

    if result.returncode != 0:
        stderr_tail = "\n".join((result.stderr or "").strip().splitlines()[-_STDERR_TAIL_LINES:])
        raise BuildInvocationError(
            launcher,
            f"Gradle exited with status {result.returncode}",
            returncode=result.returncode,
            stderr=stderr_tail,
        )

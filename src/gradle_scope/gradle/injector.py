"""Inject the dependency-report task into a Gradle build.

Two files are involved: a sidecar script holding the task, and the root
build file, which gets one ``apply`` line pointing at the sidecar. The
sidecar is always Groovy; both dialects can apply a Groovy script.
"""

from pathlib import Path
from string import Template
from typing import Sequence, Union

from ..exceptions import InjectionError, SidecarWriteError
from ..logging_config import get_logger
from .dialect import BuildFileDialect

logger = get_logger(__name__)

# $-placeholders are filled in here; $$ becomes a literal Groovy $.
_SIDECAR_TEMPLATE = Template(
    r"""import org.gradle.api.artifacts.ProjectDependency

tasks.register("$task_name") {
    doLast {
        def outputPath = project.findProperty("$output_property") ?: "$report_file"
        def configurationNames = [$configurations]
        rootProject.file(outputPath).withWriter("UTF-8") { writer ->
            rootProject.subprojects.each { currentProject ->
                def dependents = rootProject.subprojects.findAll { candidate ->
                    candidate != currentProject && configurationNames.any { configurationName ->
                        def configuration = candidate.configurations.findByName(configurationName)
                        configuration != null && configuration.dependencies.any { dependency ->
                            dependency instanceof ProjectDependency &&
                                (dependency as ProjectDependency).dependencyProject == currentProject
                        }
                    }
                }.collect { it.name }.join(",")
                writer << "\"$${currentProject.name}\",\"$${currentProject.projectDir.path}\",\"$${dependents}\"\n"
            }
        }
    }
}
"""
)


def render_sidecar_task(
    task_name: str,
    output_property: str,
    report_file: str,
    configurations: Sequence[str] = ("implementation", "api"),
) -> str:
    """Return the Groovy source of the dependency-report task."""
    return _SIDECAR_TEMPLATE.substitute(
        task_name=task_name,
        output_property=output_property,
        report_file=report_file,
        configurations=", ".join(f'"{name}"' for name in configurations),
    )


def write_sidecar_task(
    project_dir: Union[str, Path],
    sidecar_file: str,
    task_name: str,
    output_property: str,
    report_file: str,
    configurations: Sequence[str] = ("implementation", "api"),
) -> Path:
    """
    Write the sidecar task script into the project directory.

    Returns:
        Path of the written sidecar

    Raises:
        SidecarWriteError: If the file cannot be fully written
    """
    path = Path(project_dir) / sidecar_file
    content = render_sidecar_task(task_name, output_property, report_file, configurations)
    payload = content.encode("utf-8")

    try:
        with open(path, "wb") as f:
            written = f.write(payload)
            f.flush()
    except OSError as e:
        raise SidecarWriteError(path, f"Write failed: {e}") from e

    if written != len(payload):
        raise SidecarWriteError(path, f"Short write: {written} of {len(payload)} bytes")

    logger.debug("Wrote sidecar task '%s' to %s", task_name, path)
    return path


def inject(
    project_dir: Union[str, Path], dialect: BuildFileDialect, sidecar_file: str
) -> None:
    """
    Append the dialect's apply statement for *sidecar_file* to the build file.

    Exactly one line is added. Existing content is never rewritten; undoing
    the change is the job of the backup/restore pair, and calling this twice
    appends twice.

    Raises:
        InjectionError: If the build file cannot be opened or written
    """
    path = Path(project_dir) / dialect.filename
    line = dialect.apply_statement(sidecar_file) + "\n"

    # Append mode would silently create a missing file
    if not path.is_file():
        raise InjectionError(path, "Build file does not exist")

    try:
        with open(path, "a+b") as f:
            size = f.seek(0, 2)
            prefix = b""
            if size:
                f.seek(size - 1)
                if f.read(1) not in (b"\n", b"\r"):
                    prefix = b"\n"
            payload = prefix + line.encode("utf-8")
            written = f.write(payload)
            f.flush()
    except OSError as e:
        raise InjectionError(path, f"Append failed: {e}") from e

    if written != len(payload):
        raise InjectionError(path, f"Short write: {written} of {len(payload)} bytes")

    logger.debug("Injected '%s' into %s", line.strip(), path)

"""Configuration loading and management for gradle-scope.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in ScopeConfig)
    2. Project config (<project_dir>/gradle-scope.toml)
    3. Explicit config file (--config)
    4. Environment variables (GRADLE_SCOPE_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config("/work/app", base_ref="main", target_ref="feature")
    >>> config.task_name
    'incremental'
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union, get_type_hints

from .exceptions import GradleScopeError, InvalidConfigError, InvalidPathError

PROJECT_CONFIG_NAME = "gradle-scope.toml"
ENV_PREFIX = "GRADLE_SCOPE_"

# Names embedded verbatim into the Groovy sidecar and the Gradle command line
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TASK_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")
# Quoted into Groovy and Kotlin string literals unescaped
_FILE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")


@dataclass(frozen=True)
class ScopeConfig:
    """Configuration for one gradle-scope run.

    Attributes:
        Project:
            project_dir: Absolute path to the Gradle root project
            base_ref: Base revision for the changed-file diff
            target_ref: Target revision for the changed-file diff

        Injected task protocol:
            task_name: Name of the synthetic Gradle task
            sidecar_file: File name of the injected task script
            report_file: File name of the CSV report the task writes
            output_property: Gradle -P property carrying the report path
            dependency_configurations: Configurations scanned for project
                dependencies. Gradle may rename these between versions.

        Tooling:
            git_timeout_seconds: Timeout for the git diff subprocess
            gradle_args: Extra arguments appended to the Gradle command line
    """

    project_dir: Path
    base_ref: Optional[str] = None
    target_ref: Optional[str] = None

    task_name: str = "incremental"
    sidecar_file: str = "incremental.gradle"
    report_file: str = "incremental.csv"
    output_property: str = "incrementalOutput"
    dependency_configurations: tuple[str, ...] = ("implementation", "api")

    git_timeout_seconds: int = 30
    gradle_args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        project_dir = Path(self.project_dir).expanduser().resolve()
        object.__setattr__(self, "project_dir", project_dir)
        if not project_dir.exists():
            raise InvalidPathError(project_dir, "Path does not exist")
        if not project_dir.is_dir():
            raise InvalidPathError(project_dir, "Not a directory")

        # Revisions come as a pair
        if (self.base_ref is None) != (self.target_ref is None):
            raise InvalidConfigError(
                "base_ref/target_ref",
                f"{self.base_ref}..{self.target_ref}",
                "base and target revisions must be given together",
            )
        for key in ("base_ref", "target_ref"):
            value = getattr(self, key)
            if value is not None and not value.strip():
                raise InvalidConfigError(key, value, "revision must not be empty")

        if not _TASK_NAME_RE.match(self.task_name):
            raise InvalidConfigError("task_name", self.task_name, "not a valid Gradle task name")
        if not _IDENTIFIER_RE.match(self.output_property):
            raise InvalidConfigError(
                "output_property", self.output_property, "must be a plain identifier"
            )

        for key in ("sidecar_file", "report_file"):
            value = getattr(self, key)
            if not _FILE_NAME_RE.match(value):
                raise InvalidConfigError(
                    key, value, "must be a bare file name of letters, digits, _ . -"
                )
        if self.sidecar_file == self.report_file:
            raise InvalidConfigError(
                "report_file", self.report_file, "must differ from sidecar_file"
            )

        object.__setattr__(
            self, "dependency_configurations", tuple(self.dependency_configurations)
        )
        if not self.dependency_configurations:
            raise InvalidConfigError(
                "dependency_configurations", "[]", "at least one configuration is required"
            )
        for name in self.dependency_configurations:
            if not _IDENTIFIER_RE.match(name):
                raise InvalidConfigError(
                    "dependency_configurations", name, "must be a plain identifier"
                )

        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        object.__setattr__(self, "gradle_args", tuple(self.gradle_args))

    @property
    def has_revisions(self) -> bool:
        return self.base_ref is not None and self.target_ref is not None

    @property
    def sidecar_path(self) -> Path:
        return self.project_dir / self.sidecar_file

    @property
    def report_path(self) -> Path:
        return self.project_dir / self.report_file


def load_config(
    project_dir: Union[str, Path],
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> ScopeConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        project_dir: Gradle root project directory
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated ScopeConfig instance

    Raises:
        GradleScopeError: If a config file is invalid or missing
        InvalidConfigError: If a merged value is invalid
        InvalidPathError: If project_dir is not an existing directory
    """
    merged: dict[str, Any] = {}

    project_config = Path(project_dir) / PROJECT_CONFIG_NAME
    if project_config.is_file():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise GradleScopeError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})
    merged["project_dir"] = Path(project_dir)

    for key in ("dependency_configurations", "gradle_args"):
        if key in merged and isinstance(merged[key], (list, tuple)):
            merged[key] = tuple(str(v) for v in merged[key])

    try:
        return ScopeConfig(**merged)
    except TypeError as e:
        raise GradleScopeError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GRADLE_SCOPE_* environment variables.

    Supported environment variables:
        GRADLE_SCOPE_BASE_REF: str
        GRADLE_SCOPE_TARGET_REF: str
        GRADLE_SCOPE_TASK_NAME: str
        GRADLE_SCOPE_SIDECAR_FILE: str
        GRADLE_SCOPE_REPORT_FILE: str
        GRADLE_SCOPE_OUTPUT_PROPERTY: str
        GRADLE_SCOPE_DEPENDENCY_CONFIGURATIONS: comma-separated list
        GRADLE_SCOPE_GIT_TIMEOUT_SECONDS: int
        GRADLE_SCOPE_GRADLE_ARGS: whitespace-separated list

    Returns:
        Dict of field_name -> parsed_value for any GRADLE_SCOPE_* vars found.
    """
    type_hints = get_type_hints(ScopeConfig)
    result: dict[str, Any] = {}

    for f in fields(ScopeConfig):
        if f.name == "project_dir":
            continue
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(f.name)
        try:
            result[f.name] = _parse_env_value(f.name, env_value, type_hint)
        except ValueError as e:
            raise GradleScopeError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(field_name: str, value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    if type_hint is int:
        return int(value)
    if field_name == "dependency_configurations":
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if field_name == "gradle_args":
        return tuple(value.split())
    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        GradleScopeError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise GradleScopeError(f"Invalid config file '{path}': {e}")

    # Allow both a flat file and a [gradle-scope] table
    section = data.get("gradle-scope", data)
    if not isinstance(section, dict):
        raise GradleScopeError(f"Invalid config file '{path}': [gradle-scope] must be a table")
    return dict(section)

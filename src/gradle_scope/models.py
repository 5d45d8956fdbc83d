"""Data models for gradle-scope runs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Module:
    """One Gradle subproject as reported by the injected task."""

    name: str
    path: str  # subproject directory as Gradle reports it
    dependents: list[str] = field(default_factory=list)  # names of modules depending on this one

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": self.path, "dependents": list(self.dependents)}


@dataclass
class ScopeResult:
    changed_files: list[str]  # git diff order, no dedup
    modules: list[Module]  # report row order

    def to_dict(self) -> dict[str, Any]:
        return {
            "changed_files": list(self.changed_files),
            "modules": [m.to_dict() for m in self.modules],
        }

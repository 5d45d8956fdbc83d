"""
gradle-scope - changed files and subproject dependency graph for Gradle builds

Lists the files changed between two git revisions and recovers the
project-to-project dependency graph of a multi-module Gradle build by
temporarily injecting a reporting task into the root build file.
"""

__version__ = "0.1.0"

from .config import ScopeConfig, load_config
from .models import Module, ScopeResult
from .orchestrator import ScopeRunner, recover

__all__ = [
    "ScopeConfig",
    "load_config",
    "ScopeRunner",  # Main entry point
    "ScopeResult",
    "Module",
    "recover",
]

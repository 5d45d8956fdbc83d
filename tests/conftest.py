"""Shared test fixtures for gradle-scope tests."""

import shutil
import stat
import subprocess
from pathlib import Path

import pytest

GROOVY_BUILD = """plugins {
    id 'base'
}

allprojects {
    repositories {
        mavenCentral()
    }
}
"""

KOTLIN_BUILD = """plugins {
    base
}
"""

# Fake wrapper: refuses to run unless the sidecar is in place and applied,
# then writes the canned report to the -P output path.
FAKE_GRADLEW = """#!/bin/sh
task="$1"
output=""
for arg in "$@"; do
  case "$arg" in
    -PincrementalOutput=*) output="${arg#-PincrementalOutput=}" ;;
  esac
done
echo "$@" > gradlew-args.txt
[ "$task" = "incremental" ] || { echo "Task '$task' not found" >&2; exit 2; }
grep -q "incremental.gradle" __BUILD_FILE__ || { echo "sidecar not applied" >&2; exit 3; }
[ -f incremental.gradle ] || { echo "sidecar missing" >&2; exit 4; }
[ -n "$output" ] || { echo "no output property" >&2; exit 5; }
cat > "$output" <<'CSV'
__ROWS__
CSV
"""

FAILING_GRADLEW = """#!/bin/sh
echo "FAILURE: Build failed with an exception." >&2
echo "* What went wrong: something broke" >&2
exit 1
"""

CORE_APP_ROWS = '"core","/work/core","app"\n"app","/work/app",""'


@pytest.fixture
def groovy_project(tmp_path):
    """Project directory with a Groovy root build file."""
    (tmp_path / "build.gradle").write_text(GROOVY_BUILD)
    (tmp_path / "settings.gradle").write_text("include 'core', 'app'\n")
    return tmp_path


@pytest.fixture
def kotlin_project(tmp_path):
    """Project directory with a Kotlin root build file only."""
    (tmp_path / "build.gradle.kts").write_text(KOTLIN_BUILD)
    (tmp_path / "settings.gradle.kts").write_text('include("core", "app")\n')
    return tmp_path


def write_launcher(project_dir: Path, script: str) -> Path:
    launcher = project_dir / "gradlew"
    launcher.write_text(script)
    launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return launcher


@pytest.fixture
def fake_gradlew():
    """Factory installing a fake ``gradlew`` that emits *rows* as the report."""

    def install(project_dir: Path, rows: str = CORE_APP_ROWS, build_file: str = "build.gradle"):
        script = FAKE_GRADLEW.replace("__BUILD_FILE__", build_file).replace("__ROWS__", rows)
        return write_launcher(project_dir, script)

    return install


@pytest.fixture
def failing_gradlew():
    """Factory installing a ``gradlew`` that always exits 1."""

    def install(project_dir: Path):
        return write_launcher(project_dir, FAILING_GRADLEW)

    return install


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Git repository with tags ``base`` and ``target`` two commits apart.

    Between the tags, ``app/src/Main.kt`` and ``core/build.gradle`` change.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")

    (repo / "build.gradle").write_text(GROOVY_BUILD)
    (repo / "core").mkdir()
    (repo / "core" / "build.gradle").write_text("plugins { id 'java-library' }\n")
    (repo / "app" / "src").mkdir(parents=True)
    (repo / "app" / "src" / "Main.kt").write_text("fun main() {}\n")
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", "initial")
    git(repo, "tag", "base")

    (repo / "app" / "src" / "Main.kt").write_text('fun main() { println("hi") }\n')
    (repo / "core" / "build.gradle").write_text("plugins { id 'java-library' }\n// touched\n")
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", "change app and core")
    git(repo, "tag", "target")

    return repo

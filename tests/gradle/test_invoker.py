"""Tests for running the Gradle wrapper."""

import sys

import pytest

from gradle_scope.exceptions import BuildInvocationError
from gradle_scope.gradle.invoker import build_command, launcher_name, run_task

skip_on_windows = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="fake gradlew is a POSIX shell script"
)


class TestLauncherName:
    """Platform-specific wrapper names."""

    def test_windows(self):
        assert launcher_name("win32") == "gradlew.bat"

    @pytest.mark.parametrize("platform", ["linux", "darwin", "freebsd13"])
    def test_posix(self, platform):
        assert launcher_name(platform) == "gradlew"


class TestBuildCommand:
    def test_task_and_output_property(self, tmp_path):
        cmd = build_command(tmp_path / "gradlew", "incremental", "incrementalOutput", "out.csv")
        assert cmd == [str(tmp_path / "gradlew"), "incremental", "-PincrementalOutput=out.csv"]

    def test_extra_args_appended(self, tmp_path):
        cmd = build_command(
            tmp_path / "gradlew", "incremental", "incrementalOutput", "out.csv", ["--offline"]
        )
        assert cmd[-1] == "--offline"


class TestRunTask:
    """Invoking the wrapper."""

    def test_missing_launcher_raises(self, tmp_path):
        with pytest.raises(BuildInvocationError) as exc_info:
            run_task(tmp_path, "incremental", "incrementalOutput", "incremental.csv", platform="linux")
        assert exc_info.value.returncode is None
        assert "not found" in exc_info.value.reason

    def test_looks_for_bat_on_windows(self, tmp_path, fake_gradlew):
        fake_gradlew(tmp_path)
        with pytest.raises(BuildInvocationError) as exc_info:
            run_task(tmp_path, "incremental", "incrementalOutput", "incremental.csv", platform="win32")
        assert exc_info.value.launcher.name == "gradlew.bat"

    @skip_on_windows
    def test_non_zero_exit_raises(self, tmp_path, failing_gradlew):
        failing_gradlew(tmp_path)
        with pytest.raises(BuildInvocationError) as exc_info:
            run_task(tmp_path, "incremental", "incrementalOutput", "incremental.csv")
        assert exc_info.value.returncode == 1
        assert "something broke" in exc_info.value.stderr

    @skip_on_windows
    def test_not_executable_raises(self, tmp_path):
        launcher = tmp_path / "gradlew"
        launcher.write_text("#!/bin/sh\nexit 0\n")
        launcher.chmod(0o644)
        with pytest.raises(BuildInvocationError) as exc_info:
            run_task(tmp_path, "incremental", "incrementalOutput", "incremental.csv")
        assert "Could not start" in exc_info.value.reason

    @skip_on_windows
    def test_passes_task_and_property(self, groovy_project, fake_gradlew):
        fake_gradlew(groovy_project)
        (groovy_project / "incremental.gradle").write_text("// task\n")
        with open(groovy_project / "build.gradle", "a") as f:
            f.write("apply from: 'incremental.gradle'\n")

        run_task(groovy_project, "incremental", "incrementalOutput", "incremental.csv")

        args = (groovy_project / "gradlew-args.txt").read_text().split()
        assert args == ["incremental", "-PincrementalOutput=incremental.csv"]
        assert (groovy_project / "incremental.csv").exists()

"""Tests for build file dialect detection."""

import pytest

from gradle_scope.exceptions import DialectNotFoundError
from gradle_scope.gradle.dialect import BuildFileDialect, detect_dialect, require_dialect


class TestBuildFileDialect:
    """Dialect-specific names and statements."""

    def test_filenames_are_distinct(self):
        assert BuildFileDialect.GROOVY.filename == "build.gradle"
        assert BuildFileDialect.KOTLIN.filename == "build.gradle.kts"

    def test_backup_filenames(self):
        assert BuildFileDialect.GROOVY.backup_filename == "build.gradle.bak"
        assert BuildFileDialect.KOTLIN.backup_filename == "build.gradle.kts.bak"

    def test_groovy_apply_statement(self):
        assert (
            BuildFileDialect.GROOVY.apply_statement("incremental.gradle")
            == "apply from: 'incremental.gradle'"
        )

    def test_kotlin_apply_statement(self):
        assert (
            BuildFileDialect.KOTLIN.apply_statement("incremental.gradle")
            == 'apply(from = "incremental.gradle")'
        )


class TestDetectDialect:
    """Probing the project directory."""

    def test_groovy(self, groovy_project):
        assert detect_dialect(groovy_project) is BuildFileDialect.GROOVY

    def test_kotlin_when_groovy_absent(self, kotlin_project):
        assert detect_dialect(kotlin_project) is BuildFileDialect.KOTLIN

    def test_groovy_wins_when_both_present(self, groovy_project):
        (groovy_project / "build.gradle.kts").write_text("plugins { base }\n")
        assert detect_dialect(groovy_project) is BuildFileDialect.GROOVY

    def test_none_when_no_build_file(self, tmp_path):
        assert detect_dialect(tmp_path) is None

    def test_directory_named_like_build_file_ignored(self, tmp_path):
        (tmp_path / "build.gradle").mkdir()
        assert detect_dialect(tmp_path) is None

    def test_require_raises_when_missing(self, tmp_path):
        with pytest.raises(DialectNotFoundError) as exc_info:
            require_dialect(tmp_path)
        assert exc_info.value.probed == ["build.gradle", "build.gradle.kts"]

    def test_require_returns_dialect(self, kotlin_project):
        assert require_dialect(kotlin_project) is BuildFileDialect.KOTLIN

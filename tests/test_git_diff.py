"""Tests for the revision diff reporter."""

import sys

import pytest

from gradle_scope.exceptions import DiffError
from gradle_scope.git_diff import changed_files, parse_name_only


class TestParseNameOnly:
    """Splitting git's --name-only output."""

    def test_trailing_newline_stripped(self):
        assert parse_name_only("a.txt\nb.txt\n") == ["a.txt", "b.txt"]

    def test_empty_output_is_empty_list(self):
        """An empty diff must not produce ['']."""
        assert parse_name_only("") == []

    def test_lone_newline_is_empty_list(self):
        assert parse_name_only("\n") == []

    def test_order_preserved_without_dedup(self):
        assert parse_name_only("z.txt\na.txt\nz.txt\n") == ["z.txt", "a.txt", "z.txt"]

    def test_crlf_line_endings(self):
        assert parse_name_only("a.txt\r\nb.txt\r\n") == ["a.txt", "b.txt"]


class TestChangedFiles:
    """Running git diff against a real repository."""

    def test_lists_files_between_revisions(self, git_repo):
        files = changed_files(git_repo, "base", "target")
        assert sorted(files) == ["app/src/Main.kt", "core/build.gradle"]

    def test_same_revision_is_empty(self, git_repo):
        assert changed_files(git_repo, "target", "target") == []

    def test_unknown_revision_raises(self, git_repo):
        with pytest.raises(DiffError) as exc_info:
            changed_files(git_repo, "base", "no-such-ref")
        assert exc_info.value.revision_range == "base..no-such-ref"
        assert exc_info.value.reason

    def test_not_a_repository_raises(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        # Keep git from discovering a repository above tmp_path
        (plain / ".git").write_text("gitdir: /nonexistent\n")
        with pytest.raises(DiffError):
            changed_files(plain, "HEAD~1", "HEAD")

    def test_missing_git_binary_raises(self, git_repo, monkeypatch):
        monkeypatch.setenv("PATH", "")
        with pytest.raises(DiffError) as exc_info:
            changed_files(git_repo, "base", "target")
        assert "could not be started" in exc_info.value.reason

    @pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX file modes")
    def test_unexecutable_git_raises(self, git_repo, tmp_path, monkeypatch):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        fake_git = bin_dir / "git"
        fake_git.write_text("#!/bin/sh\nexit 0\n")
        fake_git.chmod(0o644)
        monkeypatch.setenv("PATH", str(bin_dir))

        with pytest.raises(DiffError) as exc_info:
            changed_files(git_repo, "base", "target")
        assert "could not be started" in exc_info.value.reason

    def test_missing_repo_dir_raises(self, tmp_path):
        with pytest.raises(DiffError):
            changed_files(tmp_path / "gone", "base", "target")

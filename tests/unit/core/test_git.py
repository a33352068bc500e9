"""Unit tests for GitRepository."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from connectorctl.core.git import GitError, GitRepository
from connectorctl.utils.shell import CommandResult


class TestGitRepository:
    """Tests for GitRepository class."""

    @pytest.fixture
    def repo(self, tmp_path: Path) -> GitRepository:
        """Create a GitRepository rooted at a temporary directory."""
        return GitRepository(tmp_path)

    def test_runs_in_repository_root(self, repo: GitRepository) -> None:
        """Commands are executed with the repository root as cwd."""
        with patch("connectorctl.core.git.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            repo.staged()

        assert mock_run.call_args.kwargs["cwd"] == repo.root

    def test_resolve_remote_prefers_upstream(self, repo: GitRepository, fake_git) -> None:
        """resolve_remote returns upstream when it is configured."""
        fake_git.set_output("remote", "get-url", "upstream", stdout="git@example.com:up.git")

        assert repo.resolve_remote(["upstream", "origin"]) == "upstream"

    def test_resolve_remote_falls_back_to_origin(self, repo: GitRepository, fake_git) -> None:
        """resolve_remote falls back to origin without an upstream remote."""
        assert repo.resolve_remote(["upstream", "origin"]) == "origin"
        assert fake_git.called("remote", "get-url", "upstream")

    def test_resolve_remote_defaults_to_last_candidate(
        self, repo: GitRepository, fake_git
    ) -> None:
        """resolve_remote returns the last candidate when none is configured."""
        fake_git.set_output("remote", "get-url", "origin", returncode=2)

        assert repo.resolve_remote(["upstream", "origin"]) == "origin"

    def test_resolve_remote_requires_candidates(self, repo: GitRepository) -> None:
        """resolve_remote rejects an empty candidate list."""
        with pytest.raises(ValueError, match="No remote candidates"):
            repo.resolve_remote([])

    def test_fetch(self, repo: GitRepository, fake_git) -> None:
        """fetch quietly fetches one branch."""
        repo.fetch("origin", "master")

        assert fake_git.called("fetch", "--quiet", "origin", "master")

    def test_fetch_failure_raises(self, repo: GitRepository, fake_git) -> None:
        """fetch raises GitError with git's stderr."""
        fake_git.set_output(
            "fetch",
            "--quiet",
            "origin",
            "master",
            stderr="fatal: couldn't find remote ref master",
            returncode=128,
        )

        with pytest.raises(GitError, match="couldn't find remote ref") as exc_info:
            repo.fetch("origin", "master")

        assert exc_info.value.command == ["git", "fetch", "--quiet", "origin", "master"]
        assert exc_info.value.stderr == "fatal: couldn't find remote ref master"

    def test_failure_without_stderr_reports_exit_code(
        self, repo: GitRepository, fake_git
    ) -> None:
        """GitError mentions the exit code when git prints nothing."""
        fake_git.set_output("diff", "--name-only", returncode=1)

        with pytest.raises(GitError, match="exit code 1") as exc_info:
            repo.unstaged()

        assert exc_info.value.stderr == ""

    def test_diff_against_uses_merge_base_range(self, repo: GitRepository, fake_git) -> None:
        """diff_against compares HEAD with its merge base with ref."""
        fake_git.set_output(
            "diff",
            "--name-only",
            "origin/master...HEAD",
            stdout="airbyte-integrations/connectors/source-a/main.py\ndocs/index.md\n",
        )

        paths = repo.diff_against("origin/master")

        assert paths == ["airbyte-integrations/connectors/source-a/main.py", "docs/index.md"]

    def test_staged(self, repo: GitRepository, fake_git) -> None:
        """staged lists files in the index."""
        fake_git.set_output("diff", "--cached", "--name-only", stdout="a.txt\n")

        assert repo.staged() == ["a.txt"]

    def test_unstaged(self, repo: GitRepository, fake_git) -> None:
        """unstaged lists working tree modifications."""
        fake_git.set_output("diff", "--name-only", stdout="b.txt\n")

        assert repo.unstaged() == ["b.txt"]

    def test_untracked(self, repo: GitRepository, fake_git) -> None:
        """untracked lists new files respecting ignore rules."""
        fake_git.set_output("ls-files", "--others", "--exclude-standard", stdout="c.txt\n")

        assert repo.untracked() == ["c.txt"]

    def test_last_commit(self, repo: GitRepository, fake_git) -> None:
        """last_commit lists files touched by HEAD."""
        fake_git.set_output(
            "diff-tree", "--no-commit-id", "-r", "--name-only", "HEAD", stdout="d.txt\n"
        )

        assert repo.last_commit() == ["d.txt"]

    def test_missing_git_raises_git_error(self, repo: GitRepository) -> None:
        """A missing git executable surfaces as GitError."""
        with (
            patch("connectorctl.core.git.run_command", side_effect=FileNotFoundError("git")),
            pytest.raises(GitError, match="git executable not found"),
        ):
            repo.staged()

    def test_timeout_raises_git_error(self, repo: GitRepository) -> None:
        """A git timeout surfaces as GitError."""
        with (
            patch(
                "connectorctl.core.git.run_command",
                side_effect=subprocess.TimeoutExpired(cmd=["git"], timeout=120),
            ),
            pytest.raises(GitError, match="Timed out"),
        ):
            repo.fetch("origin", "master")

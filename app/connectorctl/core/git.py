"""Git access for change detection.

All repository queries go through the ``git`` executable; this module only
shapes arguments and splits output into path lists.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from connectorctl.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when a git command fails or git is unavailable."""

    def __init__(
        self, message: str, command: Sequence[str] | None = None, stderr: str = ""
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command else []
        self.stderr = stderr


class GitRepository:
    """A git working tree queried through the git CLI.

    Example:
        >>> repo = GitRepository(Path("."))
        >>> remote = repo.resolve_remote(["upstream", "origin"])
        >>> repo.diff_against(f"{remote}/master")
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _git(self, *args: str) -> CommandResult:
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.root)
        try:
            return run_command(cmd, cwd=self.root)
        except FileNotFoundError as e:
            raise GitError("git executable not found", cmd) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"Timed out: {' '.join(cmd)}", cmd) from e

    def _run(self, *args: str) -> CommandResult:
        """Run git and raise GitError on a non-zero exit."""
        result = self._git(*args)
        if not result.success:
            cmd = ["git", *args]
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise GitError(f"{' '.join(cmd)} failed: {detail}", cmd, result.stderr.strip())
        return result

    def has_remote(self, name: str) -> bool:
        """Check whether a remote is configured."""
        return self._git("remote", "get-url", name).success

    def resolve_remote(self, candidates: Sequence[str]) -> str:
        """Pick the first configured remote from candidates.

        Forks usually track the main repository as ``upstream``; plain clones
        only have ``origin``. When none of the candidates is configured the
        last one is returned and the following fetch reports the problem.

        Args:
            candidates: Remote names in order of preference.

        Returns:
            Remote name to compare against.
        """
        if not candidates:
            msg = "No remote candidates given"
            raise ValueError(msg)
        for name in candidates:
            if self.has_remote(name):
                logger.debug("Using remote %s", name)
                return name
        return candidates[-1]

    def fetch(self, remote: str, branch: str) -> None:
        """Fetch a single branch from a remote."""
        self._run("fetch", "--quiet", remote, branch)

    def diff_against(self, ref: str) -> list[str]:
        """Files changed on HEAD since it diverged from ref."""
        return self._run("diff", "--name-only", f"{ref}...HEAD").lines

    def staged(self) -> list[str]:
        """Files with staged changes."""
        return self._run("diff", "--cached", "--name-only").lines

    def unstaged(self) -> list[str]:
        """Files with unstaged changes in the working tree."""
        return self._run("diff", "--name-only").lines

    def untracked(self) -> list[str]:
        """Untracked files not covered by ignore rules."""
        return self._run("ls-files", "--others", "--exclude-standard").lines

    def last_commit(self) -> list[str]:
        """Files touched by the HEAD commit."""
        return self._run("diff-tree", "--no-commit-id", "-r", "--name-only", "HEAD").lines

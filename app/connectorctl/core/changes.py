"""Collect the files changed in a working tree.

Two comparison modes exist:

- PR branch (default): commits since the merge base with the remote default
  branch, plus staged, unstaged and untracked files.
- Previous commit: only the files touched by HEAD. Meant for the default
  branch itself, where each squashed merge is compared to its parent.
"""

import logging

from connectorctl.core.git import GitRepository
from connectorctl.core.settings import Settings
from connectorctl.models.changes import ChangeSet

logger = logging.getLogger(__name__)


def collect_changes(
    repo: GitRepository,
    settings: Settings,
    *,
    compare_prev: bool = False,
    fetch: bool | None = None,
) -> ChangeSet:
    """Gather changed paths for a comparison mode.

    Args:
        repo: Repository to query.
        settings: Branch and remote settings.
        compare_prev: Compare HEAD with its parent only.
        fetch: Override ``settings.fetch``. Ignored when compare_prev is set.

    Returns:
        ChangeSet with the paths from every source git reports.

    Raises:
        GitError: If any git call fails.
    """
    if compare_prev:
        committed = repo.last_commit()
        logger.debug("HEAD touches %d files", len(committed))
        return ChangeSet(committed=tuple(committed), base="HEAD^..HEAD")

    remote = repo.resolve_remote(settings.remotes)
    should_fetch = settings.fetch if fetch is None else fetch
    if should_fetch:
        repo.fetch(remote, settings.default_branch)

    base_ref = f"{remote}/{settings.default_branch}"
    changes = ChangeSet(
        committed=tuple(repo.diff_against(base_ref)),
        staged=tuple(repo.staged()),
        unstaged=tuple(repo.unstaged()),
        untracked=tuple(repo.untracked()),
        base=f"{base_ref}...HEAD",
    )
    logger.debug(
        "%d committed, %d staged, %d unstaged, %d untracked paths against %s",
        len(changes.committed),
        len(changes.staged),
        len(changes.unstaged),
        len(changes.untracked),
        changes.base,
    )
    return changes

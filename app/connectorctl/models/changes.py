"""Change set model.

A change set groups the file paths reported by git for one comparison,
keeping the origin of each path so callers can report on it.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Repository-relative paths changed in a working tree.

    Attributes:
        committed: Paths changed by commits on HEAD relative to the base.
        staged: Paths with staged but uncommitted changes.
        unstaged: Paths modified in the working tree.
        untracked: New files not yet added to the index.
        base: Description of what was compared (e.g. "upstream/master...HEAD").
    """

    committed: tuple[str, ...] = field(default=())
    staged: tuple[str, ...] = field(default=())
    unstaged: tuple[str, ...] = field(default=())
    untracked: tuple[str, ...] = field(default=())
    base: str = "HEAD"

    @property
    def all_paths(self) -> list[str]:
        """All paths in source order, blanks dropped, duplicates kept."""
        return [
            path
            for group in (self.committed, self.staged, self.unstaged, self.untracked)
            for path in group
            if path.strip()
        ]

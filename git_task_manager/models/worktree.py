"""Worktree data models."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class WorktreeInfo:
    """Snapshot of a worktree, built on demand from the live repository."""

    path: Path
    branch: Optional[str]  # None when HEAD is detached or unborn
    has_uncommitted_changes: bool

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "branch": self.branch,
            "has_uncommitted_changes": self.has_uncommitted_changes,
        }

    def __str__(self) -> str:
        state = "dirty" if self.has_uncommitted_changes else "clean"
        return f"{self.branch or '(detached)'} @ {self.path} [{state}]"


@dataclass
class WorktreeEntry:
    """One worktree registered against a main repository."""

    path: str
    head: str
    branch: Optional[str]
    is_main: bool  # Is this the main working tree?
    is_locked: bool = False
    is_prunable: bool = False  # Admin metadata exists but directory is gone

    def __str__(self) -> str:
        status = "prunable" if self.is_prunable else "active"
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch or '(detached)'} @ {self.path}{main_marker} [{status}]"

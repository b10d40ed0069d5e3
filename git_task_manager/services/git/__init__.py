"""Git-related services for git-task-manager."""

from .naming import compute_worktree_path, generate_branch_name, to_kebab_case, to_snake_case
from .worktrees import WorktreeService

__all__ = [
    "WorktreeService",
    "compute_worktree_path",
    "generate_branch_name",
    "to_kebab_case",
    "to_snake_case",
]

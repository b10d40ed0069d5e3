"""Worktree lifecycle service for git-task-manager."""

import os
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Union

import git

from git_task_manager.exceptions import (
    GitOperationError,
    GitRepoNotFoundError,
    InvalidWorktreeError,
    WorktreeCreationFailedError,
    WorktreeHasChangesError,
    WorktreePathNotFoundError,
    WorktreeRemovalFailedError,
)
from git_task_manager.logging_config import get_logger
from git_task_manager.models.worktree import WorktreeEntry, WorktreeInfo
from git_task_manager.services.git.naming import compute_worktree_path, generate_branch_name

logger = get_logger(__name__)

PathLike = Union[str, Path]

# Errors GitPython raises when a path cannot be opened as a repository
NOT_A_REPO_ERRORS = (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError)


def describe_git_error(e: Exception) -> str:
    """Render a GitPython error as one line, preferring git's own stderr."""
    if isinstance(e, git.exc.GitCommandError):
        # GitPython stores stderr as "\n  stderr: '<text>'"
        stderr = (e.stderr or "").strip()
        if stderr.startswith("stderr:"):
            stderr = stderr[len("stderr:"):].strip()[1:-1].strip()
        if stderr:
            return stderr
        return f"git exited with status {e.status}"
    return str(e)


class WorktreeService:
    """Service for managing the lifecycle of task worktrees.

    Every method opens the repository it needs and closes it before
    returning; no handle is kept between calls.
    """

    compute_worktree_path = staticmethod(compute_worktree_path)
    generate_branch_name = staticmethod(generate_branch_name)

    @staticmethod
    def _open_repo(path: PathLike, operation: str) -> git.Repo:
        """Open a repository, mapping any failure to GitOperationError."""
        try:
            return git.Repo(path)
        except NOT_A_REPO_ERRORS as e:
            raise GitOperationError(operation, message=f"not a git repository: {path}") from e

    def validate(self, path: PathLike) -> None:
        """Check that a path exists and is a git repository or worktree.

        Raises:
            WorktreePathNotFoundError: If the path does not exist
            InvalidWorktreeError: If the path is not a git repository
        """
        path = Path(path)
        if not path.exists():
            raise WorktreePathNotFoundError(path)

        try:
            repo = git.Repo(path)
        except NOT_A_REPO_ERRORS as e:
            logger.debug(f"{path} is not a repository: {e!r}")
            raise InvalidWorktreeError(path) from e
        repo.close()

    def has_uncommitted_changes(self, path: PathLike) -> bool:
        """Return True if the worktree has staged, unstaged or untracked changes."""
        repo = self._open_repo(path, "status")
        try:
            return repo.is_dirty(index=True, working_tree=True, untracked_files=True)
        except git.exc.GitCommandError as e:
            raise GitOperationError("status", message=describe_git_error(e)) from e
        finally:
            repo.close()

    def create_worktree(
        self,
        main_repo_path: PathLike,
        worktree_path: PathLike,
        branch_name: str,
        base_branch: Optional[str] = None,
    ) -> None:
        """Create a branch and check it out in a new linked worktree.

        The branch starts at ``base_branch`` when given, otherwise at the
        main repository's HEAD. If registering the worktree fails, the branch
        created before it is left in place.

        Args:
            main_repo_path: Path to the main repository checkout
            worktree_path: Directory to create the worktree in
            branch_name: Name of the new branch
            base_branch: Optional local branch to fork from

        Raises:
            GitRepoNotFoundError: If main_repo_path is not a git repository
            GitOperationError: If the base commit cannot be resolved
            WorktreeCreationFailedError: If the branch or worktree cannot be created
        """
        # git resolves relative paths against the main checkout, not our cwd
        worktree_path = Path(worktree_path).absolute()
        try:
            repo = git.Repo(main_repo_path)
        except NOT_A_REPO_ERRORS as e:
            raise GitRepoNotFoundError(main_repo_path) from e

        with repo:
            base_commit = self._resolve_base_commit(repo, base_branch)

            try:
                repo.git.branch(branch_name, base_commit.hexsha)
            except git.exc.GitCommandError as e:
                raise WorktreeCreationFailedError(
                    worktree_path, f"Failed to create branch: {describe_git_error(e)}"
                ) from e
            logger.debug(f"Created branch {branch_name} at {base_commit.hexsha[:10]}")

            # git names the worktree's admin directory after the last path component
            if not worktree_path.name:
                raise WorktreeCreationFailedError(
                    worktree_path, "Worktree path has no final component to name the worktree"
                )

            try:
                repo.git.worktree("add", str(worktree_path), branch_name)
            except git.exc.GitCommandError as e:
                raise WorktreeCreationFailedError(worktree_path, describe_git_error(e)) from e

        logger.info(f"Created worktree at {worktree_path} for branch {branch_name}")

    @staticmethod
    def _resolve_base_commit(repo: git.Repo, base_branch: Optional[str]) -> git.Commit:
        if base_branch:
            try:
                return git.Head(repo, f"refs/heads/{base_branch}").commit
            except ValueError as e:
                raise GitOperationError(
                    "resolve_base", base_branch, f"cannot resolve refs/heads/{base_branch}"
                ) from e

        try:
            return repo.head.commit
        except ValueError as e:
            raise GitOperationError("resolve_head", message="HEAD does not point to a commit") from e

    def remove_worktree(self, path: PathLike, force: bool = False) -> None:
        """Remove a linked worktree and prune its stale metadata.

        The directory is deleted before git's metadata is pruned. If the
        deletion succeeds and the prune does not, the metadata stays stale
        until the next prune.

        Args:
            path: Path to the worktree directory
            force: Remove even if the worktree has uncommitted changes

        Raises:
            WorktreeHasChangesError: If not forced and the worktree is dirty
            WorktreeRemovalFailedError: If any removal step fails
        """
        path = Path(path)
        if not force and self.has_uncommitted_changes(path):
            raise WorktreeHasChangesError(path)

        repo = self._open_repo(path, "open_worktree")
        try:
            main_repo_path = self._main_repo_from_git_dir(path, Path(repo.git_dir))
        finally:
            # Release the handle before deleting the directory it points into
            repo.close()

        try:
            shutil.rmtree(path)
        except OSError as e:
            raise WorktreeRemovalFailedError(path, f"Failed to remove directory: {e}") from e
        logger.debug(f"Deleted worktree directory {path}")

        try:
            main_repo = git.Repo(main_repo_path)
        except NOT_A_REPO_ERRORS as e:
            raise WorktreeRemovalFailedError(path, f"Failed to open main repository: {e}") from e

        with main_repo:
            try:
                entries = self._list_worktrees(main_repo)
            except git.exc.GitCommandError as e:
                raise WorktreeRemovalFailedError(
                    path, f"Failed to list worktrees: {describe_git_error(e)}"
                ) from e
            self._prune(main_repo, entries)

        logger.info(f"Removed worktree at {path}")

    @staticmethod
    def _main_repo_from_git_dir(path: Path, git_dir: Path) -> Path:
        """Return the main checkout for a worktree git dir ``<main>/.git/worktrees/<name>``."""
        if git_dir.parent.name != "worktrees" or len(git_dir.parents) < 3:
            raise WorktreeRemovalFailedError(path, "Could not determine main repository path")
        return git_dir.parents[2]

    def get_worktree_info(self, path: PathLike) -> WorktreeInfo:
        """Get branch and change status of a worktree."""
        path = Path(path)
        repo = self._open_repo(path, "info")
        with repo:
            branch = None
            if repo.head.is_valid():
                try:
                    branch = repo.active_branch.name
                except TypeError:
                    branch = None  # Detached HEAD

        return WorktreeInfo(
            path=path,
            branch=branch,
            has_uncommitted_changes=self.has_uncommitted_changes(path),
        )

    def list_worktrees(self, main_repo_path: PathLike) -> list[WorktreeEntry]:
        """List every worktree registered against a repository.

        Raises:
            GitRepoNotFoundError: If main_repo_path is not a git repository
            GitOperationError: If git cannot list the worktrees
        """
        try:
            repo = git.Repo(main_repo_path)
        except NOT_A_REPO_ERRORS as e:
            raise GitRepoNotFoundError(main_repo_path) from e

        with repo:
            try:
                return self._list_worktrees(repo)
            except git.exc.GitCommandError as e:
                raise GitOperationError("worktree_list", message=describe_git_error(e)) from e

    def prune_worktrees(self, main_repo_path: PathLike) -> list[WorktreeEntry]:
        """Prune metadata of worktrees whose directory is gone.

        Returns:
            The entries that were prunable before the prune ran
        """
        try:
            repo = git.Repo(main_repo_path)
        except NOT_A_REPO_ERRORS as e:
            raise GitRepoNotFoundError(main_repo_path) from e

        with repo:
            try:
                entries = self._list_worktrees(repo)
            except git.exc.GitCommandError as e:
                raise GitOperationError("worktree_list", message=describe_git_error(e)) from e
            return self._prune(repo, entries)

    @staticmethod
    def _prune(repo: git.Repo, entries: list[WorktreeEntry]) -> list[WorktreeEntry]:
        """Best-effort prune; failures are logged, never raised."""
        prunable = [wt for wt in entries if wt.is_prunable and not wt.is_main]
        if not prunable:
            return prunable

        for wt in prunable:
            logger.debug(f"Pruning stale worktree {wt}")
        try:
            repo.git.worktree("prune")
            logger.info(f"Pruned {len(prunable)} stale worktree(s)")
        except git.exc.GitCommandError as e:
            logger.warning(f"Could not prune worktrees: {describe_git_error(e)}")
        return prunable

    @staticmethod
    def _list_worktrees(repo: git.Repo) -> list[WorktreeEntry]:
        output = repo.git.worktree("list", "--porcelain")

        # Format:
        # worktree /path/to/worktree
        # HEAD commit_sha
        # branch refs/heads/branch-name | detached
        # locked [reason]
        # prunable [reason]
        # (blank line between worktrees)
        worktree_list: list[WorktreeEntry] = []
        current: Dict[str, Any] = {}

        def flush():
            path = current.get("path")
            if not path:
                return
            worktree_list.append(
                WorktreeEntry(
                    path=path,
                    head=current.get("HEAD", ""),
                    branch=current.get("branch"),
                    is_main=not worktree_list,  # First worktree in list is always the main one
                    is_locked=current.get("locked", False),
                    # Older git has no "prunable" line
                    is_prunable=current.get("prunable", False) or not os.path.exists(path),
                )
            )

        for line in output.split("\n"):
            line = line.strip()

            if not line:
                flush()
                current = {}
                continue

            key, _, value = line.partition(" ")
            if key == "worktree":
                current["path"] = value
            elif key == "HEAD":
                current["HEAD"] = value
            elif key == "branch":
                if value.startswith("refs/heads/"):
                    current["branch"] = value[len("refs/heads/"):]
            elif key in ("locked", "prunable"):
                current[key] = True

        # Handle last entry if no trailing blank line
        flush()

        logger.debug(f"Found {len(worktree_list)} worktrees")
        return worktree_list

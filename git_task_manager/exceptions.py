"""Custom exceptions for git-task-manager"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class TaskManagerError(Exception):
    """Base exception for all git-task-manager errors."""

    def user_message(self) -> str:
        """Longer, actionable message shown by the CLI."""
        return str(self)


class GitOperationError(TaskManagerError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class _PathError(TaskManagerError):
    """An error about a single filesystem path."""

    template = "{path}"

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(self.template.format(path=self.path))


class WorktreePathNotFoundError(_PathError):
    template = "Worktree path does not exist: {path}"


class InvalidWorktreeError(_PathError):
    template = "Path is not a valid git worktree: {path}"


class GitRepoNotFoundError(_PathError):
    template = "Git repository not found at {path}"


class InvalidMainRepoPathError(_PathError):
    template = "Invalid main repository path: {path}"

    def user_message(self) -> str:
        return (
            f"The main repository path '{self.path}' is invalid.\n"
            "Please provide a path to your main branch directory (e.g., ~/projects/myapp/main)."
        )


class WorktreeAlreadyExistsError(_PathError):
    template = "Worktree already exists at {path}"

    def user_message(self) -> str:
        return (
            f"A worktree already exists at '{self.path}'.\n"
            "Please remove it first or use a different name/id."
        )


class WorktreeHasChangesError(_PathError):
    template = "Worktree has uncommitted changes at {path}. Use --force to remove anyway."

    def user_message(self) -> str:
        return (
            f"The worktree at '{self.path}' has uncommitted changes.\n"
            "Either commit or stash your changes, or use --force to remove anyway."
        )


class WorktreeCreationFailedError(TaskManagerError):
    """Branch creation or worktree registration failed."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to create worktree at {self.path}: {reason}")


class WorktreeRemovalFailedError(TaskManagerError):
    """A step of the worktree removal sequence failed."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to remove worktree at {self.path}: {reason}")


class DuplicateTaskError(TaskManagerError):
    def __init__(self, project: str, title: str):
        self.project = project
        self.title = title
        super().__init__(f"Task '{title}' already exists in project '{project}'")

    def user_message(self) -> str:
        return (
            f"A task named '{self.title}' already exists in project '{self.project}'. "
            "Please use a different title."
        )


class ProjectNotFoundError(TaskManagerError):
    def __init__(self, project: str):
        self.project = project
        super().__init__(f"Project '{project}' not found")


class TaskNotFoundError(TaskManagerError):
    def __init__(self, project: str, title: str):
        self.project = project
        self.title = title
        super().__init__(f"Task '{title}' not found in project '{project}'")

    def user_message(self) -> str:
        return (
            f"Could not find task '{self.title}' in project '{self.project}'. "
            "Use 'tm list' to see available tasks."
        )


class InvalidInputError(TaskManagerError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid input for {field}: {reason}")

    def user_message(self) -> str:
        return f"Invalid {self.field}: {self.reason}"


class StorageError(TaskManagerError):
    """Exception raised when the task file cannot be read or written."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"Task storage error for {self.path}: {message}")

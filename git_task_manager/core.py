"""Core functionality for git-task-manager"""

from pathlib import Path
from typing import Optional, Union

from git_task_manager.config import Config
from git_task_manager.exceptions import (
    DuplicateTaskError,
    InvalidInputError,
    WorktreeAlreadyExistsError,
    WorktreeCreationFailedError,
)
from git_task_manager.logging_config import get_logger
from git_task_manager.models.task import Level, Task
from git_task_manager.models.worktree import WorktreeInfo
from git_task_manager.services.display_service import DisplayService
from git_task_manager.services.git import WorktreeService, to_snake_case
from git_task_manager.services.storage_service import TaskStorage

logger = get_logger(__name__)


class TaskManager:
    """Runs tm commands against the task file and the worktree service."""

    def __init__(
        self,
        config: Union[Config, dict],
        worktree_service: Optional[WorktreeService] = None,
        display_service: Optional[DisplayService] = None,
    ):
        """Initialize TaskManager.

        Args:
            config: Configuration dict or Config object
            worktree_service: Worktree service to use (a new one by default)
            display_service: Output service to use (prints to stdout by default)
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.tasks_file = self.config.tasks_file
        self.worktree_service = worktree_service or WorktreeService()
        self.display_service = display_service or DisplayService()

    def _load(self) -> TaskStorage:
        return TaskStorage.load(self.tasks_file)

    @staticmethod
    def validate_inputs(task_id: str, name: str) -> None:
        if not to_snake_case(name):
            raise InvalidInputError("name", "Name must contain alphanumeric characters")
        if not task_id.strip():
            raise InvalidInputError("id", "ID cannot be empty")

    def add_task(
        self,
        project: str,
        main_repo_path: Path,
        level: Union[Level, str],
        task_id: str,
        name: str,
        description: Optional[str] = None,
        base_branch: Optional[str] = None,
        remote_url: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> Task:
        """Create a worktree for a new task and record the task.

        The task title equals the branch name, ``{level}/{id}-{kebab-name}``.
        """
        level = Level(level).value
        main_repo_path = Path(main_repo_path).absolute()
        self.validate_inputs(task_id, name)

        self.worktree_service.validate(main_repo_path)
        worktree_path = self.worktree_service.compute_worktree_path(main_repo_path, level, task_id, name)
        if worktree_path.exists():
            raise WorktreeAlreadyExistsError(worktree_path)

        branch_name = self.worktree_service.generate_branch_name(level, task_id, name)
        title = branch_name

        storage = self._load()
        if storage.has_task(project, title):
            raise DuplicateTaskError(project, title)

        try:
            worktree_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorktreeCreationFailedError(worktree_path, f"Failed to create parent directory: {e}") from e
        self.worktree_service.create_worktree(main_repo_path, worktree_path, branch_name, base_branch)
        self.display_service.success(f"Created worktree at: {worktree_path}")
        self.display_service.success(f"Branch: {branch_name}")

        task = Task(
            title,
            worktree_path,
            description=description,
            reference=task_id,
            remote_url=remote_url,
            api_url=api_url,
        )
        storage.add_task(project, task)
        storage.save(self.tasks_file)
        logger.info(f"Added task {title} to project {project}")
        self.display_service.success(f"Added task '{title}' to project '{project}'")
        return task

    def list_tasks(self, project: Optional[str] = None, output_format: Optional[str] = None) -> None:
        tasks = self._load().list_tasks(project)
        self.display_service.display_tasks(tasks, output_format or self.config.output_format)

    def remove_task(self, project: str, title: str, remove_worktree: bool = False, force: bool = False) -> Task:
        """Remove a task, and optionally its worktree.

        The worktree goes first, so a removal blocked by uncommitted changes
        keeps the task in the store.
        """
        storage = self._load()
        task = storage.get_task(project, title)

        if remove_worktree:
            self.worktree_service.remove_worktree(task.worktree_path, force=force)

        storage.remove_task(project, title)
        storage.save(self.tasks_file)
        self.display_service.success(f"Removed task '{title}' from project '{project}'")
        if remove_worktree:
            self.display_service.success(f"Removed worktree at: {task.worktree_path}")
        return task

    def switch_task(self, project: str, title: str) -> Path:
        """Print the worktree path of a task for shell integration."""
        task = self._load().get_task(project, title)
        self.worktree_service.validate(task.worktree_path)
        self.display_service.display_path(task.worktree_path)
        return task.worktree_path

    def show_info(self, project: str, title: str, output_format: Optional[str] = None) -> WorktreeInfo:
        task = self._load().get_task(project, title)
        self.worktree_service.validate(task.worktree_path)
        info = self.worktree_service.get_worktree_info(task.worktree_path)
        self.display_service.display_worktree_info(info, output_format or self.config.output_format)
        return info

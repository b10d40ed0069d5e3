"""TOML-backed task storage"""
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tomli_w

from git_task_manager.exceptions import (
    DuplicateTaskError,
    ProjectNotFoundError,
    StorageError,
    TaskNotFoundError,
)
from git_task_manager.logging_config import get_logger
from git_task_manager.models.task import Task

logger = get_logger(__name__)


class TaskStorage:
    """Tasks grouped by project name, persisted as ``[[projects.<name>]]`` tables."""

    def __init__(self, projects: Optional[Dict[str, List[Task]]] = None):
        self.projects: Dict[str, List[Task]] = projects if projects is not None else {}

    @classmethod
    def load(cls, path: Path) -> "TaskStorage":
        """Load storage from a TOML file; a missing file is an empty store."""
        path = Path(path)
        if not path.exists():
            logger.debug(f"No task file at {path}, starting empty")
            return cls()

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise StorageError(path, f"invalid TOML: {e}") from e
        except OSError as e:
            raise StorageError(path, f"cannot read file: {e}") from e

        projects = {}
        try:
            for project, tasks in data.get("projects", {}).items():
                projects[project] = [Task.from_dict(task) for task in tasks]
        except (KeyError, TypeError, AttributeError) as e:
            raise StorageError(path, f"malformed task entry: {e!r}") from e

        logger.debug(f"Loaded {sum(len(t) for t in projects.values())} tasks from {path}")
        return cls(projects)

    def save(self, path: Path) -> None:
        """Save storage to a TOML file, creating its directory if needed."""
        path = Path(path)
        data = {
            "projects": {
                project: [task.to_dict() for task in tasks]
                for project, tasks in self.projects.items()
            }
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                tomli_w.dump(data, f)
        except OSError as e:
            raise StorageError(path, f"cannot write file: {e}") from e
        logger.debug(f"Saved tasks to {path}")

    def add_task(self, project: str, task: Task) -> None:
        """Add a task to a project; titles are unique within a project."""
        if self.has_task(project, task.title):
            raise DuplicateTaskError(project, task.title)
        self.projects.setdefault(project, []).append(task)

    def remove_task(self, project: str, title: str) -> Task:
        """Remove and return a task. A project left without tasks is dropped."""
        tasks = self.projects.get(project)
        if tasks is None:
            raise ProjectNotFoundError(project)

        for index, task in enumerate(tasks):
            if task.title == title:
                break
        else:
            raise TaskNotFoundError(project, title)

        removed = tasks.pop(index)
        if not tasks:
            del self.projects[project]
        return removed

    def get_task(self, project: str, title: str) -> Task:
        for task in self.projects.get(project, []):
            if task.title == title:
                return task
        raise TaskNotFoundError(project, title)

    def has_task(self, project: str, title: str) -> bool:
        return any(task.title == title for task in self.projects.get(project, []))

    def list_tasks(self, project: Optional[str] = None) -> List[Tuple[str, Task]]:
        """List (project, task) pairs sorted by project, optionally for one project."""
        return [
            (name, task)
            for name in sorted(self.projects)
            if project is None or name == project
            for task in self.projects[name]
        ]

"""Display and formatting service for task information"""
import json
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_task_manager.constants import (
    DETACHED_LABEL,
    EMPTY_CELL,
    SYMBOL_CLEAN,
    SYMBOL_DIRTY,
    TASK_COLUMNS,
)
from git_task_manager.logging_config import get_logger
from git_task_manager.models.task import Task
from git_task_manager.models.worktree import WorktreeInfo

logger = get_logger(__name__)


def task_to_json(project: str, task: Task) -> dict:
    """JSON record for a task; every field is present, unset ones are null."""
    return {
        "project": project,
        "title": task.title,
        "worktree_path": str(task.worktree_path),
        "description": task.description,
        "reference": task.reference,
        "remote_url": task.remote_url,
        "api_url": task.api_url,
    }


class DisplayService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_tasks(self, tasks: List[Tuple[str, Task]], output_format: str = "table") -> None:
        """Print tasks as a table, one ``project/title`` per line, or JSON."""
        if not tasks:
            self.console.print("No tasks found.")
            return

        logger.debug(f"Displaying {len(tasks)} tasks as {output_format}")
        if output_format == "json":
            self.print_json([task_to_json(project, task) for project, task in tasks])
        elif output_format == "simple":
            for project, task in tasks:
                self.console.out(f"{project}/{task.title}", highlight=False)
        else:
            self.console.print(self.build_task_table(tasks))

    @staticmethod
    def build_task_table(tasks: List[Tuple[str, Task]]) -> Table:
        table = Table(box=None, pad_edge=False)
        for col in TASK_COLUMNS:
            table.add_column(col.label, no_wrap=col.key != "worktree_path")

        for project, task in tasks:
            table.add_row(
                escape(project),
                escape(task.title),
                escape(task.reference or EMPTY_CELL),
                escape(str(task.worktree_path)),
            )
        return table

    def display_worktree_info(self, info: WorktreeInfo, output_format: str = "table") -> None:
        if output_format == "json":
            self.print_json(info.to_dict())
            return

        changes = f"[yellow]{SYMBOL_DIRTY} uncommitted changes[/yellow]" if info.has_uncommitted_changes \
            else f"[green]{SYMBOL_CLEAN} clean[/green]"
        self.console.print(f"Path:    {info.path}", markup=False, highlight=False)
        self.console.print(f"Branch:  {info.branch or DETACHED_LABEL}", markup=False, highlight=False)
        self.console.print(f"Changes: {changes}")

    def display_path(self, path) -> None:
        """Print a bare path for shell integration (no wrapping or markup)."""
        self.console.out(str(path), highlight=False)

    def print_json(self, data) -> None:
        self.console.out(json.dumps(data, indent=2), highlight=False)

    def success(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

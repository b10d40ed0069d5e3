"""Shared constants for git-task-manager."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str


# Columns of `tm list --format table`
TASK_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("project", "PROJECT"),
    ColumnDefinition("title", "TITLE"),
    ColumnDefinition("reference", "REFERENCE"),
    ColumnDefinition("worktree_path", "WORKTREE PATH"),
]

OUTPUT_FORMATS = ("table", "simple", "json")

# Placeholder for empty table cells
EMPTY_CELL = "-"

SYMBOL_DIRTY = "✗"
SYMBOL_CLEAN = "✓"
DETACHED_LABEL = "(detached)"

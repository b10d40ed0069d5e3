"""Task model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


class Level(Enum):
    """Kind of work a task represents, used as branch prefix and directory."""
    FEATURE = "feature"
    FIX = "fix"
    CHORE = "chore"
    DOCS = "docs"
    REFACTOR = "refactor"
    TEST = "test"
    PERF = "perf"
    STYLE = "style"
    CI = "ci"


OPTIONAL_FIELDS = ("description", "reference", "remote_url", "api_url")


@dataclass
class Task:
    """A unit of work tied to a git worktree.

    The title is the unique key of a task within its project. ``remote_url``
    and ``api_url`` are stored but not used by any command yet.
    """
    title: str
    worktree_path: Path
    description: Optional[str] = field(default=None, kw_only=True)
    reference: Optional[str] = field(default=None, kw_only=True)  # e.g. JIRA-123
    remote_url: Optional[str] = field(default=None, kw_only=True)
    api_url: Optional[str] = field(default=None, kw_only=True)

    def __post_init__(self):
        self.worktree_path = Path(self.worktree_path)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; unset optional fields are omitted."""
        data: Dict[str, Any] = {"title": self.title}
        if self.description is not None:
            data["description"] = self.description
        data["worktree_path"] = str(self.worktree_path)
        for name in OPTIONAL_FIELDS[1:]:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create a Task from its serialized form, ignoring unknown keys."""
        optional = {k: data[k] for k in OPTIONAL_FIELDS if data.get(k) is not None}
        return cls(data["title"], Path(data["worktree_path"]), **optional)

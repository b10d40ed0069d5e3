"""
git-task-manager - Git worktree-based task management
"""

from .__version__ import __version__
from .core import TaskManager
from .cli.main import main

__all__ = ["TaskManager", "main", "__version__"]

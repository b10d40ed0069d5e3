"""Version information for git-task-manager."""

__version__ = "0.1.0"

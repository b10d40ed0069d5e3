"""Services for git-task-manager."""

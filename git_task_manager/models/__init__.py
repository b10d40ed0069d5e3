"""Data models for git-task-manager."""

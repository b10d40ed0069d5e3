"""Tests for TaskStorage and the Task model"""
from pathlib import Path

import pytest

from git_task_manager.exceptions import (
    DuplicateTaskError,
    ProjectNotFoundError,
    StorageError,
    TaskNotFoundError,
)
from git_task_manager.models.task import Level, Task
from git_task_manager.services.storage_service import TaskStorage


@pytest.fixture
def storage():
    storage = TaskStorage()
    storage.add_task("alpha", Task("feature/A-1-one", Path("/work/alpha/feature/A-1-one"), reference="A-1"))
    storage.add_task("alpha", Task("fix/A-2-two", Path("/work/alpha/fix/A-2-two")))
    storage.add_task("beta", Task("chore/B-1-three", Path("/work/beta/chore/B-1-three")))
    return storage


class TestTask:
    """Test the Task model."""

    def test_optional_fields_default_to_none(self):
        task = Task("t", "/tmp/t")
        assert task.worktree_path == Path("/tmp/t")
        assert task.description is None
        assert task.reference is None
        assert task.remote_url is None
        assert task.api_url is None

    def test_optional_fields_are_keyword_only(self):
        with pytest.raises(TypeError):
            Task("t", Path("/tmp/t"), "description")

    def test_to_dict_omits_unset_fields(self):
        task = Task("t", Path("/tmp/t"), reference="R-1")
        assert task.to_dict() == {"title": "t", "worktree_path": "/tmp/t", "reference": "R-1"}

    def test_from_dict_ignores_unknown_keys(self):
        task = Task.from_dict({"title": "t", "worktree_path": "/tmp/t", "api_url": "https://x", "extra": 1})
        assert task == Task("t", Path("/tmp/t"), api_url="https://x")

    def test_levels(self):
        assert [level.value for level in Level] == [
            "feature", "fix", "chore", "docs", "refactor", "test", "perf", "style", "ci",
        ]


class TestTaskStorageCrud:
    """Test in-memory task operations."""

    def test_duplicate_title_rejected(self, storage):
        with pytest.raises(DuplicateTaskError) as exc_info:
            storage.add_task("alpha", Task("fix/A-2-two", Path("/elsewhere")))
        assert exc_info.value.project == "alpha"
        assert exc_info.value.title == "fix/A-2-two"

    def test_same_title_in_other_project(self, storage):
        storage.add_task("beta", Task("fix/A-2-two", Path("/elsewhere")))
        assert storage.has_task("beta", "fix/A-2-two")

    def test_get_task(self, storage):
        assert storage.get_task("alpha", "feature/A-1-one").reference == "A-1"

    def test_get_missing_task(self, storage):
        with pytest.raises(TaskNotFoundError):
            storage.get_task("alpha", "nope")
        with pytest.raises(TaskNotFoundError):
            storage.get_task("gamma", "nope")

    def test_remove_task(self, storage):
        removed = storage.remove_task("alpha", "fix/A-2-two")
        assert removed.title == "fix/A-2-two"
        assert not storage.has_task("alpha", "fix/A-2-two")
        assert storage.has_task("alpha", "feature/A-1-one")

    def test_remove_last_task_drops_project(self, storage):
        storage.remove_task("beta", "chore/B-1-three")
        assert "beta" not in storage.projects

    def test_remove_from_unknown_project(self, storage):
        with pytest.raises(ProjectNotFoundError):
            storage.remove_task("gamma", "x")

    def test_remove_unknown_title(self, storage):
        with pytest.raises(TaskNotFoundError):
            storage.remove_task("alpha", "x")

    def test_list_all_sorted_by_project(self, storage):
        listed = [(project, task.title) for project, task in storage.list_tasks()]
        assert listed == [
            ("alpha", "feature/A-1-one"),
            ("alpha", "fix/A-2-two"),
            ("beta", "chore/B-1-three"),
        ]

    def test_list_filtered(self, storage):
        assert [task.title for _, task in storage.list_tasks("beta")] == ["chore/B-1-three"]
        assert storage.list_tasks("gamma") == []


class TestTaskStorageFile:
    """Test loading and saving the TOML task file."""

    def test_missing_file_is_empty(self, temp_dir):
        assert TaskStorage.load(temp_dir / "absent.toml").projects == {}

    def test_save_creates_directories(self, storage, temp_dir):
        path = temp_dir / "nested" / "dir" / "tasks.toml"
        storage.save(path)

        loaded = TaskStorage.load(path)
        assert loaded.projects == storage.projects

    def test_file_layout(self, storage, temp_dir):
        path = temp_dir / "tasks.toml"
        storage.save(path)

        content = path.read_text()
        assert "[[projects.alpha]]" in content
        assert 'reference = "A-1"' in content
        assert "description" not in content

    def test_reads_hand_written_file(self, temp_dir):
        path = temp_dir / "tasks.toml"
        path.write_text(
            '[[projects.web]]\n'
            'title = "feature/W-1-login"\n'
            'description = "Login form"\n'
            'worktree_path = "/src/web/feature/W-1-login"\n'
        )

        task = TaskStorage.load(path).get_task("web", "feature/W-1-login")
        assert task.description == "Login form"
        assert task.worktree_path == Path("/src/web/feature/W-1-login")

    def test_invalid_toml(self, temp_dir):
        path = temp_dir / "tasks.toml"
        path.write_text("projects = [unclosed\n")
        with pytest.raises(StorageError) as exc_info:
            TaskStorage.load(path)
        assert "invalid TOML" in exc_info.value.message

    def test_entry_missing_required_field(self, temp_dir):
        path = temp_dir / "tasks.toml"
        path.write_text('[[projects.web]]\ntitle = "no path"\n')
        with pytest.raises(StorageError):
            TaskStorage.load(path)

"""Pytest fixtures for git-task-manager tests"""
import tempfile
from pathlib import Path
import pytest
import git

from git_task_manager.services.git import WorktreeService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def tasks_file(temp_dir, monkeypatch):
    """Point tm at a task file inside the temp dir."""
    path = temp_dir / "config" / "tm" / "tasks.toml"
    monkeypatch.setenv("TM_TASKS_FILE", str(path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    return path


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository laid out as <project>/main."""
    repo_path = temp_dir / "myapp" / "main"
    repo_path.mkdir(parents=True)

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_develop(git_repo):
    """Repository with a 'develop' branch one commit ahead of main."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout('-b', 'develop')
    (repo_path / "develop.txt").write_text("Develop content\n")
    repo.index.add(["develop.txt"])
    repo.index.commit("Develop work")
    repo.git.checkout('main')

    yield repo


@pytest.fixture
def service():
    return WorktreeService()


@pytest.fixture
def worktree(git_repo, service):
    """A linked worktree at <project>/feature/JIRA-1-x on branch feature/JIRA-1-x."""
    main_path = Path(git_repo.working_dir)
    path = main_path.parent / "feature" / "JIRA-1-x"
    path.parent.mkdir(parents=True)
    service.create_worktree(main_path, path, "feature/JIRA-1-x")
    return path

"""Configuration handling for git-task-manager"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from git_task_manager.constants import OUTPUT_FORMATS

TASKS_FILE_ENV = "TM_TASKS_FILE"


def get_config_dir() -> Path:
    """Get the tm config directory following the XDG Base Directory layout."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "tm"
    return Path.home() / ".config" / "tm"


def get_tasks_file_path() -> Path:
    """Get the path to the tasks.toml file."""
    override = os.environ.get(TASKS_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "tasks.toml"


@dataclass
class Config:
    """Configuration for git-task-manager with validation."""

    tasks_file: Path = field(default_factory=get_tasks_file_path)
    output_format: str = "table"
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_tasks_file()
        self._validate_output_format()

    def _validate_tasks_file(self):
        """Validate tasks_file is set and normalize it to a Path."""
        if not str(self.tasks_file).strip():
            raise ValueError("tasks_file cannot be empty")
        self.tasks_file = Path(self.tasks_file).expanduser()

    def _validate_output_format(self):
        """Validate output_format is one of allowed values."""
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {list(OUTPUT_FORMATS)}, got '{self.output_format}'"
            )

    def to_dict(self) -> dict:
        return {
            "tasks_file": str(self.tasks_file),
            "output_format": self.output_format,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {"tasks_file", "output_format", "verbose", "debug"}

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

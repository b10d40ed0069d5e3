"""Naming helpers for task branches and worktree directories."""

import re
from pathlib import Path
from typing import List, Union

from git_task_manager.exceptions import InvalidMainRepoPathError

# Anything that is not a letter or digit separates words
_SEPARATOR = re.compile(r"[\W_]+")
# fooBar -> foo Bar, v2Api -> v2 Api
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
# HTTPServer -> HTTP Server
_ACRONYM_BOUNDARY = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(value: str) -> List[str]:
    """Split free-form text into lowercase words."""
    words = []
    for chunk in _SEPARATOR.split(value):
        if not chunk:
            continue
        chunk = _ACRONYM_BOUNDARY.sub(" ", _CAMEL_BOUNDARY.sub(" ", chunk))
        for word in chunk.split():
            # Lowercasing can add separators, e.g. "İ" -> "i" + U+0307
            words.extend(part for part in _SEPARATOR.split(word.lower()) if part)
    return words


def to_snake_case(value: str) -> str:
    """Convert text to snake_case, e.g. ``"API-Gateway"`` -> ``"api_gateway"``."""
    return "_".join(split_words(value))


def to_kebab_case(value: str) -> str:
    """Convert text to kebab-case, e.g. ``"API_Gateway"`` -> ``"api-gateway"``."""
    return "-".join(split_words(value))


def generate_branch_name(level: str, task_id: str, name: str) -> str:
    """Return ``{level}/{id}-{kebab-name}``. Only the name is re-cased."""
    return f"{level}/{task_id}-{to_kebab_case(name)}"


def compute_worktree_path(
    main_repo_path: Union[str, Path], level: str, task_id: str, name: str
) -> Path:
    """Return the worktree directory for a task, next to the main checkout.

    With ``main_repo_path`` = ``~/projects/app/main`` the result is
    ``~/projects/app/{level}/{id}-{snake_name}``.

    A relative ``main_repo_path`` is taken relative to the working directory.

    Raises:
        InvalidMainRepoPathError: If the main repo path has no existing parent
    """
    main_repo_path = Path(main_repo_path).absolute()
    repo_root = main_repo_path.parent
    if repo_root == main_repo_path or not repo_root.exists():
        raise InvalidMainRepoPathError(main_repo_path)

    return repo_root / level / f"{task_id}-{to_snake_case(name)}"

"""Command-line argument parsing for git-task-manager."""

import argparse
from pathlib import Path

from git_task_manager.__version__ import __version__
from git_task_manager.constants import OUTPUT_FORMATS
from git_task_manager.models.task import Level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tm",
        description="Task Manager - Git worktree-based task management",
        epilog="Each task gets its own branch and worktree next to the main checkout, "
        "e.g. ~/projects/app/main -> ~/projects/app/feature/JIRA-1-login_form",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"tm {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    add = subparsers.add_parser("add", help="Add a new task and create its worktree")
    add.add_argument("project", help="Project name")
    add.add_argument(
        "main_repo_path", type=Path, help="Path to main repository (e.g., ~/projects/myapp/main)"
    )
    add.add_argument(
        "-l",
        "--level",
        required=True,
        choices=[level.value for level in Level],
        help="Task level (feature, fix, chore, etc.)",
    )
    add.add_argument("-i", "--id", dest="task_id", required=True, help="Task ID/reference (e.g., JIRA-123)")
    add.add_argument("-n", "--name", required=True, help="Task name (will be converted to snake_case)")
    add.add_argument("-d", "--description", help="Task description")
    add.add_argument(
        "-b", "--base", dest="base_branch", help="Local branch to fork from (default: current HEAD)"
    )
    add.add_argument("--remote-url", help="Remote URL for future integration")
    add.add_argument("--api-url", help="API URL for future integration")

    list_ = subparsers.add_parser("list", help="List tasks")
    list_.add_argument("-p", "--project", help="Filter by project name")
    list_.add_argument(
        "-f", "--format", dest="output_format", choices=OUTPUT_FORMATS, default="table",
        help="Output format (default: table)",
    )

    remove = subparsers.add_parser("remove", help="Remove a task")
    remove.add_argument("project", help="Project name")
    remove.add_argument("title", help="Task title")
    remove.add_argument(
        "-w", "--remove-worktree", action="store_true", help="Also remove the git worktree"
    )
    remove.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Force removal even if worktree has uncommitted changes (requires --remove-worktree)",
    )

    switch = subparsers.add_parser(
        "switch", help="Switch to a task (outputs worktree path for shell integration)"
    )
    switch.add_argument("project", help="Project name")
    switch.add_argument("title", help="Task title")

    info = subparsers.add_parser("info", help="Show branch and change status of a task's worktree")
    info.add_argument("project", help="Project name")
    info.add_argument("title", help="Task title")
    info.add_argument(
        "-f", "--format", dest="output_format", choices=("table", "json"), default="table",
        help="Output format (default: table)",
    )

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "remove" and args.force and not args.remove_worktree:
        parser.error("--force requires --remove-worktree")
    if args.command == "add":
        args.main_repo_path = args.main_repo_path.expanduser()
    return args

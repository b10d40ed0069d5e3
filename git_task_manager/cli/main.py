"""Command-line entry point for git-task-manager"""

import sys

from rich.console import Console
from rich.markup import escape

from git_task_manager.cli.args import parse_args
from git_task_manager.config import Config
from git_task_manager.core import TaskManager
from git_task_manager.exceptions import TaskManagerError
from git_task_manager.logging_config import get_logger, setup_logging

err_console = Console(stderr=True)
logger = get_logger(__name__)


def run(args, manager: TaskManager) -> None:
    """Dispatch parsed arguments to the TaskManager."""
    if args.command == "add":
        manager.add_task(
            args.project,
            args.main_repo_path,
            args.level,
            args.task_id,
            args.name,
            description=args.description,
            base_branch=args.base_branch,
            remote_url=args.remote_url,
            api_url=args.api_url,
        )
    elif args.command == "list":
        manager.list_tasks(args.project, args.output_format)
    elif args.command == "remove":
        manager.remove_task(args.project, args.title, args.remove_worktree, args.force)
    elif args.command == "switch":
        manager.switch_task(args.project, args.title)
    elif args.command == "info":
        manager.show_info(args.project, args.title, args.output_format)


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config(verbose=parsed_args.verbose, debug=parsed_args.debug)
        if parsed_args.debug:
            for key, value in config.to_dict().items():
                logger.debug(f"config {key}: {value}")

        run(parsed_args, TaskManager(config))
        return 0
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except TaskManagerError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.user_message())}", highlight=False, soft_wrap=True)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())

import sys

from git_task_manager.cli.main import main

sys.exit(main())

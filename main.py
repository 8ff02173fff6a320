"""
Description:
    linear-cli 入口点 (从源码目录直接运行)

    python main.py list-teams
    python main.py get-issue BLU-42
"""

import sys

from linear_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())

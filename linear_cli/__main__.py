"""Entry point: python -m linear_cli"""

import sys

from linear_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())

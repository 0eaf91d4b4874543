"""Entry point for `python -m htmlcleaner`."""

import sys

from .interfaces.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())

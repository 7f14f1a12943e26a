"""Allows running the application as a module (python -m quotescroll)."""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())

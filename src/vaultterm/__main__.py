"""Entry point for running vaultterm as a module."""

import sys

from vaultterm.cli import main

if __name__ == "__main__":
    sys.exit(main())

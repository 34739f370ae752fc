"""
Entry point for running physcalc as a module.

Usage:
    python -m physcalc eval "2m * 3s"
    python -m physcalc run equations.txt
    python -m physcalc serve --port 8000
"""

import sys

from physcalc.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())

"""
Entry point for running deckload as a module.

Usage:
    python -m deckload report --mission 1
    python -m deckload make-example
    python -m deckload serve --port 8000
"""

import sys

from deckload.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())

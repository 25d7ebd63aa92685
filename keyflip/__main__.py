"""
Main entry point for running keyflip as a module.

Usage:
    python -m keyflip <command> [options]
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())

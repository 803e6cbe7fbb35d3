"""
Main entry point for the MFlow CLI when run as a module.

This allows the CLI to be executed using:
    python -m mflow.cli
"""

from . import main

if __name__ == '__main__':
    main()

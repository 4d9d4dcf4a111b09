"""Entry point for running temploc as a module.

Usage:
    python -m temploc [command] [options]

Example:
    python -m temploc --path templates resolve hello.j2
    python -m temploc roots
"""

from temploc.cli import app

if __name__ == "__main__":
    app()

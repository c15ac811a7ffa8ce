"""
Memoria CLI entrypoint.

Executed via:
  python -m memoria

Assumes dependencies are installed in an isolated environment.
"""

from memoria.cli.app import app

if __name__ == "__main__":
    app()

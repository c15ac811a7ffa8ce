"""
`memoria init` command.

Creates `.memoria/` with a default config.yml and an empty drafts folder.
An existing config is left untouched.
"""

from pathlib import Path

from memoria.store.workdir import init_work


def register(app):
    import typer

    @app.command()
    def init(
        path: Path = typer.Argument(Path.cwd(), help="Directory for the new work"),
    ):
        """Initialize a Memoria work directory."""
        memoria_dir = init_work(path)
        print(f"Initialized Memoria work in {memoria_dir}")

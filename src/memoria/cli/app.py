"""Main CLI application wiring for Memoria.

Subcommands:
  memoria init
  memoria draft add "Title" --text "..."
  memoria drafts list
  memoria draft select 1 click:3 drag:0-5 undo

Both singular and plural forms work identically.
"""

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(add_completion=False, help="Memoria: select words, hide them, recall them")


@app.callback()
def main():
    """Memoria CLI."""
    pass


# =============================================================================
# Subcommand groups
# =============================================================================

# Drafts
draft_app = typer.Typer(help="Manage saved selection drafts")
app.add_typer(draft_app, name="draft")
app.add_typer(draft_app, name="drafts")

# Voices
voice_app = typer.Typer(help="Pick a read-aloud voice")
app.add_typer(voice_app, name="voice")
app.add_typer(voice_app, name="voices")


# =============================================================================
# Register commands to subgroups
# =============================================================================

from memoria.cli import draft as draft_cmd
from memoria.cli import voice as voice_cmd

draft_cmd.register(draft_app)
voice_cmd.register(voice_app)


# =============================================================================
# Top-level commands
# =============================================================================

from memoria.cli import init as init_cmd
from memoria.cli import practice as practice_cmd

init_cmd.register(app)
practice_cmd.register(app)


@app.command()
def tui(
    draft: Optional[str] = typer.Argument(None, help="Draft to open (index, id or title)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Start from a text file"),
):
    """Launch the Memoria TUI."""
    from memoria.tui.app import MemoriaApp

    text = file.read_text() if file is not None else None
    title = file.stem if file is not None else ""
    MemoriaApp(text=text, title=title, draft=draft).run()

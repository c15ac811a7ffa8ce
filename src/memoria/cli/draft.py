"""Draft commands: memoria draft add|list|show|select|delete

`draft select` replays a gesture script against a draft and saves the
result. Steps run in order within one editing session:

  click:N     pointer down and up on word N
  drag:A-B    pointer down on A, move word by word to B, release
  all         select every remaining word
  undo        undo the previous step (no-op when nothing to undo)
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer

from memoria.core.editor import SelectionEditor
from memoria.core.practice import practice_title
from memoria.core.tokens import Token, Word
from memoria.store import drafts
from memoria.store.workdir import load_work_cfg


def _parse_int(raw: str, step: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise typer.BadParameter(f"Invalid step: {step}") from None


def apply_step(editor: SelectionEditor, step: str) -> None:
    name, _, arg = step.partition(":")

    if name == "click":
        index = _parse_int(arg, step)
        editor.pointer_down(index)
        editor.pointer_up()
    elif name == "drag":
        start_raw, sep, end_raw = arg.partition("-")
        if not sep:
            raise typer.BadParameter(f"Invalid step: {step}")
        start = _parse_int(start_raw, step)
        end = _parse_int(end_raw, step)
        if editor.pointer_down(start):
            stride = 1 if end >= start else -1
            for index in range(start + stride, end + stride, stride):
                editor.pointer_enter(index)
        editor.pointer_up()
    elif name == "all":
        editor.select_all()
    elif name == "undo":
        editor.undo()
    else:
        raise typer.BadParameter(f"Unknown step: {step}")


def format_selection(tokens: tuple[Token, ...]) -> str:
    """Text with selected words in [brackets]."""
    parts = []
    for t in tokens:
        if isinstance(t, Word) and t.selected:
            parts.append(f"[{t.text}]")
        else:
            parts.append(t.text)
    return "".join(parts)


def _memoria_dir():
    _, memoria_dir, cfg = load_work_cfg()
    return memoria_dir, cfg


def register(app: typer.Typer):
    @app.command()
    def add(
        title: str,
        text: Optional[str] = typer.Option(None, "--text", "-t", help="Passage text"),
        file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read passage from file"),
        select_all: bool = typer.Option(False, "--select-all", help="Select every word"),
    ):
        """Add a new draft from text."""
        if (text is None) == (file is None):
            print("Give exactly one of --text or --file")
            sys.exit(1)
        try:
            memoria_dir, cfg = _memoria_dir()
            source = text if text is not None else file.read_text()

            editor = SelectionEditor()
            editor.load_text(source)
            if select_all:
                editor.select_all()

            draft = drafts.save_draft(
                memoria_dir,
                title or practice_title(source),
                source,
                editor.tokens,
                save_limit=cfg.save_limit,
            )
            print(f"Draft added: {draft.title} ({editor.state.word_count} words)")
        except (RuntimeError, ValueError, OSError) as e:
            print(str(e))
            sys.exit(1)

    @app.command("list")
    def list_():
        """List drafts."""
        try:
            memoria_dir, _ = _memoria_dir()
            items = drafts.list_drafts(memoria_dir)
        except (RuntimeError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        if not items:
            print("No drafts yet.")
            return
        for n, d in enumerate(items, 1):
            print(f"[{n}] {d.title}  ({len(d.selected_indices)} selected)  {d.id}")

    @app.command()
    def show(selector: str):
        """Show a draft with selected words in [brackets]."""
        try:
            memoria_dir, _ = _memoria_dir()
            d = drafts.load_draft(memoria_dir, selector)
        except (RuntimeError, LookupError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        print(d.title)
        print()
        print(format_selection(d.tokens))
        print()
        print(f"Selected: {d.selected_indices}")

    @app.command()
    def select(
        selector: str,
        steps: List[str] = typer.Argument(..., help="click:N  drag:A-B  all  undo"),
    ):
        """Replay selection gestures on a draft and save it."""
        try:
            memoria_dir, cfg = _memoria_dir()
            d = drafts.load_draft(memoria_dir, selector)
        except (RuntimeError, LookupError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        editor = SelectionEditor(max_depth=cfg.history_max_depth)
        editor.load_tokens(d.tokens)
        for step in steps:
            apply_step(editor, step)

        drafts.save_draft(
            memoria_dir,
            d.title,
            d.original_text,
            editor.tokens,
            draft_id=d.id,
        )
        print(f"Selected: {editor.selected_indices()}")

    @app.command()
    def delete(selector: str):
        """Delete a draft."""
        try:
            memoria_dir, _ = _memoria_dir()
            d = drafts.delete_draft(memoria_dir, selector)
        except (RuntimeError, LookupError, ValueError) as e:
            print(str(e))
            sys.exit(1)
        print(f"Draft deleted: {d.title}")

"""Practice commands: memoria mask | proofread"""

import sys
from pathlib import Path
from typing import List, Optional

import typer
import yaml

from memoria.core.practice import LEVELS, MemorizationSession
from memoria.core.proofreading import ProofreadingSheet
from memoria.store import drafts
from memoria.store.workdir import load_work_cfg


def _parse_mark(raw: str) -> tuple[int, int, str]:
    """LINE:WORD=CORRECTION -> (line, word, correction)."""
    position, sep, correction = raw.partition("=")
    line_raw, sep2, word_raw = position.partition(":")
    if not sep or not sep2:
        raise typer.BadParameter(f"Expected LINE:WORD=CORRECTION, got {raw!r}")
    try:
        return int(line_raw), int(word_raw), correction
    except ValueError:
        raise typer.BadParameter(f"Expected LINE:WORD=CORRECTION, got {raw!r}") from None


def register(app: typer.Typer):
    @app.command()
    def mask(
        selector: str,
        level: Optional[int] = typer.Option(None, "--level", "-l", help="1, 2 or 3"),
        reveal: List[int] = typer.Option([], "--reveal", "-r", help="Word index to show"),
    ):
        """Print a draft with its selected words hidden."""
        try:
            _, memoria_dir, cfg = load_work_cfg()
            d = drafts.load_draft(memoria_dir, selector)
        except (RuntimeError, LookupError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        if level is None:
            level = cfg.practice_level
        if level not in LEVELS:
            print(f"Level must be one of {list(LEVELS)}")
            sys.exit(1)

        session = MemorizationSession.from_tokens(d.tokens, level=level)
        if not session.selected_indices:
            print("Draft has no selected words.")
            sys.exit(1)
        for index in reveal:
            if session.is_hidden(index):
                session.toggle(index)

        print(session.render(d.tokens))

    @app.command()
    def proofread(
        file: Path,
        mark: List[str] = typer.Option(
            [], "--mark", "-m", help="LINE:WORD=CORRECTION (0-based)"
        ),
    ):
        """Build a proofreading answer sheet from a file of sentences."""
        try:
            sheet = ProofreadingSheet.from_text(file.read_text())
        except OSError as e:
            print(str(e))
            sys.exit(1)

        if not sheet.lines:
            print("No sentences found.")
            sys.exit(1)

        try:
            for raw in mark:
                line, word, correction = _parse_mark(raw)
                sheet.mark(line, word)
                sheet.set_correction(line, correction)
        except IndexError as e:
            print(str(e))
            sys.exit(1)

        for line in sheet.lines:
            numbered = " ".join(f"{w.index}:{w.text}" for w in line.words if w.index >= 0)
            print(f"{line.line_number}  {numbered}")

        if not mark:
            return

        if not sheet.is_complete():
            print("Every marked word needs a correction.")
            sys.exit(1)

        answers = [
            {
                "line_number": a.line_number,
                "word_index": a.word_index,
                "correction": a.correction,
            }
            for a in sheet.answers()
        ]
        print()
        print(yaml.safe_dump({"answers": answers}, sort_keys=False, allow_unicode=True), end="")

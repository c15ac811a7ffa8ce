"""Saved drafts: a tokenized text plus its word selection.

One YAML file per draft under `.memoria/drafts/`. Drafts are listed oldest
first; selectors accept a 1-based position, an id, or a unique title.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from memoria.core.tokens import (
    Token,
    join_tokens,
    selected_word_indices,
    tokens_from_records,
    tokens_to_records,
)

logger = logging.getLogger(__name__)


class SaveLimitReached(RuntimeError):
    def __init__(self, limit: int):
        super().__init__(
            f"Save limit reached. You can only save up to {limit} drafts. "
            "Delete an existing draft to save a new one."
        )
        self.limit = limit


@dataclass(frozen=True)
class Draft:
    id: str
    title: str
    original_text: str
    tokens: tuple[Token, ...]
    created_at: str = field(default_factory=lambda: _now())

    @property
    def selected_indices(self) -> list[int]:
        return selected_word_indices(self.tokens)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "original_text": self.original_text,
            "created_at": self.created_at,
            "selected_indices": self.selected_indices,
            "tokens": tokens_to_records(self.tokens),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Draft":
        for key in ("id", "title", "tokens"):
            if key not in record:
                raise ValueError(f"Draft record missing {key!r}")
        if not isinstance(record["tokens"], list):
            raise ValueError("Draft tokens must be a list")
        tokens = tokens_from_records(record["tokens"])
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            original_text=str(record.get("original_text") or join_tokens(tokens)),
            tokens=tokens,
            created_at=str(record.get("created_at") or _now()),
        )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _drafts_dir(memoria_dir: Path) -> Path:
    path = memoria_dir / "drafts"
    path.mkdir(exist_ok=True)
    return path


def list_drafts(memoria_dir: Path) -> list[Draft]:
    drafts = []
    for path in sorted(_drafts_dir(memoria_dir).glob("*.yml")):
        try:
            record = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed draft file: {path.name}") from e
        if not isinstance(record, dict):
            raise ValueError(f"Malformed draft file: {path.name}")
        try:
            drafts.append(Draft.from_record(record))
        except ValueError as e:
            raise ValueError(f"Malformed draft file: {path.name} ({e})") from e
    drafts.sort(key=lambda d: (d.created_at, d.id))
    return drafts


def save_draft(
    memoria_dir: Path,
    title: str,
    original_text: str,
    tokens: tuple[Token, ...],
    save_limit: Optional[int] = None,
    draft_id: Optional[str] = None,
) -> Draft:
    """Create a draft, or overwrite `draft_id` in place.

    The save limit only applies to new drafts.
    """
    existing = list_drafts(memoria_dir)

    created_at = None
    if draft_id is not None:
        for d in existing:
            if d.id == draft_id:
                created_at = d.created_at
                break

    if created_at is None and save_limit is not None and len(existing) >= save_limit:
        raise SaveLimitReached(save_limit)

    draft = Draft(
        id=draft_id or str(uuid.uuid4()),
        title=title,
        original_text=original_text,
        tokens=tuple(tokens),
        created_at=created_at or _now(),
    )

    path = _drafts_dir(memoria_dir) / f"{draft.id}.yml"
    with path.open("w") as f:
        yaml.safe_dump(draft.to_record(), f, sort_keys=False, allow_unicode=True)

    logger.info("saved draft %s (%d selected)", draft.id, len(draft.selected_indices))
    return draft


def load_draft(memoria_dir: Path, selector: str) -> Draft:
    """Resolve a draft selector (position, id, or title)."""
    drafts = list_drafts(memoria_dir)
    if not drafts:
        raise LookupError("No drafts found.")

    if selector.isdigit():
        idx = int(selector)
        if 1 <= idx <= len(drafts):
            return drafts[idx - 1]
        raise LookupError(f"Invalid index: {selector}")

    for d in drafts:
        if d.id == selector:
            return d

    matches = [d for d in drafts if d.title == selector]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise LookupError(f"Ambiguous title: {selector}")

    raise LookupError(f"Draft not found: {selector}")


def delete_draft(memoria_dir: Path, selector: str) -> Draft:
    draft = load_draft(memoria_dir, selector)
    (_drafts_dir(memoria_dir) / f"{draft.id}.yml").unlink()
    logger.info("deleted draft %s", draft.id)
    return draft

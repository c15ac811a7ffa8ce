"""Work directory helper.

A work is any directory holding a `.memoria/` folder:

    .memoria/config.yml     settings (see WorkConfig)
    .memoria/drafts/*.yml   saved selection drafts
    .memoria/tui.log        TUI log

Used by both CLI and TUI.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from memoria.core.practice import LEVELS

WORK_DIRNAME = ".memoria"
CONFIG_NAME = "config.yml"


@dataclass(frozen=True)
class WorkConfig:
    work_id: str
    save_limit: Optional[int] = None
    history_max_depth: Optional[int] = None
    practice_level: int = 3
    voice_accent: str = "en-US"
    voice_preference: Optional[dict[str, str]] = None
    voice_recommended: Optional[str] = None
    diagnostics: bool = False

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> "WorkConfig":
        work_id = (cfg.get("work") or {}).get("id")
        if not work_id:
            raise ValueError("config.yml has no work.id")

        drafts = cfg.get("drafts") or {}
        history = cfg.get("history") or {}
        practice = cfg.get("practice") or {}
        voice = cfg.get("voice") or {}
        ui = cfg.get("ui") or {}

        level = practice.get("level", 3)
        if level not in LEVELS:
            raise ValueError(f"practice.level must be one of {LEVELS}, got {level!r}")

        preference = voice.get("preference")
        if preference is not None and not isinstance(preference, dict):
            raise ValueError("voice.preference must be a mapping")

        return cls(
            work_id=str(work_id),
            save_limit=_optional_positive(drafts, "save_limit", "drafts"),
            history_max_depth=_optional_positive(history, "max_depth", "history"),
            practice_level=level,
            voice_accent=str(voice.get("accent") or "en-US"),
            voice_preference=preference,
            voice_recommended=voice.get("recommended"),
            diagnostics=bool(ui.get("diagnostics", False)),
        )


def _optional_positive(section: dict[str, Any], key: str, prefix: str) -> Optional[int]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValueError(f"{prefix}.{key} must be a positive integer or null")
    return value


def default_cfg() -> dict[str, Any]:
    return {
        "work": {"id": str(uuid.uuid4())},
        "drafts": {"save_limit": None},
        "history": {"max_depth": None},
        "practice": {"level": 3},
        "voice": {"accent": "en-US", "preference": None, "recommended": None},
        "ui": {"diagnostics": False},
    }


def init_work(path: Path) -> Path:
    """Create `.memoria/` with a default config. Existing config is kept."""
    path = path.resolve()
    path.mkdir(parents=True, exist_ok=True)

    memoria_dir = path / WORK_DIRNAME
    memoria_dir.mkdir(exist_ok=True)
    (memoria_dir / "drafts").mkdir(exist_ok=True)

    config_path = memoria_dir / CONFIG_NAME
    if not config_path.exists():
        with config_path.open("w") as f:
            yaml.safe_dump(default_cfg(), f, sort_keys=False)

    return memoria_dir


def load_work_cfg(work_dir: Path | None = None) -> tuple[Path, Path, WorkConfig]:
    work_dir = (work_dir or Path.cwd()).resolve()
    memoria_dir = work_dir / WORK_DIRNAME
    if not memoria_dir.exists():
        raise RuntimeError("Not a Memoria work (missing .memoria/)")

    cfg_path = memoria_dir / CONFIG_NAME
    if not cfg_path.exists():
        raise RuntimeError("Invalid Memoria work (missing config.yml)")

    raw = yaml.safe_load(cfg_path.read_text()) or {}
    if not isinstance(raw, dict):
        raise RuntimeError("Invalid Memoria work (config.yml is not a mapping)")

    try:
        cfg = WorkConfig.from_dict(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid Memoria work: {e}") from e

    return work_dir, memoria_dir, cfg

"""Voice commands: memoria voice list|pick

Voices come from a YAML file listing what the speech platform reports:

  - {name: Samantha, lang: en-US, uri: com.apple.Samantha, local: true}
  - {name: Google UK English Female, lang: en-GB}
"""

import sys
from pathlib import Path
from typing import Optional

import typer
import yaml

from memoria.core.voices import (
    UtteranceSettings,
    Voice,
    VoicePreference,
    display_name,
    find_best_voice,
    group_by_language,
)
from memoria.store.workdir import WorkConfig, load_work_cfg


def load_voices(path: Path) -> list[Voice]:
    records = yaml.safe_load(path.read_text()) or []
    if not isinstance(records, list):
        raise ValueError("Voices file must be a list")
    return [Voice.from_record(r) for r in records]


def _work_cfg() -> Optional[WorkConfig]:
    """Voice defaults from the work, when run inside one."""
    try:
        _, _, cfg = load_work_cfg()
    except RuntimeError:
        return None
    return cfg


def register(app: typer.Typer):
    @app.command("list")
    def list_(voices_file: Path):
        """List voices grouped by language."""
        try:
            voices = load_voices(voices_file)
        except (OSError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        for lang, group in sorted(group_by_language(voices).items()):
            print(lang)
            for v in group:
                print(f"  {display_name(v)}")

    @app.command()
    def pick(
        voices_file: Path,
        accent: Optional[str] = typer.Option(None, "--accent", "-a", help="e.g. en-GB"),
        recommended: Optional[str] = typer.Option(None, "--recommended", help="Preferred voice name"),
    ):
        """Pick the best voice for an accent."""
        try:
            voices = load_voices(voices_file)
        except (OSError, ValueError) as e:
            print(str(e))
            sys.exit(1)

        cfg = _work_cfg()
        preference = None
        if cfg is not None:
            accent = accent or cfg.voice_accent
            recommended = recommended or cfg.voice_recommended
            if cfg.voice_preference:
                p = cfg.voice_preference
                preference = VoicePreference(
                    name=str(p.get("name", "")),
                    lang=str(p.get("lang", "")),
                    uri=str(p.get("uri", "")),
                )

        voice = find_best_voice(voices, accent or "en-US", preference, recommended)
        if voice is None:
            print("No voices available.")
            sys.exit(1)

        settings = UtteranceSettings()
        print(display_name(voice))
        print(f"  uri:  {voice.uri}")
        print(f"  lang: {voice.lang}")
        print(f"  rate: {settings.rate}  pitch: {settings.pitch}  volume: {settings.volume}")

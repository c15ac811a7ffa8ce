"""Voice selection for read-aloud practice.

The speech platform itself is not modelled here: callers pass in the voice
list the platform reports, and get back the voice to use for an accent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

_REMOTE_VENDORS = ("Google", "Microsoft", "Chrome")


@dataclass(frozen=True)
class Voice:
    name: str
    lang: str
    uri: str
    local_service: bool = False

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Voice":
        try:
            return cls(
                name=str(record["name"]),
                lang=str(record["lang"]),
                uri=str(record.get("uri") or record["name"]),
                local_service=bool(record.get("local", False)),
            )
        except KeyError as e:
            raise ValueError(f"Voice record missing {e.args[0]!r}: {record!r}") from e


@dataclass(frozen=True)
class VoicePreference:
    name: str
    lang: str
    uri: str


@dataclass(frozen=True)
class UtteranceSettings:
    rate: float = 0.8
    pitch: float = 1.0
    volume: float = 1.0


def is_native_voice(voice: Voice) -> bool:
    return voice.local_service and not any(v in voice.name for v in _REMOTE_VENDORS)


def _rank(voice: Voice) -> tuple[bool, bool, str]:
    return (not is_native_voice(voice), not voice.local_service, voice.name)


def group_by_language(voices: Iterable[Voice]) -> dict[str, list[Voice]]:
    """Voices per language code, native first, then local, then by name."""
    grouped: dict[str, list[Voice]] = {}
    for voice in voices:
        grouped.setdefault(voice.lang, []).append(voice)
    for lang in grouped:
        grouped[lang].sort(key=_rank)
    return grouped


def display_name(voice: Voice) -> str:
    name = voice.name.replace("Google ", "", 1).replace("Microsoft ", "", 1)
    if is_native_voice(voice):
        return f"{name} (iOS Native)"
    if voice.local_service:
        return f"{name} (Local)"
    return f"{name} (Online)"


def find_best_voice(
    voices: list[Voice],
    accent: str,
    preference: Optional[VoicePreference] = None,
    recommended: Optional[str] = None,
) -> Optional[Voice]:
    """Pick a voice: saved preference, recommendation, then accent fallbacks."""
    if preference is not None:
        for v in voices:
            if v.uri == preference.uri:
                return v
        for v in voices:
            if v.name == preference.name and v.lang == preference.lang:
                return v

    if recommended:
        for v in voices:
            if v.lang == accent and recommended in v.name:
                return v

    accent_voices = [v for v in voices if v.lang == accent]
    if not accent_voices:
        base = accent.split("-")[0]
        for v in voices:
            if v.lang.startswith(base):
                return v
        return voices[0] if voices else None

    for v in accent_voices:
        if is_native_voice(v):
            return v
    for v in accent_voices:
        if v.local_service:
            return v
    return accent_voices[0]

"""Persistent player settings."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from pianotiles.config import (
    ATTACK_SECONDS,
    DEFAULT_BPM,
    DEFAULT_DIFFICULTY_INDEX,
    DIFFICULTY_OPTIONS,
    MASTER_GAIN,
    RELEASE_SECONDS,
    SAMPLE_BASE_URL,
)

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".pianotiles" / "settings.json"


@dataclass
class GameSettings:
    difficulty: str = DIFFICULTY_OPTIONS[DEFAULT_DIFFICULTY_INDEX][0]
    bpm: float = DEFAULT_BPM
    sample_base_url: str = SAMPLE_BASE_URL
    master_gain: float = MASTER_GAIN
    attack_seconds: float = ATTACK_SECONDS
    release_seconds: float = RELEASE_SECONDS

    def difficulty_index(self) -> int:
        labels = [label.lower() for label, _ in DIFFICULTY_OPTIONS]
        try:
            return labels.index(self.difficulty.lower())
        except ValueError:
            return DEFAULT_DIFFICULTY_INDEX


def load_settings(path: Path = SETTINGS_PATH) -> GameSettings:
    """Load settings from disk, returning defaults if absent or unreadable."""
    if not path.exists():
        return GameSettings()
    try:
        data = json.loads(path.read_text())
        return GameSettings(**{
            k: v for k, v in data.get("game", {}).items()
            if k in GameSettings.__dataclass_fields__
        })
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return GameSettings()


def save_settings(settings: GameSettings, path: Path = SETTINGS_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict = {}
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except ValueError:
            pass
    data["game"] = asdict(settings)
    path.write_text(json.dumps(data, indent=2))

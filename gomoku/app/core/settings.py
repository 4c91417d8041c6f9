import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gomoku.app.engine.constants import (
    MIN_BOARD_SIZE, MAX_BOARD_SIZE, DEFAULT_BOARD_SIZE,
    MIN_WIN_LENGTH, MAX_WIN_LENGTH, DEFAULT_WIN_LENGTH,
)
from gomoku.app.engine.exceptions import ConfigurationError
from gomoku.app.models.enums import Difficulty

load_dotenv()

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.getenv("GOMOKU_SETTINGS_PATH", "config/gomoku.yaml")


class GameSettings(BaseModel):
    model_config = ConfigDict(extra='ignore', validate_assignment=True)

    board_size: int = Field(DEFAULT_BOARD_SIZE, ge=MIN_BOARD_SIZE, le=MAX_BOARD_SIZE)
    win_length: int = Field(DEFAULT_WIN_LENGTH, ge=MIN_WIN_LENGTH, le=MAX_WIN_LENGTH)
    ai_difficulty: Difficulty = Difficulty.EASY
    sound_enabled: bool = True
    animations_enabled: bool = True


class SettingsStore:
    """
    Named options persisted to a YAML file under a top-level 'settings' key.
    A missing or unreadable file falls back to the defaults.
    """

    def __init__(self, config_path: str = SETTINGS_PATH):
        self.path = Path(config_path)
        self.settings = GameSettings()
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
            self.settings = GameSettings(**data.get("settings", {}))
        except (OSError, yaml.YAMLError, ValidationError, AttributeError) as e:
            logger.warning("Could not load settings from %s, using defaults: %s", self.path, e)
            self.settings = GameSettings()

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            yaml.safe_dump({"settings": self.settings.model_dump(mode="json")}, f, sort_keys=False)
        logger.info("Settings saved to %s", self.path)

    def get(self) -> GameSettings:
        return self.settings

    def update(self, **changes: Any) -> GameSettings:
        """Validates and applies `changes`, then saves. Rejects unknown keys."""
        unknown = set(changes) - set(GameSettings.model_fields)
        if unknown:
            raise ConfigurationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        merged: Dict[str, Any] = {**self.settings.model_dump(), **changes}
        try:
            self.settings = GameSettings(**merged)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        self.save()
        return self.settings


# Singleton instance
settings_store = SettingsStore()

"""Unified configuration loader."""

import json
from pathlib import Path

from ..models import Infrastructure
from ..preferences import PreferenceStore
from .settings import GeneratorSettings


class ConfigLoader:
    """Loads all generation inputs from one configuration directory."""

    INFRASTRUCTURE_FILE = "infrastructure.json"
    PREFERENCES_FILE = "teacher-preferences.json"
    SETTINGS_FILE = "generator-settings.json"

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to directory containing configuration files.
                       Expected files:
                       - infrastructure.json (teachers, rooms, courses, time settings)
                       - teacher-preferences.json (optional)
                       - generator-settings.json (optional)
        """
        if config_dir is None:
            config_dir = Path("data")

        self.config_dir = Path(config_dir)
        self.infrastructure_path = self.config_dir / self.INFRASTRUCTURE_FILE
        self.preferences_path = self.config_dir / self.PREFERENCES_FILE
        self.settings_path = self._get_path(self.SETTINGS_FILE)

    def _get_path(self, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        path = self.config_dir / filename
        return path if path.exists() else None

    def load_infrastructure(self) -> Infrastructure:
        """Load infrastructure.json.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        with open(self.infrastructure_path, encoding="utf-8") as f:
            return Infrastructure.from_dict(json.load(f))

    def load_preferences(self) -> PreferenceStore:
        """Load teacher preferences; a missing file gives an empty store."""
        return PreferenceStore.load(self.preferences_path)

    def save_preferences(self, store: PreferenceStore) -> None:
        store.save(self.preferences_path)

    def load_settings(self) -> GeneratorSettings:
        if self.settings_path is None:
            return GeneratorSettings()
        with open(self.settings_path, encoding="utf-8") as f:
            return GeneratorSettings.from_dict(json.load(f))

"""Settings persistence for ghopen."""

import json
import logging
from pathlib import Path

from ..models import Settings

logger = logging.getLogger(__name__)

# Store settings in ~/.config/ghopen/
SETTINGS_PATH = Path.home() / ".config" / "ghopen" / "settings.json"


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    """Load settings, falling back to defaults."""
    if not path.exists():
        return Settings()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (ValueError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()
    return Settings.from_dict(data)


def save_settings(settings: Settings, path: Path = SETTINGS_PATH) -> bool:
    """Save settings to disk."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings.to_dict(), f, indent=2)
        return True
    except IOError:
        return False

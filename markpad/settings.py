"""User settings stored in the platform config directory.

Settings live in a JSON file under ``platformdirs.user_config_dir``. A
missing, unreadable or malformed file never stops the editor: bad values
are dropped with a warning and the defaults from ``EditorConstants`` are
used instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "markpad"

MIN_BOX_WIDTH = 20
MIN_BOX_HEIGHT = 5


@dataclass
class EditorSettings:
    document_extension: str = EditorConstants.DOCUMENT_EXTENSION
    box_width: int = EditorConstants.BOX_WIDTH
    box_height: int = EditorConstants.BOX_HEIGHT


def validate_setting(key: str, value: Any) -> bool:
    """Validate a single setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if the value is acceptable for the key.
    """
    if key == 'document_extension':
        return isinstance(value, str) and len(value) > 1 and value.startswith('.')
    if key == 'box_width':
        return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_BOX_WIDTH
    if key == 'box_height':
        return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_BOX_HEIGHT
    return False


class SettingsStore:
    """Reads and writes ``settings.json`` in the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir(APP_NAME))
        self._settings_file = self._config_dir / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> EditorSettings:
        """Load settings, falling back to defaults for anything invalid."""
        values: Dict[str, Any] = {}
        for key, value in self._read_raw().items():
            if key not in EditorSettings.__dataclass_fields__:
                logger.warning(f"Ignoring unknown setting {key!r}")
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value for {key!r}: {value!r}")
                continue
            values[key] = value
        return EditorSettings(**values)

    def save(self, settings: EditorSettings) -> bool:
        """Save settings atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                temp_file.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.debug(f"Could not remove {temp_file}: {cleanup_error}")
            return False

    def load_or_create(self) -> EditorSettings:
        """Load settings, writing the defaults out if no settings file exists yet."""
        if self._settings_file.exists():
            return self.load()
        settings = EditorSettings()
        if self.save(settings):
            logger.info(f"Wrote default settings to {self._settings_file}")
        return settings

# mdclip/core/settings_manager.py

import json
from pathlib import Path
from typing import Dict, Any, List, Optional

from platformdirs import user_config_dir
from mdclip.utils.logger import logger
from mdclip.config import (
    APP_NAME,
    APP_AUTHOR,
    PROJECT_SETTINGS_FILENAME,
    SETTINGS_KEYS,
    USER_SETTINGS_FILENAME,
    CopyConfig,
)


def user_settings_path() -> Path:
    return Path(user_config_dir(appname=APP_NAME, appauthor=APP_AUTHOR)) / USER_SETTINGS_FILENAME


class SettingsManager:
    """
    Reads settings in order of increasing precedence: the per-user
    ``settings.json`` and the project's ``.mdclip.json`` at the workspace
    root. Files are never written here.
    """

    def __init__(self, workspace_root: Optional[str] = None, user_path: Optional[Path] = None):
        self.user_path = Path(user_path) if user_path else user_settings_path()
        self.project_path = Path(workspace_root) / PROJECT_SETTINGS_FILENAME if workspace_root else None
        self.loaded_from: List[Path] = []
        self.last_error: str | None = None
        self.last_warning: str | None = None

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.last_error = f"Failed to load settings from {path}: {e}"
            logger.error("Failed to load settings from %s: %s", path, e, exc_info=True)
            return {}
        if not isinstance(data, dict):
            self.last_error = f"Settings file {path} must contain a JSON object"
            logger.error(self.last_error)
            return {}

        settings = {}
        for k, v in data.items():
            if k in SETTINGS_KEYS:
                settings[k] = v
            else:
                self.last_warning = f"Unknown setting '{k}' in {path} ignored."
                logger.warning(self.last_warning)
        self.loaded_from.append(path)
        logger.info("Settings loaded from %s", path)
        return settings

    def load_settings(self) -> Dict[str, Any]:
        self.last_error = None
        self.last_warning = None
        self.loaded_from = []

        settings: Dict[str, Any] = {}
        settings.update(self._read(self.user_path))
        if self.project_path is not None:
            settings.update(self._read(self.project_path))

        if not self.loaded_from:
            logger.info("No settings file found to load.")
        return settings

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> CopyConfig:
        """Defaults < user file < project file < overrides, validated."""
        settings = self.load_settings()
        settings.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return CopyConfig.from_mapping(settings).validate()

"""
JSON-file settings storage for persisted engine state.

The engine only needs a handful of scalar slots (the mesocycle anchor).
Every update is written as a whole file so a reader never sees a
half-written anchor.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..core.engine.config_loader import get_home_dir
from ..core.store import InMemorySettingsStore, SettingsStore

logger = logging.getLogger(__name__)

__all__ = [
    "InMemorySettingsStore",
    "JsonSettingsStore",
    "SettingsStore",
    "get_default_settings_path",
]


class JsonSettingsStore:
    """
    Settings stored as a single flat JSON object on disk.

    Every update rewrites the whole file through a temporary file and
    os.replace, so concurrent readers see either the old or the new content.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the settings store.

        Args:
            path: Path to the JSON settings file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if the settings file exists."""
        return self.path.exists()

    def load(self) -> dict[str, Any]:
        """
        Load all settings.

        Returns:
            Settings dict; empty if the file is missing or unreadable
        """
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.debug("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any | None:
        return self.load().get(key)

    def set_many(self, values: Mapping[str, Any]) -> None:
        data = self.load()
        data.update(values)
        self._write(data)

    def delete_many(self, keys: Iterable[str]) -> None:
        data = self.load()
        removed = False
        for key in keys:
            if key in data:
                del data[key]
                removed = True
        if removed:
            self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Wrote %d settings to %s", len(data), self.path)


def get_default_settings_path() -> Path:
    """Get the default settings file path."""
    return get_home_dir() / "settings.json"


"""
Settings Store

JSON file storage for the two user settings the analyzer remembers:
- credential: Groq API key
- char_limit: Maximum characters of page text sent for analysis
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


MIN_CHAR_LIMIT = 500


@dataclass
class StoredSettings:
    """Settings read from the store. Unset values are None."""
    credential: Optional[str] = None
    char_limit: Optional[int] = None


class SettingsStore:
    """
    File-backed key-value store.

    Usage:
        store = SettingsStore("~/.config/aclarador/settings.json")
        store.save_credential("gsk_...")
        store.save_char_limit(4000)
        settings = store.load()
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize settings store.

        Args:
            path: JSON file location (created on first write)
        """
        self.path = Path(path).expanduser()

    def load(self) -> StoredSettings:
        """Read stored settings. Missing or unreadable files yield defaults."""
        data = self._read()

        char_limit = data.get("char_limit")
        if not isinstance(char_limit, int) or char_limit < MIN_CHAR_LIMIT:
            char_limit = None

        credential = data.get("credential")
        if not isinstance(credential, str) or not credential.strip():
            credential = None

        return StoredSettings(credential=credential, char_limit=char_limit)

    def save_credential(self, credential: str) -> None:
        """Store the API key (whitespace stripped)."""
        data = self._read()
        data["credential"] = (credential or "").strip()
        self._write(data)

    def save_char_limit(self, limit: int) -> bool:
        """
        Store the character limit.

        Returns:
            True if written, False if the limit is below MIN_CHAR_LIMIT
        """
        if limit < MIN_CHAR_LIMIT:
            logger.info(f"Ignoring char limit {limit} (minimum {MIN_CHAR_LIMIT})")
            return False

        data = self._read()
        data["char_limit"] = int(limit)
        self._write(data)
        return True

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read settings from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Settings saved to {self.path}")

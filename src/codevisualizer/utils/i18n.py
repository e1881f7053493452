from __future__ import annotations

"""
Internationalization (i18n) Utility.

Singleton manager for user-facing CLI strings. Looks up dot-notation keys in
nested JSON locale files and interpolates keyword arguments.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """Resource manager for locale-specific strings."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """Load a translation dictionary; missing or corrupt files leave it empty."""
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
            self._locale = locale
            self.is_loaded = True
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False

    def t(self, key: str, default: str = "", **kwargs: Any) -> str:
        """
        Resolve and format a string by dot-notation key.

        Args:
            key: Hierarchical identifier (e.g. 'cli.errors.invalid_repo').
            default: Text used when the key is missing; the key itself
                     otherwise.
            **kwargs: Values interpolated with str.format.

        Returns:
            str: The formatted string.
        """
        current: Any = self._translations
        for part in key.split("."):
            current = current.get(part) if isinstance(current, dict) else None

        template = current if isinstance(current, str) else (default or key)
        if not kwargs:
            return template

        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Formatting error for '{key}': {e}")
            return template


# Global singleton instance for application-wide resource access
i18n = I18n(DEFAULT_LOCALE)

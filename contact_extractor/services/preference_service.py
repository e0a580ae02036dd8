"""
Preference Service - Durable storage for the UI theme

A single "theme" slot is persisted; everything else in the UI lives only as
long as the browser session.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from contact_extractor.models.contact import Theme

logger = logging.getLogger(__name__)

THEME_KEY = "theme"


class PreferenceStore(Protocol):
    def load(self) -> Optional[Theme]:
        ...

    def save(self, value: Theme) -> None:
        ...


class MemoryPreferenceStore:
    """Process-local store, used when nothing should touch the disk"""

    def __init__(self, initial: Optional[Theme] = None):
        self._value = initial

    def load(self) -> Optional[Theme]:
        return self._value

    def save(self, value: Theme) -> None:
        self._value = Theme(value)


class FilePreferenceStore:
    """
    JSON file holding {"theme": "light" | "dark"}

    Unreadable or unexpected content is treated as "no preference".
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[Theme]:
        if not self.path.is_file():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Theme(data[THEME_KEY])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable preferences at {self.path}: {e}")
            return None

    def save(self, value: Theme) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({THEME_KEY: Theme(value).value}),
            encoding="utf-8",
        )
        logger.info(f"Saved theme preference: {Theme(value).value}")


def parse_system_theme(header_value: Optional[str]) -> Optional[Theme]:
    """
    Read the browser's Sec-CH-Prefers-Color-Scheme client hint

    Args:
        header_value: Raw header, e.g. '"dark"'

    Returns:
        Theme, or None when the hint is missing or unknown
    """
    if not header_value:
        return None
    value = header_value.strip().strip('"').lower()
    try:
        return Theme(value)
    except ValueError:
        return None


def resolve_theme(stored: Optional[Theme], system: Optional[Theme]) -> Theme:
    """Stored preference first, then the system preference, then light"""
    return stored or system or Theme.LIGHT

"""Best-effort persisted locale preference.

A single string stored under the ``locale`` key of a small YAML file
(``~/.omurice/preferences.yaml`` by default). Failures to read or write are
logged and swallowed: the caller falls back to the default locale.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from omurice.utils import fs

logger = logging.getLogger(__name__)


class LocalePreferenceStore:
    """get/set one string preference."""

    key = "locale"

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def get(self) -> Optional[str]:
        """Stored locale, or None when missing or unreadable."""
        try:
            data = fs.load_yaml(self.path)
        except FileNotFoundError:
            return None
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read preferences {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        value = data.get(self.key)
        return value if isinstance(value, str) else None

    def set(self, value: str) -> bool:
        """Persist ``value``; returns False (and logs) if the write failed."""
        try:
            fs.atomic_yaml_dump({self.key: value}, self.path)
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not save locale preference to {self.path}: {e}")
            return False
        logger.debug(f"Saved locale preference {value!r} to {self.path}")
        return True

"""File-backed user preferences (favourites, sort order, active view)."""

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable

from .constants import (
    ACTIVE_TABS,
    PREF_ACTIVE_TAB,
    PREF_FAVORITE_SQUADS,
    PREF_FAVORITE_TEAMS,
    PREF_SORT_ORDER,
    PREFERENCE_DEFAULTS,
    SORT_ASC,
    SORT_DESC,
)
from .utils import load_json_safe, save_json

logger = logging.getLogger('fantasytier.preferences')


def _is_id_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


VALIDATORS: dict[str, Callable[[Any], bool]] = {
    PREF_FAVORITE_TEAMS: _is_id_list,
    PREF_FAVORITE_SQUADS: _is_id_list,
    PREF_SORT_ORDER: lambda v: v in (SORT_ASC, SORT_DESC),
    PREF_ACTIVE_TAB: lambda v: v in ACTIVE_TABS,
}


class PreferenceStore:
    """
    Key-value preferences persisted to a JSON file.

    Values are read once at construction and the file is rewritten on
    every change. A missing key, a corrupt file or an invalid value
    falls back to that key's default.

    Example:
        prefs = PreferenceStore(Path('preferences.json'))
        prefs.toggle_favorite(PREF_FAVORITE_SQUADS, squad.id)
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._values: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """(Re)read the preferences file, validating each key."""
        raw = load_json_safe(self.path, default={})
        if not isinstance(raw, dict):
            logger.warning(f'Preferences file {self.path} is not an object; using defaults')
            raw = {}

        values = {}
        for key, default in PREFERENCE_DEFAULTS.items():
            if key not in raw:
                values[key] = deepcopy(default)
            elif VALIDATORS[key](raw[key]):
                values[key] = raw[key]
            else:
                logger.warning(f'Invalid value for preference {key!r}; using default')
                values[key] = deepcopy(default)

        self._values = values

    def save(self) -> bool:
        """Write preferences to disk. Returns False (and logs) on failure."""
        try:
            save_json(self.path, self._values)
        except (OSError, TypeError) as e:
            logger.error(f'Could not save preferences to {self.path}: {e}')
            return False
        return True

    def get(self, key: str) -> Any:
        if key not in PREFERENCE_DEFAULTS:
            raise KeyError(f'Unknown preference: {key}')
        return deepcopy(self._values[key])

    def set(self, key: str, value: Any) -> None:
        """Set a preference and persist it."""
        if key not in PREFERENCE_DEFAULTS:
            raise KeyError(f'Unknown preference: {key}')
        if not VALIDATORS[key](value):
            raise ValueError(f'Invalid value for preference {key!r}: {value!r}')

        self._values[key] = deepcopy(value)
        self.save()

    def toggle_favorite(self, key: str, item_id: str) -> bool:
        """
        Add or remove an id from a favourites list.

        Args:
            key: PREF_FAVORITE_TEAMS or PREF_FAVORITE_SQUADS
            item_id: Squad id to toggle

        Returns:
            True if the id is now a favourite
        """
        favorites = self.get(key)
        if item_id in favorites:
            favorites = [f for f in favorites if f != item_id]
            is_favorite = False
        else:
            favorites.append(item_id)
            is_favorite = True

        self.set(key, favorites)
        return is_favorite

    @property
    def sort_order(self) -> str:
        return self._values[PREF_SORT_ORDER]

    @property
    def active_tab(self) -> str:
        return self._values[PREF_ACTIVE_TAB]

    def favorites(self, key: str = PREF_FAVORITE_TEAMS) -> list[str]:
        return self.get(key)

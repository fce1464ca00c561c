"""
Best-effort persistence of the high score and the mute preference.

Values are kept in a small pickled dict on disk. Any failure to read or
write (missing file, permissions, corrupt data) falls back to defaults so
the game keeps running without persistence.
"""

import logging
import os
import pickle

from constants import SAVE_FILE, STORAGE_KEYS

logger = logging.getLogger(__name__)

_READ_ERRORS = (OSError, EOFError, pickle.UnpicklingError, ValueError, TypeError)


class _DataUnpickler(pickle.Unpickler):
    """Unpickler that only rebuilds plain data (dicts, ints, bools, strings)."""
    def find_class(self, module, name):
        raise pickle.UnpicklingError(f"global '{module}.{name}' is not allowed in a save file")


class Storage:
    def __init__(self, path=SAVE_FILE):
        self.path = path

    def _read(self):
        try:
            with open(self.path, 'rb') as f:
                data = _DataUnpickler(f).load()
        except FileNotFoundError:
            return {}
        except _READ_ERRORS as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _get(self, key):
        return self._read().get(STORAGE_KEYS[key])

    def _set(self, key, value):
        data = self._read()
        data[STORAGE_KEYS[key]] = value
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'wb') as f:
                pickle.dump(data, f)
        except (OSError, pickle.PicklingError) as e:
            logger.warning("Could not write %s: %s", self.path, e)
            return False
        return True

    def load_high_score(self):
        """Stored high score, or 0 if missing or invalid."""
        raw = self._get("high_score")
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            return 0
        return raw

    def save_high_score(self, score):
        """Persist `score` only if it beats the stored value."""
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            return False
        if score <= self.load_high_score():
            return False
        return self._set("high_score", score)

    def load_mute(self):
        # Only a stored True counts; anything else means sound on
        return self._get("mute") is True

    def save_mute(self, muted):
        return self._set("mute", bool(muted))


class MemoryStorage(Storage):
    """Storage kept in a dict, for running without a save file."""
    def __init__(self):
        super().__init__(path=None)
        self.data = {}

    def _read(self):
        return dict(self.data)

    def _set(self, key, value):
        self.data[STORAGE_KEYS[key]] = value
        return True

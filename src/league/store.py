"""
Storage adapters for the league collections.

A store keeps lists of plain dicts under fixed collection keys. Repositories
do every read-modify-write inside ``store.locked()`` so a write is visible
to the next read.
"""
import copy
import logging
import os
import threading

import yaml
from filelock import FileLock

logger = logging.getLogger(__name__)

USERS = 'users'
MATCHES = 'matches'
SCHEDULED = 'scheduled'

COLLECTION_FILES = {
    USERS: 'users.yaml',
    MATCHES: 'matches.yaml',
    SCHEDULED: 'scheduled.yaml',
}


class MemoryStore:
    """Keeps collections in process memory."""

    def __init__(self, initial=None):
        self._data = {key: [] for key in COLLECTION_FILES}
        for key, items in (initial or {}).items():
            self._check_key(key)
            self._data[key] = copy.deepcopy(list(items))
        self._lock = threading.RLock()

    def _check_key(self, key):
        if key not in COLLECTION_FILES:
            raise KeyError(f'Unknown collection: {key}')

    def locked(self):
        return self._lock

    def load(self, key) -> list:
        self._check_key(key)
        with self._lock:
            return copy.deepcopy(self._data[key])

    def save(self, key, items):
        self._check_key(key)
        with self._lock:
            self._data[key] = copy.deepcopy(list(items))


class YamlStore:
    """Keeps each collection in its own YAML file inside a data directory."""

    def __init__(self, data_dir, lock_timeout=10):
        self.data_dir = data_dir
        os.makedirs(data_dir, exist_ok=True)
        self._lock = FileLock(os.path.join(data_dir, '.lock'), timeout=lock_timeout)

    def path(self, key) -> str:
        """Return the file path of a collection."""
        if key not in COLLECTION_FILES:
            raise KeyError(f'Unknown collection: {key}')
        return os.path.join(self.data_dir, COLLECTION_FILES[key])

    def locked(self):
        return self._lock

    def load(self, key) -> list:
        """Load a collection. Missing, empty or unreadable files read as empty."""
        path = self.path(key)
        if not os.path.exists(path):
            return []
        with self._lock:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.warning(f'Failed to parse {path}: {e}')
                return []
        if not data:
            return []
        items = data.get(key, []) if isinstance(data, dict) else []
        return list(items or [])

    def save(self, key, items):
        """Save a collection."""
        path = self.path(key)
        with self._lock:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.dump({key: list(items)}, f, default_flow_style=False, allow_unicode=True)

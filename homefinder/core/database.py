"""
Homefinder Collection Store

Named collections (users, listings, ...) layered over a key-value store.
The whole database is one JSON blob; every mutation rewrites it.
"""

import json
import logging
import random
import string
import time
from typing import Any, Callable, Dict, List, Optional

from .exceptions import ValidationError
from .kv_store import KeyValueStore
from .seed import build_seed_database

logger = logging.getLogger(__name__)

DB_KEY = 'homefinder_db'

COLLECTIONS = (
    'users',
    'listings',
    'agents',
    'favorites',
    'conversations',
    'savedSearches',
    'passwordResetTokens',
)

_BASE36 = string.digits + string.ascii_lowercase

Record = Dict[str, Any]


def _to_base36(n: int) -> str:
    if n == 0:
        return '0'
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return ''.join(reversed(digits))


def generate_id() -> str:
    """Millisecond timestamp in base 36 plus a 5-character random suffix."""
    suffix = ''.join(random.choices(_BASE36, k=5))
    return _to_base36(int(time.time() * 1000)) + suffix


class CollectionStore:
    """
    Collection manager for the simulated backend.

    Lazily initialized: the first access loads the persisted blob, or seeds
    a fresh database when nothing usable is stored.
    """

    def __init__(self, kv: KeyValueStore, key: str = DB_KEY,
                 seed_factory: Callable[[], Dict[str, List[Record]]] = build_seed_database):
        """
        Args:
            kv: Backend holding the serialized database
            key: Storage key for the database blob
            seed_factory: Builds the initial database when none is stored
        """
        self.kv = kv
        self.key = key
        self._seed_factory = seed_factory
        self._db: Optional[Dict[str, List[Record]]] = None

    @property
    def is_ready(self) -> bool:
        return self._db is not None

    def _ensure_ready(self) -> Dict[str, List[Record]]:
        if self._db is None:
            self._db = self._initialize()
        return self._db

    def _initialize(self) -> Dict[str, List[Record]]:
        stored = self.kv.load(self.key)
        if isinstance(stored, dict):
            db = {}
            for name in COLLECTIONS:
                items = stored.get(name)
                # Collections added after the blob was written start empty
                db[name] = items if isinstance(items, list) else []
            logger.info(f"Loaded database from storage key {self.key}")
            return db

        if stored is not None:
            logger.warning(f"Ignoring malformed database blob under {self.key}")

        seeded = self._seed_factory()
        db = {name: list(seeded.get(name, [])) for name in COLLECTIONS}
        self.kv.save(self.key, db)
        logger.info(f"Seeded new database under storage key {self.key}")
        return db

    def _check_name(self, name: str) -> None:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")

    def _persist(self) -> None:
        self.kv.save(self.key, self._db)

    # ==========================================================================
    # Collection access
    # ==========================================================================

    def get_all(self, name: str) -> List[Record]:
        """Current records of a collection. Do not mutate the returned list."""
        self._check_name(name)
        return self._ensure_ready()[name]

    def replace_all(self, name: str, items: List[Record]) -> None:
        """
        Replace a collection and persist the whole database.

        Raises ValidationError, leaving memory and storage untouched, when a
        record holds a value JSON cannot represent.
        """
        self._check_name(name)
        items = list(items)
        try:
            json.dumps(items)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Cannot store {name}: {e}")

        db = self._ensure_ready()
        db[name] = items
        self._persist()

    def update(self, name: str, transform: Callable[[List[Record]], List[Record]]) -> None:
        """Read-transform-write a collection. The only mutation path services use."""
        self.replace_all(name, transform(self.get_all(name)))

    def find(self, name: str, predicate: Callable[[Record], bool]) -> Optional[Record]:
        """First record matching `predicate`, or None."""
        return next((r for r in self.get_all(name) if predicate(r)), None)

    # ==========================================================================
    # Maintenance
    # ==========================================================================

    def reset(self) -> None:
        """Drop persisted data and re-seed."""
        self.kv.remove(self.key)
        self._db = None
        self._ensure_ready()
        logger.info("Database reset to seed data")

    def counts(self) -> Dict[str, int]:
        db = self._ensure_ready()
        return {name: len(db[name]) for name in COLLECTIONS}

"""
Application container.

Builds the storage backend, the collection store and every service once,
and hands the same store to each service.
"""

import logging
from typing import Any, Dict, Optional

from homefinder.core.database import CollectionStore
from homefinder.core.kv_store import JsonFileStore, KeyValueStore, MemoryStore
from homefinder.services import (
    AuthService,
    ChatService,
    EmailService,
    ListingService,
    SavedSearchService,
    SessionStore,
    UserService,
)
from homefinder.utils.config import get_data_dir, load_config

logger = logging.getLogger(__name__)


def create_kv_store(config: Dict[str, Any]) -> KeyValueStore:
    storage = config.get('storage', {})
    backend = storage.get('backend', 'file')
    if backend == 'memory':
        return MemoryStore()
    if backend == 'file':
        return JsonFileStore(get_data_dir(config))
    raise ValueError(f"Unknown storage backend: {backend}")


class Homefinder:
    """Wired store and services for one process."""

    def __init__(self, config: Dict[str, Any], kv: Optional[KeyValueStore] = None):
        self.config = config
        self.kv = kv or create_kv_store(config)
        self.store = CollectionStore(self.kv)

        scale = float(config.get('latency', {}).get('scale', 1.0))
        ttl = int(config.get('auth', {}).get('reset_token_ttl_minutes', 60))

        self.email = EmailService()
        self.session = SessionStore(self.kv)
        self.auth = AuthService(self.store, self.session, self.email,
                                latency_scale=scale, reset_token_ttl_minutes=ttl)
        self.listings = ListingService(self.store, scale)
        self.chat = ChatService(self.store, scale)
        self.users = UserService(self.store, scale)
        self.saved_searches = SavedSearchService(self.store, scale)

        logger.debug(f"Homefinder ready (backend={config.get('storage', {}).get('backend')}, latency x{scale})")


def create_app(config: Optional[Dict[str, Any]] = None, kv: Optional[KeyValueStore] = None) -> Homefinder:
    """Build the app from `config`, or from load_config() when omitted."""
    return Homefinder(config if config is not None else load_config(), kv=kv)

"""
Homefinder Core Package

Simulated backend storage:
- Key-value blob storage
- Collection store with seed fixtures
- Entity models
- Error types and the result envelope
"""

from homefinder.core.database import CollectionStore, COLLECTIONS, generate_id
from homefinder.core.kv_store import KeyValueStore, JsonFileStore, MemoryStore
from homefinder.core.result import ServiceResult
from homefinder.core.exceptions import ErrorKind, HomefinderError

__all__ = [
    "CollectionStore",
    "COLLECTIONS",
    "generate_id",
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "ServiceResult",
    "ErrorKind",
    "HomefinderError",
]

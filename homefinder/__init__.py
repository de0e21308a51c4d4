"""
Homefinder
Real-estate classifieds back end, simulated in-process.

Listings search and posting, favorites, saved searches, buyer-agent chat
and account management over a local JSON key-value store.
"""

__version__ = "0.1.0"

from .app import Homefinder, create_app
from .core.database import CollectionStore

__all__ = ["Homefinder", "create_app", "CollectionStore"]

"""
Listing state coordinator.

Caches listings and the current user's favorites in memory and keeps the
cache in step with listing service results.
"""

import logging
import math
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple, Union

from homefinder.core.models import Favorite, Listing, ListingFilters
from homefinder.services.listing_service import ListingService

from .auth_state import AuthState

logger = logging.getLogger(__name__)

LISTINGS_PER_PAGE = 9


class ListingState:
    """In-memory listings/favorites for the UI layer."""

    def __init__(self, listings: ListingService, auth: AuthState):
        self.service = listings
        self.auth = auth
        self.listings: List[Listing] = []
        self.favorites: List[Favorite] = []
        self.loading = False
        self.error: Optional[str] = None

    @property
    def user(self):
        return self.auth.user

    @contextmanager
    def _busy(self):
        self.loading = True
        self.error = None
        try:
            yield
        except Exception:
            logger.exception("Unexpected listing error")
            self.error = 'An unexpected error occurred.'
            raise
        finally:
            self.loading = False

    def _replace_cached(self, listing: Listing) -> None:
        self.listings = [listing if l.id == listing.id else l for l in self.listings]

    # ==========================================================================
    # Listings
    # ==========================================================================

    async def fetch_listings(self, filters: Union[ListingFilters, Dict[str, Any], None] = None) -> None:
        if not isinstance(filters, ListingFilters):
            filters = ListingFilters.from_dict(filters)

        with self._busy():
            result = await self.service.list(filters)
            if result.success:
                self.listings = result.data
            else:
                self.error = result.message or 'Failed to fetch listings.'

    async def get_listing_details(self, listing_id: str) -> Optional[Listing]:
        with self._busy():
            result = await self.service.get_by_id(listing_id)
            if not result.success:
                self.error = result.message or 'Listing not found.'
                return None
            self._replace_cached(result.data)
            return result.data

    async def add_listing(self, fields: Dict[str, Any]) -> Optional[Listing]:
        with self._busy():
            result = await self.service.create(fields)
            if not result.success:
                self.error = result.message or 'Failed to add listing.'
                return None
            self.listings = [result.data, *self.listings]
            return result.data

    async def update_listing(self, listing_id: str, fields: Dict[str, Any]) -> Optional[Listing]:
        with self._busy():
            result = await self.service.update(listing_id, fields)
            if not result.success:
                self.error = result.message or 'Failed to update listing.'
                return None
            self._replace_cached(result.data)
            return result.data

    async def delete_listing(self, listing_id: str) -> bool:
        with self._busy():
            result = await self.service.delete(listing_id)
            if not result.success:
                self.error = result.message or 'Failed to delete listing.'
                return False
            self.listings = [l for l in self.listings if l.id != listing_id]
            self.favorites = [f for f in self.favorites if f.listing_id != listing_id]
            return True

    async def increment_contact_clicks(self, listing_id: str) -> None:
        result = await self.service.increment_contact_clicks(listing_id)
        if result.success:
            self.listings = [
                replace(l, contact_clicks=l.contact_clicks + 1) if l.id == listing_id else l
                for l in self.listings
            ]

    async def toggle_listing_visibility(self, listing_id: str, is_hidden: bool) -> Optional[Listing]:
        with self._busy():
            result = await self.service.toggle_visibility(listing_id, is_hidden)
            if not result.success:
                self.error = result.message or 'Failed to update listing visibility.'
                return None
            self._replace_cached(result.data)
            return result.data

    def page(self, number: int, per_page: int = LISTINGS_PER_PAGE) -> Tuple[List[Listing], int]:
        """Slice of cached listings for a 1-based page number, plus the page count."""
        total_pages = math.ceil(len(self.listings) / per_page) if per_page > 0 else 0
        number = min(max(number, 1), max(total_pages, 1))
        start = (number - 1) * per_page
        return self.listings[start:start + per_page], total_pages

    # ==========================================================================
    # Favorites
    # ==========================================================================

    async def fetch_favorites(self) -> None:
        if not self.user:
            self.favorites = []
            return

        with self._busy():
            result = await self.service.list_favorites(self.user.id)
            if result.success:
                self.favorites = result.data
            else:
                self.error = result.message or 'Failed to fetch favorites.'

    async def add_favorite(self, listing_id: str) -> bool:
        if not self.user:
            self.error = 'You must be logged in to save listings.'
            return False

        with self._busy():
            result = await self.service.add_favorite(self.user.id, listing_id)
            if not result.success:
                self.error = result.message or 'Could not save listing.'
                return False
            self.favorites = [*self.favorites, result.data]
            return True

    async def remove_favorite(self, listing_id: str) -> bool:
        if not self.user:
            return False

        with self._busy():
            result = await self.service.remove_favorite(self.user.id, listing_id)
            if not result.success:
                self.error = result.message or 'Could not remove saved listing.'
                return False
            self.favorites = [f for f in self.favorites if f.listing_id != listing_id]
            return True

    def is_favorite(self, listing_id: str) -> bool:
        if not self.user:
            return False
        return any(f.user_id == self.user.id and f.listing_id == listing_id for f in self.favorites)

"""
Listing Service

Search, CRUD, counters and moderation for property listings, plus the
favorites join collection.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from homefinder.core.database import generate_id
from homefinder.core.exceptions import ConflictError, NotFoundError, ValidationError
from homefinder.core.models import Favorite, Listing, ListingFilters, ListingStatus
from homefinder.core.result import ServiceResult

from .base import BaseService, FAST, STANDARD, WRITE, now_iso, parse_iso, service_call

logger = logging.getLogger(__name__)

# Assigned by the service on create; caller values are discarded
SERVER_FIELDS = ('id', 'posted_at', 'status', 'views', 'contact_clicks', 'is_hidden')

FiltersArg = Optional[Union[ListingFilters, Dict[str, Any]]]


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle.lower() in (haystack or '').lower()


def matches_filters(listing: Dict[str, Any], filters: ListingFilters) -> bool:
    """True when a stored listing satisfies every set criterion."""
    if not filters.include_hidden and listing.get('is_hidden'):
        return False
    if filters.type and listing['type'] != filters.type.value:
        return False
    if filters.property_type and listing['property_type'] != filters.property_type.value:
        return False
    if filters.min_price is not None and listing['price'] < filters.min_price:
        return False
    if filters.max_price is not None and listing['price'] > filters.max_price:
        return False
    if filters.min_area is not None and listing['area'] < filters.min_area:
        return False
    if filters.max_area is not None and listing['area'] > filters.max_area:
        return False
    if filters.bedrooms is not None and listing['bedrooms'] < filters.bedrooms:
        return False
    if filters.district and not _contains(listing.get('district'), filters.district):
        return False
    if filters.city and not _contains(listing.get('city'), filters.city):
        return False
    if filters.search_query:
        query = filters.search_query
        if not (_contains(listing.get('title'), query)
                or _contains(listing.get('description'), query)
                or _contains(listing.get('address'), query)):
            return False
    return True


def _newest_first(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(records, key=lambda r: parse_iso(r['posted_at']), reverse=True)


def _to_listing(record: Dict[str, Any]) -> Listing:
    try:
        return Listing.from_dict(record)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid listing data: {e}")


class ListingService(BaseService):
    """Listings and favorites."""

    def _get_record(self, listing_id: str) -> Dict[str, Any]:
        record = self.store.find('listings', lambda l: l['id'] == listing_id)
        if not record:
            raise NotFoundError('Listing not found.')
        return record

    def _replace_record(self, updated: Dict[str, Any]) -> None:
        self.store.update(
            'listings',
            lambda listings: [updated if l['id'] == updated['id'] else l for l in listings],
        )

    # ==========================================================================
    # Listings
    # ==========================================================================

    @service_call(STANDARD)
    def list(self, filters: FiltersArg = None) -> ServiceResult[List[Listing]]:
        if not isinstance(filters, ListingFilters):
            try:
                filters = ListingFilters.from_dict(filters)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid filters: {e}")

        records = [l for l in self.store.get_all('listings') if matches_filters(l, filters)]
        return ServiceResult.ok([_to_listing(r) for r in _newest_first(records)])

    @service_call(STANDARD)
    def get_by_id(self, listing_id: str) -> ServiceResult[Listing]:
        """Fetch a listing for its detail page. Every call counts as a view."""
        record = self._get_record(listing_id)
        updated = {**record, 'views': (record.get('views') or 0) + 1}
        self._replace_record(updated)
        return ServiceResult.ok(_to_listing(updated))

    @service_call(WRITE)
    def create(self, fields: Dict[str, Any]) -> ServiceResult[Listing]:
        values = {k: v for k, v in fields.items() if k not in SERVER_FIELDS}
        listing = _to_listing({
            **values,
            'id': generate_id(),
            'posted_at': now_iso(),
            'status': ListingStatus.ACTIVE.value,
            'views': 0,
            'contact_clicks': 0,
            'is_hidden': False,
        })
        record = listing.to_dict()
        self.store.update('listings', lambda listings: [*listings, record])

        logger.info(f"Listing {listing.id} created by {listing.posted_by_user_id}")
        return ServiceResult.ok(listing)

    @service_call(WRITE)
    def update(self, listing_id: str, fields: Dict[str, Any]) -> ServiceResult[Listing]:
        """Shallow-merge `fields` over the stored listing. Values are not range-checked."""
        record = self._get_record(listing_id)
        changes = {k: v for k, v in fields.items() if k != 'id'}
        listing = _to_listing({**record, **changes})
        self._replace_record(listing.to_dict())
        return ServiceResult.ok(listing)

    @service_call(STANDARD)
    def delete(self, listing_id: str) -> ServiceResult[None]:
        self._get_record(listing_id)
        self.store.update('listings', lambda listings: [l for l in listings if l['id'] != listing_id])
        self.store.update('favorites', lambda favs: [f for f in favs if f['listing_id'] != listing_id])

        logger.info(f"Listing {listing_id} deleted")
        return ServiceResult.ok(message='Listing deleted successfully.')

    @service_call(FAST)
    def increment_contact_clicks(self, listing_id: str) -> ServiceResult[Listing]:
        record = self._get_record(listing_id)
        updated = {**record, 'contact_clicks': (record.get('contact_clicks') or 0) + 1}
        self._replace_record(updated)
        return ServiceResult.ok(_to_listing(updated), 'Contact clicks incremented.')

    @service_call(STANDARD)
    def toggle_visibility(self, listing_id: str, is_hidden: bool) -> ServiceResult[Listing]:
        """Hide or show a listing. Callers are responsible for admin checks."""
        record = self._get_record(listing_id)
        updated = {**record, 'is_hidden': bool(is_hidden)}
        self._replace_record(updated)

        logger.info(f"Listing {listing_id} {'hidden' if is_hidden else 'shown'}")
        return ServiceResult.ok(_to_listing(updated))

    @service_call(STANDARD)
    def list_by_owner(self, user_id: str) -> ServiceResult[List[Listing]]:
        records = [l for l in self.store.get_all('listings') if l.get('posted_by_user_id') == user_id]
        return ServiceResult.ok([_to_listing(r) for r in _newest_first(records)])

    @service_call(STANDARD)
    def agent_stats(self, user_id: str) -> ServiceResult[Dict[str, int]]:
        """Totals across every listing an agent posted."""
        owned = [l for l in self.store.get_all('listings') if l.get('posted_by_user_id') == user_id]
        return ServiceResult.ok({
            'total_listings': len(owned),
            'total_views': sum(l.get('views') or 0 for l in owned),
            'total_contact_clicks': sum(l.get('contact_clicks') or 0 for l in owned),
        })

    # ==========================================================================
    # Favorites
    # ==========================================================================

    @service_call(STANDARD)
    def list_favorites(self, user_id: str) -> ServiceResult[List[Favorite]]:
        favorites = [f for f in self.store.get_all('favorites') if f['user_id'] == user_id]
        return ServiceResult.ok([Favorite.from_dict(f) for f in favorites])

    @service_call(STANDARD)
    def list_favorite_listings(self, user_id: str) -> ServiceResult[List[Listing]]:
        """Listings the user favorited, newest listing first."""
        favorited = {f['listing_id'] for f in self.store.get_all('favorites') if f['user_id'] == user_id}
        records = [l for l in self.store.get_all('listings') if l['id'] in favorited]
        return ServiceResult.ok([_to_listing(r) for r in _newest_first(records)])

    @service_call(STANDARD)
    def add_favorite(self, user_id: str, listing_id: str) -> ServiceResult[Favorite]:
        existing = self.store.find(
            'favorites', lambda f: f['user_id'] == user_id and f['listing_id'] == listing_id
        )
        if existing:
            raise ConflictError('Listing already in favorites.')

        favorite = Favorite(
            id=generate_id(),
            user_id=user_id,
            listing_id=listing_id,
            created_at=now_iso(),
        )
        self.store.update('favorites', lambda favs: [*favs, favorite.to_dict()])
        return ServiceResult.ok(favorite)

    @service_call(STANDARD)
    def remove_favorite(self, user_id: str, listing_id: str) -> ServiceResult[None]:
        def is_target(f):
            return f['user_id'] == user_id and f['listing_id'] == listing_id

        if not self.store.find('favorites', is_target):
            raise NotFoundError('Favorite not found.')

        self.store.update('favorites', lambda favs: [f for f in favs if not is_target(f)])
        return ServiceResult.ok(message='Listing removed from favorites.')

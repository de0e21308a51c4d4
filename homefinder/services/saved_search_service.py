"""
Saved Search Service

Named listing filters a user can re-run later.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from homefinder.core.database import generate_id
from homefinder.core.exceptions import NotFoundError, ValidationError
from homefinder.core.models import ListingFilters, SavedSearch
from homefinder.core.result import ServiceResult

from .base import BaseService, STANDARD, now_iso, parse_iso, service_call

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    name = (name or '').strip()
    if not name:
        raise ValidationError('Search name is required.')
    return name


class SavedSearchService(BaseService):

    def _owned(self, search_id: str, user_id: str) -> Dict[str, Any]:
        record = self.store.find(
            'savedSearches', lambda s: s['id'] == search_id and s['user_id'] == user_id
        )
        if not record:
            raise NotFoundError('Saved search not found.')
        return record

    @service_call(STANDARD)
    def list(self, user_id: str) -> ServiceResult[List[SavedSearch]]:
        searches = [s for s in self.store.get_all('savedSearches') if s['user_id'] == user_id]
        searches.sort(key=lambda s: parse_iso(s['created_at']), reverse=True)
        return ServiceResult.ok([SavedSearch.from_dict(s) for s in searches])

    @service_call(STANDARD)
    def save(self, user_id: str, name: str,
             filters: Union[ListingFilters, Dict[str, Any], None] = None) -> ServiceResult[SavedSearch]:
        if not isinstance(filters, ListingFilters):
            try:
                filters = ListingFilters.from_dict(filters)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid filters: {e}")

        search = SavedSearch(
            id=generate_id(),
            user_id=user_id,
            name=_clean_name(name),
            created_at=now_iso(),
            filters=filters.to_dict(),
        )
        self.store.update('savedSearches', lambda searches: [*searches, search.to_dict()])

        logger.info(f"User {user_id} saved search {search.id} ({search.name})")
        return ServiceResult.ok(search)

    @service_call(STANDARD)
    def rename(self, search_id: str, user_id: str, name: str) -> ServiceResult[SavedSearch]:
        record = self._owned(search_id, user_id)
        updated = {**record, 'name': _clean_name(name)}
        self.store.update(
            'savedSearches',
            lambda searches: [updated if s['id'] == search_id else s for s in searches],
        )
        return ServiceResult.ok(SavedSearch.from_dict(updated))

    @service_call(STANDARD)
    def delete(self, search_id: str, user_id: str) -> ServiceResult[None]:
        self._owned(search_id, user_id)
        self.store.update('savedSearches', lambda searches: [s for s in searches if s['id'] != search_id])
        return ServiceResult.ok(message='Saved search deleted.')

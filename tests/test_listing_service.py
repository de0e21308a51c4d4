"""Listing service: search filters, counters, CRUD, favorites."""

from decimal import Decimal

import pytest

from homefinder.app import create_app
from homefinder.core.exceptions import ErrorKind
from homefinder.core.models import ListingFilters, ListingStatus, ListingType, PropertyType, UserRole
from homefinder.services.listing_service import matches_filters


def _ids(result):
    return [l.id for l in result.data]


class TestSearch:
    def test_default_hides_hidden_listings(self, app, run):
        result = run(app.listings.list())
        assert result.success
        assert 'listing-5' not in _ids(result)
        assert all(not l.is_hidden for l in result.data)

    def test_include_hidden(self, app, run):
        result = run(app.listings.list({'include_hidden': True}))
        assert 'listing-5' in _ids(result)

    def test_sorted_newest_first(self, app, run):
        result = run(app.listings.list({'include_hidden': True}))
        posted = [l.posted_at for l in result.data]
        assert posted == sorted(posted, reverse=True)

    @pytest.mark.parametrize('filters', [
        {'type': 'rent'},
        {'property_type': 'villa'},
        {'min_price': 1_000_000_000, 'max_price': 5_000_000_000},
        {'min_area': 90, 'max_area': 120},
        {'bedrooms': 3},
        {'district': 'quận'},
        {'city': 'hồ chí minh'},
        {'search_query': 'VĂN PHÒNG'},
        {'type': 'sale', 'city': 'Hồ Chí Minh', 'bedrooms': 2},
    ])
    def test_every_result_satisfies_every_predicate(self, app, run, filters):
        parsed = ListingFilters.from_dict(filters)
        result = run(app.listings.list(filters))

        assert result.success
        assert result.data
        for listing in result.data:
            assert matches_filters(listing.to_dict(), parsed)

        excluded = [
            l for l in app.store.get_all('listings')
            if l['id'] not in _ids(result) and not l['is_hidden']
        ]
        assert all(not matches_filters(l, parsed) for l in excluded)

    def test_search_query_matches_address(self, app, run):
        result = run(app.listings.list(ListingFilters(search_query='lê văn sỹ')))
        assert _ids(result) == ['listing-2']

    def test_price_and_area_scenario(self, app, run, sample_listing):
        agent = run(app.auth.signup('Agent', 'agent1@example.com', '0900', 'pw', UserRole.AGENT)).data
        created = run(app.listings.create({**sample_listing, 'posted_by_user_id': agent.id})).data

        in_range = run(app.listings.list({'min_price': 1_000_000_000, 'max_price': 3_000_000_000}))
        too_small = run(app.listings.list({'min_area': 100}))

        assert created.id in _ids(in_range)
        assert created.id not in _ids(too_small)

    def test_invalid_enum_filter(self, app, run):
        result = run(app.listings.list({'type': 'auction'}))
        assert not result.success
        assert result.error == ErrorKind.VALIDATION


class TestCounters:
    def test_each_fetch_counts_a_view(self, app, run):
        before = app.store.find('listings', lambda l: l['id'] == 'listing-1')['views']
        last = None
        for _ in range(4):
            last = run(app.listings.get_by_id('listing-1'))

        assert last.data.views == before + 4
        assert app.store.find('listings', lambda l: l['id'] == 'listing-1')['views'] == before + 4

    def test_get_missing(self, app, run):
        result = run(app.listings.get_by_id('nope'))
        assert not result.success
        assert result.error == ErrorKind.NOT_FOUND

    def test_contact_clicks_are_separate_from_views(self, app, run):
        record = app.store.find('listings', lambda l: l['id'] == 'listing-3')
        result = run(app.listings.increment_contact_clicks('listing-3'))

        assert result.success
        assert result.data.contact_clicks == record['contact_clicks'] + 1
        assert result.data.views == record['views']

    def test_contact_clicks_missing(self, app, run):
        assert run(app.listings.increment_contact_clicks('nope')).error == ErrorKind.NOT_FOUND


class TestCrud:
    def test_create_assigns_server_fields(self, app, run, sample_listing):
        result = run(app.listings.create({
            **sample_listing,
            'id': 'chosen-by-caller',
            'views': 999,
            'contact_clicks': 5,
            'is_hidden': True,
            'status': 'sold',
        }))

        listing = result.data
        assert result.success
        assert listing.id != 'chosen-by-caller'
        assert listing.views == 0
        assert listing.contact_clicks == 0
        assert listing.is_hidden is False
        assert listing.status == ListingStatus.ACTIVE
        assert listing.posted_at
        assert listing.images == sample_listing['images']

        newest = run(app.listings.list()).data[0]
        assert newest.id == listing.id

    def test_create_missing_fields(self, app, run):
        result = run(app.listings.create({'title': 'Incomplete'}))
        assert not result.success
        assert result.error == ErrorKind.VALIDATION

    def test_update_merges_without_validation(self, app, run):
        result = run(app.listings.update('listing-1', {'price': -5, 'status': 'sold', 'id': 'hijack'}))

        assert result.success
        assert result.data.id == 'listing-1'
        assert result.data.price == -5
        assert result.data.status == ListingStatus.SOLD
        assert result.data.title.startswith('Căn hộ')

    def test_update_missing(self, app, run):
        assert run(app.listings.update('nope', {'price': 1})).error == ErrorKind.NOT_FOUND

    def test_delete_cascades_to_favorites(self, app, run):
        assert app.store.find('favorites', lambda f: f['listing_id'] == 'listing-1')

        result = run(app.listings.delete('listing-1'))

        assert result.success
        assert not app.store.find('listings', lambda l: l['id'] == 'listing-1')
        assert not app.store.find('favorites', lambda f: f['listing_id'] == 'listing-1')

    def test_delete_missing(self, app, run):
        assert run(app.listings.delete('nope')).error == ErrorKind.NOT_FOUND

    def test_toggle_visibility(self, app, run):
        hidden = run(app.listings.toggle_visibility('listing-2', True))
        assert hidden.data.is_hidden
        assert 'listing-2' not in _ids(run(app.listings.list()))

        shown = run(app.listings.toggle_visibility('listing-2', False))
        assert not shown.data.is_hidden
        assert 'listing-2' in _ids(run(app.listings.list()))

    def test_owner_listings_and_stats(self, app, run):
        owned = run(app.listings.list_by_owner('user-agent-1'))
        assert set(_ids(owned)) == {'listing-1', 'listing-2', 'listing-5'}

        stats = run(app.listings.agent_stats('user-agent-1')).data
        assert stats == {
            'total_listings': 3,
            'total_views': 120 + 64 + 12,
            'total_contact_clicks': 8 + 5 + 0,
        }


class TestFavorites:
    def test_duplicate_favorite_is_rejected(self, app, run):
        first = run(app.listings.add_favorite('user-buyer-1', 'listing-2'))
        second = run(app.listings.add_favorite('user-buyer-1', 'listing-2'))

        assert first.success
        assert not second.success
        assert second.error == ErrorKind.CONFLICT

        favorites = run(app.listings.list_favorites('user-buyer-1')).data
        assert [f.listing_id for f in favorites].count('listing-2') == 1

    def test_remove_favorite(self, app, run):
        assert run(app.listings.remove_favorite('user-buyer-1', 'listing-1')).success
        assert run(app.listings.list_favorites('user-buyer-1')).data == []

        again = run(app.listings.remove_favorite('user-buyer-1', 'listing-1'))
        assert again.error == ErrorKind.NOT_FOUND

    def test_favorite_listings(self, app, run):
        run(app.listings.add_favorite('user-buyer-1', 'listing-3'))
        result = run(app.listings.list_favorite_listings('user-buyer-1'))
        assert _ids(result) == ['listing-1', 'listing-3']


def test_envelope_shape(app, run):
    ok = run(app.listings.get_by_id('listing-4')).to_dict()
    assert ok['success'] is True
    assert ok['data']['type'] == ListingType.SALE.value
    assert ok['data']['property_type'] == PropertyType.VILLA.value

    failed = run(app.listings.get_by_id('nope')).to_dict()
    assert failed == {'success': False, 'message': 'Listing not found.', 'error': 'not_found'}


def test_unstorable_update_fails_and_keeps_file_data(tmp_path, run):
    config = {
        'storage': {'backend': 'file', 'path': str(tmp_path)},
        'latency': {'scale': 0},
    }
    app = create_app(config)
    run(app.auth.signup('Keep', 'keep@example.com', '0900', 'pw'))

    result = run(app.listings.update('listing-1', {'price': Decimal('5')}))
    later = run(app.auth.signup('Later', 'later@example.com', '0900', 'pw'))

    assert result.error == ErrorKind.VALIDATION
    assert later.success

    reopened = create_app(config)
    emails = {u['email'] for u in reopened.store.get_all('users')}
    assert {'keep@example.com', 'later@example.com'} <= emails
    assert reopened.store.find('listings', lambda l: l['id'] == 'listing-1')['price'] == 4_500_000_000

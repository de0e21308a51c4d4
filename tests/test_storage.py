"""Key-value store and collection store behaviour."""

import json
from decimal import Decimal

import pytest

from homefinder.core.database import COLLECTIONS, DB_KEY, CollectionStore, generate_id
from homefinder.core.exceptions import ValidationError
from homefinder.core.kv_store import JsonFileStore, MemoryStore
from homefinder.core.seed import build_seed_database


class TestJsonFileStore:
    def test_missing_key_is_absent(self, tmp_path):
        kv = JsonFileStore(tmp_path)
        assert kv.load('nothing') is None

    def test_save_and_load(self, tmp_path):
        kv = JsonFileStore(tmp_path)
        kv.save('blob', {'users': [{'id': 'u1', 'name': 'Đức'}]})
        assert kv.load('blob') == {'users': [{'id': 'u1', 'name': 'Đức'}]}

    def test_corrupt_file_is_absent(self, tmp_path):
        (tmp_path / 'blob.json').write_text('{not json', encoding='utf-8')
        kv = JsonFileStore(tmp_path)
        assert kv.load('blob') is None

    def test_remove_missing_key_is_noop(self, tmp_path):
        kv = JsonFileStore(tmp_path)
        kv.remove('nothing')
        kv.save('blob', [1])
        kv.remove('blob')
        assert kv.load('blob') is None

    def test_unserializable_value_keeps_previous_blob(self, tmp_path):
        kv = JsonFileStore(tmp_path)
        kv.save('blob', {'users': [{'id': 'keep'}]})

        kv.save('blob', {'users': [{'id': 'keep', 'price': Decimal('5')}]})

        assert kv.load('blob') == {'users': [{'id': 'keep'}]}
        assert sorted(p.name for p in tmp_path.iterdir()) == ['blob.json']


class TestCollectionStore:
    def test_seeds_and_persists_on_first_access(self):
        kv = MemoryStore()
        store = CollectionStore(kv)
        assert not store.is_ready

        users = store.get_all('users')

        assert store.is_ready
        assert len(users) == len(build_seed_database()['users'])
        assert set(kv.load(DB_KEY).keys()) == set(COLLECTIONS)

    def test_loads_existing_blob_and_fills_missing_collections(self):
        kv = MemoryStore({DB_KEY: {'users': [{'id': 'only'}], 'listings': []}})
        store = CollectionStore(kv)

        assert store.get_all('users') == [{'id': 'only'}]
        assert store.get_all('savedSearches') == []
        assert store.get_all('passwordResetTokens') == []

    def test_corrupt_blob_falls_back_to_seed(self):
        kv = MemoryStore()
        kv.save_raw(DB_KEY, '{broken')
        store = CollectionStore(kv)

        assert len(store.get_all('listings')) == len(build_seed_database()['listings'])
        assert kv.load(DB_KEY) is not None

    def test_update_persists_whole_database(self):
        kv = MemoryStore()
        store = CollectionStore(kv)
        store.update('favorites', lambda favs: [*favs, {'id': 'f-new', 'user_id': 'u', 'listing_id': 'l'}])

        reloaded = CollectionStore(kv)
        assert any(f['id'] == 'f-new' for f in reloaded.get_all('favorites'))
        assert len(reloaded.get_all('users')) == len(store.get_all('users'))

    def test_unstorable_records_are_refused(self):
        kv = MemoryStore()
        store = CollectionStore(kv)
        before = store.get_all('listings')

        with pytest.raises(ValidationError):
            store.update('listings', lambda listings: [{**listings[0], 'price': Decimal('5')}])

        assert store.get_all('listings') == before
        assert kv.load(DB_KEY)['listings'] == before

    def test_unknown_collection(self, store):
        with pytest.raises(KeyError):
            store.get_all('bookings')

    def test_reset_restores_seed(self, store):
        store.replace_all('listings', [])
        store.reset()
        assert store.counts()['listings'] == len(build_seed_database()['listings'])

    def test_file_backed_round_trip(self, tmp_path):
        store = CollectionStore(JsonFileStore(tmp_path))
        store.update('users', lambda users: [u for u in users if u['role'] != 'admin'])

        with open(tmp_path / f'{DB_KEY}.json', encoding='utf-8') as f:
            saved = json.load(f)
        assert all(u['role'] != 'admin' for u in saved['users'])


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(100)}
    assert len(ids) == 100

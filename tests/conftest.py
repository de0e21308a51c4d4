"""
pytest configuration and fixtures for homefinder tests.
"""
import asyncio
import sys
from pathlib import Path

import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from homefinder.app import create_app
from homefinder.core.database import CollectionStore
from homefinder.core.kv_store import MemoryStore


@pytest.fixture
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def test_config(tmp_path):
    """Config for an isolated in-memory app with no simulated latency."""
    return {
        'storage': {'backend': 'memory', 'path': str(tmp_path / 'data')},
        'latency': {'scale': 0},
        'auth': {'reset_token_ttl_minutes': 60},
        'logging': {'level': 'DEBUG', 'file': None},
    }


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def app(test_config, kv):
    """Fully wired app on a fresh seeded in-memory store."""
    return create_app(test_config, kv=kv)


@pytest.fixture
def store(app) -> CollectionStore:
    return app.store


@pytest.fixture
def run():
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run


@pytest.fixture
def sample_listing():
    """Fields an agent submits when posting a listing."""
    return {
        'title': 'Căn hộ mới 2 phòng ngủ',
        'description': 'Nội thất cơ bản, gần chợ và trường học.',
        'price': 2_000_000_000,
        'price_unit': 'VND',
        'type': 'sale',
        'property_type': 'apartment',
        'area': 80,
        'bedrooms': 2,
        'bathrooms': 1,
        'address': '99 Phan Xích Long',
        'district': 'Phú Nhuận',
        'city': 'Hồ Chí Minh',
        'coords': {'lat': 10.8, 'lng': 106.68},
        'images': ['data:image/png;base64,iVBORw0KGgo='],
        'posted_by_user_id': 'user-agent-1',
    }


@pytest.fixture
def env_vars(monkeypatch, tmp_path):
    """Set up test environment variables."""
    monkeypatch.setenv("HOMEFINDER_DATA_DIR", str(tmp_path / "env-data"))
    monkeypatch.setenv("HOMEFINDER_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("HOMEFINDER_LATENCY_SCALE", "0")
    monkeypatch.setenv("HOMEFINDER_LOG_LEVEL", "DEBUG")

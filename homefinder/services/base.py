"""
Shared plumbing for domain services.

Every public service method is a coroutine that waits out a simulated
network round-trip, then runs synchronously against the collection store.
"""

import asyncio
import functools
import logging
from datetime import datetime, timezone
from typing import Optional

from homefinder.core.database import CollectionStore
from homefinder.core.exceptions import HomefinderError
from homefinder.core.result import ServiceResult

logger = logging.getLogger(__name__)

# Base round-trip delays in seconds, scaled by config latency.scale
FAST = 0.1
LOOKUP = 0.2
STANDARD = 0.3
WRITE = 0.5
SLOW = 1.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    return utc_now().isoformat()


def parse_iso(value: str) -> datetime:
    """Parse a stored ISO timestamp; naive values are taken as UTC."""
    dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def service_call(delay: float):
    """
    Decorate a service method returning a ServiceResult.

    Waits `delay * latency_scale` seconds first, and turns a raised
    HomefinderError into a failed result with the matching error kind.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> ServiceResult:
            await self._simulate_latency(delay)
            try:
                return func(self, *args, **kwargs)
            except HomefinderError as e:
                logger.debug(f"{type(self).__name__}.{func.__name__} failed: {e.kind.value}: {e.message}")
                return ServiceResult.fail(e.kind, e.message)
        return wrapper
    return decorator


class BaseService:
    """Holds the injected store and latency settings."""

    def __init__(self, store: CollectionStore, latency_scale: float = 1.0):
        self.store = store
        self.latency_scale = latency_scale

    async def _simulate_latency(self, delay: Optional[float]) -> None:
        seconds = (delay or 0) * self.latency_scale
        # Zero still yields to the event loop, like a resolved network call
        await asyncio.sleep(max(seconds, 0))

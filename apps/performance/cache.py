import logging
import time

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)


class TimedCache:
    """Query-result cache with an explicit time-to-live.

    Entries are stored as ``(payload, stored_at)`` in a Django cache backend
    and treated as absent once ``clock() - stored_at`` reaches ``ttl``.
    There is no locking: concurrent misses both fetch and the last write wins.
    """

    def __init__(self, ttl=None, clock=time.time, alias=None):
        self.ttl = settings.MGNREGA_CACHE_TTL if ttl is None else ttl
        self.clock = clock
        self.alias = alias or settings.MGNREGA_CACHE_ALIAS
        self.backend = caches[self.alias]

    def get(self, key):
        """Return ``(hit, payload)`` for ``key``."""
        entry = self.backend.get(key)
        if entry is None:
            return False, None

        payload, stored_at = entry
        if self.clock() - stored_at >= self.ttl:
            logger.debug(f"Cache entry expired: {key}")
            return False, None

        return True, payload

    def set(self, key, payload):
        self.backend.set(key, (payload, self.clock()), self.ttl)

    def get_or_fetch(self, key, fetch):
        hit, payload = self.get(key)
        if hit:
            logger.info(f"Returning cached data for {key}")
            return payload

        payload = fetch()
        self.set(key, payload)
        return payload

    def clear(self):
        self.backend.clear()
        logger.info(f"Cleared '{self.alias}' cache")

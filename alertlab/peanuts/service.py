"""Read-through / write-through caching in front of the character store.

Reads are served from the cache when present, otherwise loaded from the
database and written to the cache. Writes go to the database first and then
unconditionally replace the cache entry for the persisted id. A missing
character is never cached, so every lookup for it reaches the database.
"""

from __future__ import annotations

import logging

from flask import current_app

from alertlab.observability.metrics import metrics_collector
from alertlab.peanuts.cache import CACHE_NAME, CacheError
from alertlab.peanuts.models import Peanuts
from alertlab.peanuts.repository import PeanutsRepository

logger = logging.getLogger(__name__)


class PeanutsService:
    def __init__(self, repository, cache, fail_open=False, metrics=None):
        """
        :param repository: character store, see ``PeanutsRepository``
        :param cache: cache backend, see ``alertlab.peanuts.cache``
        :param fail_open: degrade to the store when the cache errors instead
            of failing the call
        :param metrics: metrics collector, defaults to the global one
        """
        self.repository = repository
        self.cache = cache
        self.fail_open = fail_open
        self.metrics = metrics or metrics_collector

    def get_by_id(self, peanuts_id: int) -> Peanuts | None:
        cached = self._cache_get(peanuts_id)
        if cached is not None:
            logger.debug("Peanuts cache hit id=%s", peanuts_id)
            self.metrics.record_cache_access(CACHE_NAME, hit=True)
            return Peanuts.from_dict(cached)

        logger.debug("Peanuts cache miss id=%s", peanuts_id)
        self.metrics.record_cache_access(CACHE_NAME, hit=False)

        peanuts = self.repository.find_by_id(peanuts_id)
        if peanuts is not None:
            self._cache_set(peanuts.id, peanuts.to_dict())
        return peanuts

    def save(self, peanuts: Peanuts) -> Peanuts:
        persisted = self.repository.save(peanuts)
        self._cache_set(persisted.id, persisted.to_dict())
        return persisted

    def _cache_get(self, peanuts_id):
        try:
            return self.cache.get(peanuts_id)
        except CacheError as exc:
            self._cache_failed("get", exc)
            return None

    def _cache_set(self, peanuts_id, value):
        try:
            self.cache.set(peanuts_id, value)
        except CacheError as exc:
            self._cache_failed("set", exc)

    def _cache_failed(self, operation, exc):
        """Re-raise a CacheError unless running fail-open."""
        self.metrics.record_cache_error(CACHE_NAME, operation)
        if not self.fail_open:
            raise exc
        logger.warning(
            "Peanuts cache %s failed, falling back to the database: %s",
            operation,
            exc,
        )


def init_service(app, cache):
    """
    Wire the character service into ``app.extensions["peanuts_service"]``.

    :param app: Flask application instance
    :param cache: Cache backend returned by ``init_cache``
    :return: PeanutsService
    """
    service = PeanutsService(
        PeanutsRepository(),
        cache,
        fail_open=bool(app.config.get("PEANUTS_CACHE_FAIL_OPEN", False)),
    )
    app.extensions["peanuts_service"] = service

    return service


def get_service() -> PeanutsService:
    return current_app.extensions["peanuts_service"]

"""Cache backends for Peanuts characters.

Values are the ``Peanuts.to_dict()`` form, keyed by character id. Backends
never cache a missing character and have no eviction policy of their own;
the Redis backend bounds retention with an optional TTL.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

CACHE_NAME = "peanuts"


class CacheError(Exception):
    """The cache backend could not serve a request."""


class MemoryPeanutsCache:
    """Process-local cache for tests and single-process development."""

    def __init__(self):
        self._entries: dict[int, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, peanuts_id: int) -> dict[str, Any] | None:
        with self._lock:
            value = self._entries.get(peanuts_id)
        return dict(value) if value is not None else None

    def set(self, peanuts_id: int, value: dict[str, Any]) -> None:
        with self._lock:
            self._entries[peanuts_id] = dict(value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def ping(self) -> bool:
        return True

    def __len__(self):
        with self._lock:
            return len(self._entries)


class RedisPeanutsCache:
    """Characters stored as JSON strings under ``<key_prefix><id>``."""

    def __init__(self, client: Redis, key_prefix: str = "peanuts::", ttl: int = 0):
        self.client = client
        self.key_prefix = key_prefix
        self.ttl = ttl

    def key(self, peanuts_id: int) -> str:
        return f"{self.key_prefix}{peanuts_id}"

    def get(self, peanuts_id: int) -> dict[str, Any] | None:
        try:
            raw = self.client.get(self.key(peanuts_id))
        except RedisError as exc:
            raise CacheError(f"GET {self.key(peanuts_id)} failed: {exc}") from exc

        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise CacheError(
                f"GET {self.key(peanuts_id)} returned undecodable data: {exc}"
            ) from exc

        if not isinstance(value, dict) or not isinstance(value.get("name"), str):
            raise CacheError(
                f"GET {self.key(peanuts_id)} returned an unexpected value: {value!r}"
            )
        return value

    def set(self, peanuts_id: int, value: dict[str, Any]) -> None:
        payload = json.dumps(value)
        try:
            if self.ttl > 0:
                self.client.set(self.key(peanuts_id), payload, ex=self.ttl)
            else:
                self.client.set(self.key(peanuts_id), payload)
        except RedisError as exc:
            raise CacheError(f"SET {self.key(peanuts_id)} failed: {exc}") from exc

    def clear(self) -> None:
        """Delete every key under this cache's prefix, nothing else."""
        try:
            keys = list(self.client.scan_iter(match=f"{self.key_prefix}*"))
            if keys:
                self.client.delete(*keys)
        except RedisError as exc:
            raise CacheError(f"clearing {self.key_prefix}* failed: {exc}") from exc

        logger.info("Cleared %s cached Peanuts characters", len(keys))

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except RedisError as exc:
            raise CacheError(f"PING failed: {exc}") from exc


def init_cache(app):
    """
    Build the character cache configured for the app and register it
    under ``app.extensions["peanuts_cache"]``.

    :param app: Flask application instance
    :return: Cache backend
    """
    cache_type = app.config.get("PEANUTS_CACHE_TYPE", "redis")

    if cache_type == "memory":
        cache = MemoryPeanutsCache()
    elif cache_type == "redis":
        cache = RedisPeanutsCache(
            Redis.from_url(app.config["REDIS_URL"]),
            key_prefix=app.config.get("PEANUTS_CACHE_KEY_PREFIX", "peanuts::"),
            ttl=int(app.config.get("PEANUTS_CACHE_TTL", 0)),
        )
    else:
        raise ValueError(f"Unknown PEANUTS_CACHE_TYPE: {cache_type!r}")

    app.extensions["peanuts_cache"] = cache
    app.logger.debug("Peanuts cache backend: %s", cache_type)

    return cache

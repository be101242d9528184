"""
Redis-backed key-value store for deployments where REDIS_URL is set.
Implements the same interface as src.database.kv_store (in-memory stub).
"""

from __future__ import annotations

from typing import Optional

import redis


class RedisKeyValueStore:
    def __init__(self, url: Optional[str] = None, namespace: str = "catalog", client=None) -> None:
        if client is None:
            if not url:
                raise ValueError("REDIS_URL is not configured.")
            client = redis.from_url(url, decode_responses=True)
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self._client.get(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self._client.set(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self._client.delete(self._key(key))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

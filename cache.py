import time
import json
import hashlib
import logging
from typing import Any, Optional
from redis.asyncio import from_url as redis_from_url
from config import Settings

LOGGER = logging.getLogger(__name__)


def key_for(kind: str, payload: Any) -> str:
    """Stable key for a rendered document: same request, same key."""
    s = json.dumps([kind, payload], sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return "cynet:" + hashlib.sha1(s.encode("utf-8")).hexdigest()


class _MemoryCache:
    def __init__(self, max_items: int = 512):
        self._store = {}
        self._max_items = max_items

    async def start(self):  # compat
        return

    async def close(self):
        self._store.clear()

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if not entry:
            return None
        expires_at, value = entry
        if expires_at and time.time() > expires_at:
            self._store.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl: int = 60):
        expires_at = time.time() + ttl if ttl else None
        self._store.pop(key, None)
        self._store[key] = (expires_at, value)
        while len(self._store) > self._max_items:
            # dicts keep insertion order: drop the oldest write
            self._store.pop(next(iter(self._store)))


class _RedisCache:
    def __init__(self, url: str):
        self._url = url
        self._client = None

    async def start(self):
        self._client = redis_from_url(self._url, encoding="utf-8", decode_responses=True)

    async def close(self):
        if self._client:
            await self._client.aclose()

    async def get(self, key: str) -> Optional[Any]:
        if not self._client:
            return None
        raw = await self._client.get(key)
        return json.loads(raw) if raw else None

    async def set(self, key: str, value: Any, ttl: int = 60):
        if not self._client:
            return
        await self._client.set(key, json.dumps(value, separators=(",", ":"), ensure_ascii=False), ex=ttl)


def get_cache(settings: Settings):
    if settings.enable_redis_cache:
        LOGGER.info("document cache: redis at %s", settings.redis_url)
        return _RedisCache(settings.redis_url)
    return _MemoryCache()

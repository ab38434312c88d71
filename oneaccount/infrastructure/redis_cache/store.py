from __future__ import annotations

from redis.asyncio import Redis

from oneaccount.domain.errors import EntryNotFound
from oneaccount.domain.ports.store import StorePort


class RedisStore(StorePort):
    """
    Staging shared across processes. Redis expires keys on its own, so there
    is no sweep; GETDEL makes the pickup atomic.
    """

    def __init__(
        self, redis: Redis, *, key_prefix: str = "oa:", ttl_seconds: int = 60
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, uuid: str) -> str:
        return f"{self._prefix}{uuid}"

    async def set(self, key: str, value: bytes) -> None:
        await self._redis.set(self._key(key), value, ex=self._ttl)

    async def get(self, key: str) -> bytes | None:
        value = await self._redis.getdel(self._key(key))
        if value is None:
            raise EntryNotFound(f"no item found or item expired for key: {key}")
        if isinstance(value, str):
            value = value.encode("utf-8")
        return value

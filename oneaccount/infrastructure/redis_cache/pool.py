from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from oneaccount.settings import get_settings

_client: Optional[Redis] = None


def get_redis() -> Redis:
    """
    Lazy singleton Redis client using REDIS_URL from settings.
    decode_responses stays off: staged payloads are raw bytes.
    """
    global _client
    if _client is None:
        _client = Redis.from_url(get_settings().redis_url)
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None

# tests/integration/conftest.py
import os

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(
        os.environ.get("REDIS_URL", "redis://redis:6379/0"), socket_connect_timeout=2
    )
    try:
        await r.ping()
    except (RedisConnectionError, OSError):
        await r.aclose()
        pytest.skip("redis is not reachable")
    try:
        yield r
    finally:
        await r.aclose()

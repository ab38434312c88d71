from oneaccount.config import OneAccount, OneAccountConfig
from oneaccount.domain.ports.store import StorePort
from oneaccount.infrastructure.memory.ttl_store import TTLStore
from oneaccount.infrastructure.redis_cache.pool import get_redis
from oneaccount.infrastructure.redis_cache.store import RedisStore
from oneaccount.settings import Settings


def build_store(settings: Settings) -> StorePort:
    if settings.store_backend == "redis":
        return RedisStore(
            get_redis(),
            key_prefix=settings.redis_key_prefix,
            ttl_seconds=settings.staged_ttl_seconds,
        )
    return TTLStore(
        ttl_seconds=settings.staged_ttl_seconds,
        sweep_interval=settings.sweep_interval_seconds,
    )


def build_oneaccount(settings: Settings) -> OneAccount:
    return OneAccount(
        OneAccountConfig(
            store=build_store(settings),
            verify_url=settings.verify_url,
            verify_timeout=settings.verify_timeout_seconds,
            callback_path=settings.callback_path,
        )
    )


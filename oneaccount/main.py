from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from oneaccount.config import OneAccount
from oneaccount.infrastructure.redis_cache.pool import close_redis
from oneaccount.logging import setup_logging
from oneaccount.presentation.api import build_api
from oneaccount.presentation.dependencies import build_oneaccount
from oneaccount.presentation.middleware import OneAccountMiddleware
from oneaccount.settings import get_settings

settings = get_settings()


def create_app(oneaccount: Optional[OneAccount] = None) -> FastAPI:
    setup_logging(
        settings.log_level,
        app_env=settings.app_env,
        oneaccount_level=settings.oneaccount_log_level,
    )
    oneaccount = oneaccount or build_oneaccount(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup
        oneaccount.start()
        try:
            yield
        finally:
            # shutdown
            await oneaccount.aclose()
            if settings.store_backend == "redis":
                await close_redis()

    app = FastAPI(title="OneAccount Auth", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.oneaccount = oneaccount
    app.add_middleware(OneAccountMiddleware, oneaccount=oneaccount)
    app.include_router(build_api(oneaccount.callback_path))
    return app


app = create_app()

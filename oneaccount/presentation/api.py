from fastapi import APIRouter

from oneaccount.presentation.routes.auth import build_auth_router
from oneaccount.presentation.routes.health import router as health_router


def build_api(callback_path: str) -> APIRouter:
    api = APIRouter()
    routers = [health_router]
    # an empty callback path means the middleware is disabled
    if callback_path.strip("/"):
        routers.append(build_auth_router(callback_path))
    for router in routers:
        api.include_router(router)
    return api

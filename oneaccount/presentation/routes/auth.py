import json
from typing import Annotated

from fastapi import APIRouter, Depends

from oneaccount.presentation.context import require_oneaccount_data
from oneaccount.schemas.responses import AuthorizedOut


async def oneaccount_callback(
    payload: Annotated[bytes, Depends(require_oneaccount_data)],
) -> AuthorizedOut:
    """Reached only once the middleware picked up and verified the staged data."""
    return AuthorizedOut(authenticated=True, data=json.loads(payload))


def build_auth_router(callback_path: str) -> APIRouter:
    router = APIRouter(tags=["Auth"])
    router.add_api_route(
        "/" + callback_path.strip("/"),
        oneaccount_callback,
        methods=["GET", "POST"],
        response_model=AuthorizedOut,
    )
    return router

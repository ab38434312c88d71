from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from oneaccount.config import OneAccount
from oneaccount.domain.errors import OneAccountError
from oneaccount.domain.services import bearer_from_header, identifier_from_body
from oneaccount.presentation.context import DATA_KEY
from oneaccount.schemas.responses import ErrorOut, SuccessOut

logger = logging.getLogger(__name__)


def _replay(body: bytes, receive: Receive) -> Receive:
    """Feed an already-read body to the downstream app, then fall back to receive."""
    sent = False

    async def _receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return _receive


class OneAccountMiddleware:
    """
    Handles requests to the callback path, lets everything else through.

    - no bearer token: the body is staged, response is {"success": true}
    - bearer token: the staged data is picked up and verified, then the
      downstream app runs with the data under DATA_KEY in the scope
    - any failure: 400 {"error": "..."} and the error listener is called
    """

    def __init__(self, app: ASGIApp, oneaccount: OneAccount) -> None:
        self.app = app
        self.oneaccount = oneaccount

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.oneaccount.matches(scope["path"]):
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        token = bearer_from_header(request.headers.get("authorization"))

        if not token:
            try:
                await self.oneaccount.save(await request.body())
            except OneAccountError as e:
                await self._fail(e, scope, receive, send)
                return
            await JSONResponse(SuccessOut().model_dump())(scope, receive, send)
            return

        body: bytes | None = None
        uuid = request.headers.get("uuid", "")
        if not uuid:
            body = await request.body()
            uuid = identifier_from_body(body)

        try:
            payload = await self.oneaccount.authorize(token, uuid)
        except OneAccountError as e:
            await self._fail(e, scope, receive, send)
            return

        scope = dict(scope)
        scope[DATA_KEY] = payload
        if body is not None:
            receive = _replay(body, receive)
        await self.app(scope, receive, send)

    async def _fail(
        self, exc: OneAccountError, scope: Scope, receive: Receive, send: Send
    ) -> None:
        logger.info(
            "oneaccount request rejected",
            extra={"reason": type(exc).__name__, "detail": str(exc)},
        )
        await self.oneaccount.report(exc)
        response = JSONResponse(
            ErrorOut(error=exc.message).model_dump(),
            status_code=400,
            headers={"X-Content-Type-Options": "nosniff"},
        )
        await response(scope, receive, send)

from __future__ import annotations

from typing import Optional
import httpx

from oneaccount.domain.errors import VerificationRejected, VerifierUnavailable
from oneaccount.domain.ports.verifier import VerifierPort

DEFAULT_VERIFY_URL = "https://api.oneaccount.app/widget/verify"


class HttpVerifier(VerifierPort):
    """Asks the OneAccount API whether a bearer token was issued for a uuid."""

    def __init__(
        self,
        verify_url: str = DEFAULT_VERIFY_URL,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._verify_url = verify_url
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def verify(self, token: str, uuid: str) -> None:
        headers = {
            "Content-Type": "application/json",
            "Authorization": "BEARER " + token,
        }
        try:
            resp = await self._client.post(
                self._verify_url, json={"uuid": uuid}, headers=headers
            )
        except httpx.HTTPError as e:
            raise VerifierUnavailable(f"verify HTTP error: {e}") from e

        if resp.status_code != 200:
            raise VerificationRejected(f"verify responded {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise VerifierUnavailable("verify response is not json") from e

        if not isinstance(body, dict) or body.get("success") is not True:
            raise VerificationRejected("verify response is not a success")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

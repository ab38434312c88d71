from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from oneaccount.application.authorize_pickup import authorize_pickup
from oneaccount.application.stage_data import stage_data
from oneaccount.domain.ports.store import Getter, Setter, StorePort
from oneaccount.domain.ports.verifier import VerifierPort
from oneaccount.infrastructure.adapter_store import AdapterStore
from oneaccount.infrastructure.memory.ttl_store import TTLStore
from oneaccount.infrastructure.verifier.http_verifier import (
    DEFAULT_VERIFY_URL,
    HttpVerifier,
)

logger = logging.getLogger(__name__)

DEFAULT_CALLBACK_PATH = "oneaccountauth"

ErrorListener = Callable[[Exception], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class OneAccountConfig:
    """
    Everything needed to build a OneAccount. Unset fields get defaults:

    - store: a TTLStore, unless ``store`` or a ``setter``/``getter`` is given
    - verifier: an HttpVerifier on ``http_client`` (or its own client)
    - callback_path: "oneaccountauth"; an empty string disables interception
    """

    store: Optional[StorePort] = None
    setter: Optional[Setter] = None
    getter: Optional[Getter] = None
    verifier: Optional[VerifierPort] = None
    callback_path: str = DEFAULT_CALLBACK_PATH
    on_error: Optional[ErrorListener] = None
    http_client: Optional[httpx.AsyncClient] = None
    verify_url: str = DEFAULT_VERIFY_URL
    verify_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.store is not None and (
            self.setter is not None or self.getter is not None
        ):
            raise ValueError("pass either store or setter/getter, not both")
        if self.verifier is not None and self.http_client is not None:
            raise ValueError("http_client is only used by the default verifier")
        if not isinstance(self.callback_path, str):
            raise ValueError("callback_path must be a string")


class OneAccount:
    """
    Process-wide staged-auth runtime: owns the store and the verifier and
    drives stage -> pickup -> verify. Shared read-only across requests.
    """

    def __init__(self, config: OneAccountConfig | None = None) -> None:
        config = config or OneAccountConfig()

        if config.store is not None:
            self.store: StorePort = config.store
        elif config.setter is not None or config.getter is not None:
            self.store = AdapterStore(config.setter, config.getter)
        else:
            self.store = TTLStore()

        self._owned_verifier: Optional[HttpVerifier] = None
        if config.verifier is not None:
            self.verifier: VerifierPort = config.verifier
        else:
            self._owned_verifier = HttpVerifier(
                config.verify_url,
                client=config.http_client,
                timeout=config.verify_timeout,
            )
            self.verifier = self._owned_verifier

        self.callback_path = config.callback_path.strip("/")
        self.on_error = config.on_error

    @property
    def enabled(self) -> bool:
        return bool(self.callback_path)

    def matches(self, path: str) -> bool:
        return self.enabled and path.strip("/") == self.callback_path

    async def save(self, body: bytes) -> str:
        return await stage_data(self.store, body)

    async def authorize(self, token: str, uuid: str) -> bytes:
        return await authorize_pickup(self.store, self.verifier, token, uuid)

    async def report(self, exc: Exception) -> None:
        """Hand exc to the error listener; its own failures are only logged."""
        if self.on_error is None:
            return
        try:
            result: Any = self.on_error(exc)
            if inspect.isawaitable(result):
                await result
        except Exception:  # noqa: BLE001
            logger.warning("error listener failed", exc_info=True)

    def start(self) -> None:
        if isinstance(self.store, TTLStore):
            self.store.start()

    async def aclose(self) -> None:
        if isinstance(self.store, TTLStore):
            await self.store.aclose()
        if self._owned_verifier is not None:
            await self._owned_verifier.aclose()

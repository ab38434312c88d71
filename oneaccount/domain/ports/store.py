from __future__ import annotations

from typing import Awaitable, Callable, Protocol, Union

Setter = Callable[[str, bytes], Union[None, Awaitable[None]]]
Getter = Callable[[str], Union[bytes, None, Awaitable[Union[bytes, None]]]]


class StorePort(Protocol):
    async def set(self, key: str, value: bytes) -> None:
        """Stage/replace value under key with a fresh TTL."""

    async def get(self, key: str) -> bytes | None:
        """Return and remove the live value for key.

        Raises EntryNotFound when there is none. At most one call succeeds per
        staged value. Returns None when the calling task is already being
        cancelled.
        """

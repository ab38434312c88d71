from __future__ import annotations

from typing import Protocol


class VerifierPort(Protocol):
    async def verify(self, token: str, uuid: str) -> None:
        """Confirm that token belongs to uuid, raise VerificationError otherwise."""

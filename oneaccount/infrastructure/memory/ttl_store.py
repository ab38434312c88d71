from __future__ import annotations

import asyncio
import logging
import time
from contextlib import suppress
from typing import Callable, Optional

from oneaccount.domain.entities import StagedEntry
from oneaccount.domain.errors import EntryNotFound
from oneaccount.domain.ports.store import StorePort

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 5.0


def _cancel_requested() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class TTLStore(StorePort):
    """
    In-process store where every entry lives for ``ttl_seconds``.

    A background task removes expired entries every ``sweep_interval`` seconds
    so abandoned stagings do not pile up. It starts with the first ``set`` on a
    loop (or an explicit ``start()``) and stops with ``aclose()``. Reads check expiry on their own and
    do not depend on the sweep.

    All access to the mapping, reads included, goes through one lock: ``get``
    deletes what it returns, so two concurrent pickups of the same key see
    exactly one hit.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")
        self._ttl = ttl_seconds
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, StagedEntry] = {}
        self._lock = asyncio.Lock()
        self._sweeper: Optional[asyncio.Task[None]] = None

    def __len__(self) -> int:
        return len(self._entries)

    async def set(self, key: str, value: bytes) -> None:
        # Cancellation is only honoured if it is already pending on entry.
        if _cancel_requested():
            return
        # entries must not outlive their TTL even when nobody called start()
        self.start()
        async with self._lock:
            self._entries[key] = StagedEntry(
                payload=value, expires_at=self._clock() + self._ttl
            )

    async def get(self, key: str) -> bytes | None:
        if _cancel_requested():
            return None
        async with self._lock:
            entry = self._entries.pop(key, None)
            now = self._clock()
        if entry is None or entry.is_expired(now):
            raise EntryNotFound(f"no item found or item expired for key: {key}")
        return entry.payload

    async def sweep(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for k in expired:
                del self._entries[k]
        if expired:
            logger.debug("swept expired entries", extra={"count": len(expired)})
        return len(expired)

    @property
    def running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    def _sweeper_on_current_loop(self) -> bool:
        return (
            self.running
            and self._sweeper.get_loop() is asyncio.get_running_loop()
        )

    def start(self) -> None:
        """Start the sweep task on the running loop (no-op if already running there)."""
        if self._sweeper_on_current_loop():
            return
        self._drop_foreign_sweeper()
        self._sweeper = asyncio.create_task(self._run_sweeper())
        logger.info(
            "ttl store sweeper started",
            extra={"ttl_s": self._ttl, "sweep_interval_s": self._sweep_interval},
        )

    async def _run_sweeper(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                await self.sweep()
            except Exception:  # noqa: BLE001
                logger.exception("ttl store sweep failed")

    def _drop_foreign_sweeper(self) -> None:
        # a sweeper left on another loop can only be cancelled through that loop
        if self._sweeper is None:
            return
        sweeper, self._sweeper = self._sweeper, None
        loop = sweeper.get_loop()
        if not loop.is_closed():
            loop.call_soon_threadsafe(sweeper.cancel)

    async def aclose(self) -> None:
        if self._sweeper is None:
            return
        if self._sweeper.get_loop() is not asyncio.get_running_loop():
            self._drop_foreign_sweeper()
        else:
            sweeper, self._sweeper = self._sweeper, None
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        logger.info("ttl store sweeper stopped")

    async def __aenter__(self) -> "TTLStore":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

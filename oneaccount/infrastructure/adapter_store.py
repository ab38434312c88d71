from __future__ import annotations

import inspect
from typing import Optional

from oneaccount.domain.errors import StoreMisconfigured
from oneaccount.domain.ports.store import Getter, Setter, StorePort


class AdapterStore(StorePort):
    """
    Lets an integrator back staging with any persistence by handing over a
    setter and a getter instead of writing a full store.

    Both functions may be sync or async. The getter owns the consume-once
    guarantee: it must remove what it returns and raise (or return None) when
    nothing is live for the key.
    """

    def __init__(
        self, setter: Optional[Setter] = None, getter: Optional[Getter] = None
    ) -> None:
        self.setter = setter
        self.getter = getter

    async def set(self, key: str, value: bytes) -> None:
        if self.setter is None:
            raise StoreMisconfigured("engine setter is not set")
        result = self.setter(key, value)
        if inspect.isawaitable(result):
            await result

    async def get(self, key: str) -> bytes | None:
        if self.getter is None:
            raise StoreMisconfigured("engine getter is not set")
        result = self.getter(key)
        if inspect.isawaitable(result):
            result = await result
        return result

"""
Hand-off of the recovered payload to handlers behind the middleware.

The middleware writes a single slot, ``DATA_KEY``, in the ASGI scope. It is
the only channel the middleware uses; read it with ``data()`` or the
``require_oneaccount_data`` dependency.
"""
from typing import Optional

from fastapi import HTTPException, Request, status

DATA_KEY = "oneaccount.data"


def data(request: Request) -> Optional[bytes]:
    """Payload staged by the widget, or None if pickup did not happen."""
    value = request.scope.get(DATA_KEY)
    return value if isinstance(value, bytes) else None


def is_authenticated(request: Request) -> bool:
    return data(request) is not None


def require_oneaccount_data(request: Request) -> bytes:
    value = data(request)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="not authenticated"
        )
    return value

import logging

from oneaccount.domain.errors import (
    EntryNotFound,
    MissingBearerToken,
    MissingIdentifier,
    VerificationError,
    VerificationFailed,
)
from oneaccount.domain.ports.store import StorePort
from oneaccount.domain.ports.verifier import VerifierPort

logger = logging.getLogger(__name__)


async def authorize_pickup(
    store: StorePort,
    verifier: VerifierPort,
    token: str,
    uuid: str,
) -> bytes:
    """
    Phase 2: consume the staged data for uuid, then verify the token.

    The entry is removed before verification runs, so a failed verification
    cannot be retried without the widget staging the data again.
    """
    if not token:
        raise MissingBearerToken()
    if not uuid:
        raise MissingIdentifier()

    try:
        payload = await store.get(uuid)
    except EntryNotFound:
        raise
    except Exception as e:  # noqa: BLE001
        logger.warning("store get failed", extra={"error": repr(e)})
        raise EntryNotFound(str(e)) from e
    if payload is None:
        raise EntryNotFound()

    try:
        await verifier.verify(token, uuid)
    except VerificationError as e:
        logger.info(
            "verification failed",
            extra={"reason": type(e).__name__, "error": str(e)},
        )
        raise VerificationFailed(str(e)) from e
    except Exception as e:  # noqa: BLE001
        logger.exception("verifier raised unexpectedly")
        raise VerificationFailed(repr(e)) from e

    return payload

import logging

import oneaccount.domain.services as domain_services
from oneaccount.domain.errors import StoreWriteFailed
from oneaccount.domain.ports.store import StorePort

logger = logging.getLogger(__name__)


async def stage_data(store: StorePort, body: bytes) -> str:
    """Phase 1: keep the widget's data under its uuid until pickup."""
    data = domain_services.parse_json_object(body)
    uuid, payload = domain_services.split_staged_payload(data)

    try:
        await store.set(uuid, payload)
    except Exception as e:  # noqa: BLE001
        logger.warning("store set failed", extra={"error": repr(e)})
        raise StoreWriteFailed(str(e)) from e

    logger.info("data staged", extra={"payload_bytes": len(payload)})
    return uuid

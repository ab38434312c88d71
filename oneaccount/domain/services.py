# oneaccount/domain/services.py
from __future__ import annotations

import json
from typing import Any

from oneaccount.domain.errors import (
    InvalidIdentifier,
    InvalidRequestBody,
    MissingIdentifier,
)

# protocol metadata, never part of the staged payload
RESERVED_FIELDS = ("uuid", "externalId")

BEARER_PREFIX = "BEARER "


def bearer_from_header(value: str | None) -> str | None:
    """
    Extract the token from an Authorization header value.
    The scheme is matched case-insensitively; returns None when it is absent.
    """
    if not value or len(value) < len(BEARER_PREFIX):
        return None
    if value[: len(BEARER_PREFIX)].upper() != BEARER_PREFIX:
        return None
    return value[len(BEARER_PREFIX) :]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json_object(body: bytes) -> dict[str, Any]:
    try:
        # NaN and Infinity are not JSON
        data = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidRequestBody(f"invalid json: {e}") from e
    if not isinstance(data, dict):
        raise InvalidRequestBody(f"expected a json object, got {type(data).__name__}")
    return data


def split_staged_payload(data: dict[str, Any]) -> tuple[str, bytes]:
    """
    Return (uuid, payload) where payload is the JSON object without the
    reserved fields. The input dict is not modified.
    """
    if "uuid" not in data:
        raise MissingIdentifier()
    uuid = data["uuid"]
    if not isinstance(uuid, str) or not uuid:
        raise InvalidIdentifier()

    remainder = {k: v for k, v in data.items() if k not in RESERVED_FIELDS}
    try:
        payload = json.dumps(remainder, separators=(",", ":"), allow_nan=False)
    except ValueError as e:
        raise InvalidRequestBody(str(e)) from e
    return uuid, payload.encode("utf-8")


def identifier_from_body(body: bytes) -> str:
    """Best-effort lookup of the uuid in a pickup request body."""
    if not body:
        return ""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return ""
    if not isinstance(data, dict):
        return ""
    uuid = data.get("uuid")
    return uuid if isinstance(uuid, str) else ""

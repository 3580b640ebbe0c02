"""Normalize and validate client payloads before they reach the repository.

Payload keys are the JSON field names (firstName, lastName, email, phone,
contactType). The legacy key "type" is read as contactType when contactType
itself is not supplied.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from contactbook.application.dto import Invalid
from contactbook.domain import Contact, ContactUpdate

# JSON name -> Contact attribute.
FIELD_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "contactType": "contact_type",
}
CONTACT_TYPE_ALIAS = "type"
REQUIRED_FIELDS = ("firstName", "lastName")


def current_time_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _normalize(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string.")
    value = value.strip()
    if key == "email":
        value = value.lower()
    return value or None


def _normalized_fields(payload: Mapping) -> dict[str, str | None]:
    """Pick the known fields out of payload and normalize them. Unknown keys are dropped."""
    picked = {key: payload[key] for key in FIELD_NAMES if key in payload}
    if "contactType" not in picked and CONTACT_TYPE_ALIAS in payload:
        picked["contactType"] = payload[CONTACT_TYPE_ALIAS]
    return {FIELD_NAMES[key]: _normalize(key, value) for key, value in picked.items()}


def validate_for_create(payload: Any, *, now_ms: int | None = None) -> Contact | Invalid:
    """Build an unsaved Contact (id=None) from payload, or return Invalid.

    firstName and lastName are required and must be non-empty after trimming.
    createdAt is stamped here; any createdAt in the payload is ignored.
    """
    if not isinstance(payload, Mapping):
        return Invalid(reason="Request body must be a JSON object.")
    try:
        fields = _normalized_fields(payload)
    except ValueError as e:
        return Invalid(reason=str(e))

    for key in REQUIRED_FIELDS:
        if not fields.get(FIELD_NAMES[key]):
            return Invalid(reason=f"{key} is required.")

    created_at = now_ms if now_ms is not None else current_time_ms()
    return Contact(created_at=created_at, **fields)


def select_updatable_fields(payload: Any) -> ContactUpdate | Invalid:
    """Project payload onto the mutable fields. Omitted fields stay untouched.

    id, createdAt and any other key are silently dropped. A supplied firstName or
    lastName must still be non-empty.
    """
    if not isinstance(payload, Mapping):
        return Invalid(reason="Request body must be a JSON object.")
    try:
        fields = _normalized_fields(payload)
    except ValueError as e:
        return Invalid(reason=str(e))

    for key in REQUIRED_FIELDS:
        attr = FIELD_NAMES[key]
        if attr in fields and not fields[attr]:
            return Invalid(reason=f"{key} must be non-empty.")

    return ContactUpdate(supplied=frozenset(fields), **fields)

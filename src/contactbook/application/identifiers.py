"""Contact identifier format: 32 lowercase hex chars (uuid4().hex)."""

import re
import uuid

_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def new_contact_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(raw: object) -> bool:
    """Return True if raw has the shape of an id the repository assigns.

    Checked before any store lookup so malformed ids end up as not-found.
    """
    return isinstance(raw, str) and _ID_PATTERN.fullmatch(raw) is not None

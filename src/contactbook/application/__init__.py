"""Application layer: use cases, ports, validation and result types. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import DuplicateEmail, Invalid, NotFound, StorageFailure
from contactbook.application.identifiers import is_valid_id, new_contact_id
from contactbook.application.ports import (
    ContactRepository,
    DuplicateEmailError,
    PersistenceError,
)
from contactbook.application.validation import select_updatable_fields, validate_for_create

__all__ = [
    "ContactRepository",
    "ContactService",
    "DuplicateEmail",
    "DuplicateEmailError",
    "Invalid",
    "NotFound",
    "PersistenceError",
    "StorageFailure",
    "is_valid_id",
    "new_contact_id",
    "select_updatable_fields",
    "validate_for_create",
]

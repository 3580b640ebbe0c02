"""Contact create, fetch, update, delete and list."""

import logging
from collections.abc import Callable
from typing import Any

from contactbook.application.dto import DuplicateEmail, Invalid, NotFound, StorageFailure
from contactbook.application.identifiers import is_valid_id
from contactbook.application.ports import ContactRepository, DuplicateEmailError, PersistenceError
from contactbook.application.validation import select_updatable_fields, validate_for_create
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


class ContactService:
    """Runs validation and id checks before each repository call; turns store errors into results."""

    def __init__(
        self,
        repository: ContactRepository,
        *,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._repo = repository
        self._clock = clock

    def create_contact(self, payload: Any) -> Contact | Invalid | DuplicateEmail | StorageFailure:
        now_ms = self._clock() if self._clock else None
        contact = validate_for_create(payload, now_ms=now_ms)
        if isinstance(contact, Invalid):
            return contact
        try:
            created = self._repo.create(contact)
        except DuplicateEmailError as e:
            logger.warning("Rejected contact with duplicate email %s", e.email)
            return DuplicateEmail(email=e.email)
        except PersistenceError as e:
            logger.warning("Failed to create contact: %s", e)
            return StorageFailure(reason=str(e))
        logger.info("Created contact %s", created.id)
        return created

    def get_contact(self, contact_id: str) -> Contact | NotFound | StorageFailure:
        if not is_valid_id(contact_id):
            return NotFound(contact_id=contact_id)
        try:
            contact = self._repo.get_by_id(contact_id)
        except PersistenceError as e:
            logger.warning("Failed to fetch contact %s: %s", contact_id, e)
            return StorageFailure(reason=str(e))
        return contact if contact is not None else NotFound(contact_id=contact_id)

    def update_contact(
        self, contact_id: str, payload: Any
    ) -> Contact | NotFound | Invalid | DuplicateEmail | StorageFailure:
        """Apply a partial update. A malformed id is NotFound whatever the payload."""
        if not is_valid_id(contact_id):
            return NotFound(contact_id=contact_id)
        if payload is None:
            payload = {}
        changes = select_updatable_fields(payload)
        if isinstance(changes, Invalid):
            return changes
        try:
            contact = self._repo.update(contact_id, changes)
        except DuplicateEmailError as e:
            logger.warning("Rejected update of %s: duplicate email %s", contact_id, e.email)
            return DuplicateEmail(email=e.email)
        except PersistenceError as e:
            logger.warning("Failed to update contact %s: %s", contact_id, e)
            return StorageFailure(reason=str(e))
        return contact if contact is not None else NotFound(contact_id=contact_id)

    def delete_contact(self, contact_id: str) -> Contact | NotFound | StorageFailure:
        if not is_valid_id(contact_id):
            return NotFound(contact_id=contact_id)
        try:
            contact = self._repo.delete(contact_id)
        except PersistenceError as e:
            logger.warning("Failed to delete contact %s: %s", contact_id, e)
            return StorageFailure(reason=str(e))
        if contact is None:
            return NotFound(contact_id=contact_id)
        logger.info("Deleted contact %s", contact_id)
        return contact

    def list_contacts(self) -> list[Contact] | StorageFailure:
        """Return every live contact. No pagination."""
        try:
            return self._repo.list_all()
        except PersistenceError as e:
            logger.warning("Failed to list contacts: %s", e)
            return StorageFailure(reason=str(e))

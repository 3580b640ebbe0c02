"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact, ContactUpdate


class PersistenceError(Exception):
    """The store failed an operation."""


class DuplicateEmailError(PersistenceError):
    """The store's uniqueness constraint on email rejected a write."""

    def __init__(self, email: str | None) -> None:
        super().__init__(f"A contact with email {email!r} already exists.")
        self.email = email


class ContactRepository(Protocol):
    """Persists and queries Contact records.

    Email uniqueness is the store's job: create and update must fail atomically
    with DuplicateEmailError, never via a separate lookup before the write.
    """

    def create(self, contact: Contact) -> Contact:
        """Store a new contact and return it with its assigned id."""
        ...

    def get_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def update(self, contact_id: str, changes: ContactUpdate) -> Contact | None:
        """Apply the supplied fields and return the updated contact, or None if absent."""
        ...

    def delete(self, contact_id: str) -> Contact | None:
        """Remove the contact and return what was stored, or None if absent."""
        ...

    def list_all(self) -> list[Contact]:
        """Return all contacts ordered by created_at."""
        ...

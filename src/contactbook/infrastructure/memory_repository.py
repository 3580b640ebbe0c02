"""In-memory implementation of ContactRepository (no DB)."""

import threading
from dataclasses import replace

from contactbook.application.identifiers import new_contact_id
from contactbook.application.ports import DuplicateEmailError
from contactbook.domain import Contact, ContactUpdate


class InMemoryContactRepository:
    """Stores contacts in a dict. Order preserved by insertion.

    The email index and the records change together under one lock, so a
    write that would duplicate an email is rejected without a gap between
    check and insert.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Contact] = {}
        self._id_by_email: dict[str, str] = {}

    def create(self, contact: Contact) -> Contact:
        with self._lock:
            contact_id = new_contact_id()
            while contact_id in self._by_id:
                contact_id = new_contact_id()
            if contact.email is not None and contact.email in self._id_by_email:
                raise DuplicateEmailError(contact.email)
            stored = replace(contact, id=contact_id)
            self._by_id[contact_id] = stored
            if stored.email is not None:
                self._id_by_email[stored.email] = contact_id
            return stored

    def get_by_id(self, contact_id: str) -> Contact | None:
        return self._by_id.get(contact_id)

    def update(self, contact_id: str, changes: ContactUpdate) -> Contact | None:
        with self._lock:
            current = self._by_id.get(contact_id)
            if current is None:
                return None
            updated = changes.apply_to(current)
            if updated.email != current.email and updated.email is not None:
                owner = self._id_by_email.get(updated.email)
                if owner is not None and owner != contact_id:
                    raise DuplicateEmailError(updated.email)
            if current.email is not None and current.email != updated.email:
                del self._id_by_email[current.email]
            if updated.email is not None:
                self._id_by_email[updated.email] = contact_id
            self._by_id[contact_id] = updated
            return updated

    def delete(self, contact_id: str) -> Contact | None:
        with self._lock:
            contact = self._by_id.pop(contact_id, None)
            if contact is not None and contact.email is not None:
                self._id_by_email.pop(contact.email, None)
            return contact

    def list_all(self) -> list[Contact]:
        with self._lock:
            return list(self._by_id.values())

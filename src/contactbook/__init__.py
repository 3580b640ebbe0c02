"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, ContactUpdate). No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), validation, results.
- infrastructure: adapters (InMemoryContactRepository, Neo4jContactRepository).
"""

from contactbook.application import (
    ContactRepository,
    ContactService,
    DuplicateEmail,
    DuplicateEmailError,
    Invalid,
    NotFound,
    PersistenceError,
    StorageFailure,
)
from contactbook.domain import Contact, ContactUpdate
from contactbook.infrastructure import InMemoryContactRepository, Neo4jContactRepository

__all__ = [
    "Contact",
    "ContactRepository",
    "ContactService",
    "ContactUpdate",
    "DuplicateEmail",
    "DuplicateEmailError",
    "InMemoryContactRepository",
    "Invalid",
    "Neo4jContactRepository",
    "NotFound",
    "PersistenceError",
    "StorageFailure",
]

"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import MUTABLE_FIELDS, Contact, ContactUpdate

__all__ = ["MUTABLE_FIELDS", "Contact", "ContactUpdate"]

"""Domain entities: Contact and ContactUpdate."""

from dataclasses import dataclass, field

# Fields a client may change after creation. id and created_at are not among them.
MUTABLE_FIELDS = ("first_name", "last_name", "email", "phone", "contact_type")


@dataclass(frozen=True)
class Contact:
    """
    A person in the address book.
    id is None until the repository stores the contact and assigns one.
    """

    first_name: str
    last_name: str
    created_at: int
    email: str | None = None
    phone: str | None = None
    contact_type: str | None = None
    id: str | None = None

    def __post_init__(self):
        if not self.first_name or not self.first_name.strip():
            raise ValueError("Contact first_name must be non-empty.")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Contact last_name must be non-empty.")


@dataclass(frozen=True)
class ContactUpdate:
    """
    Partial update of a Contact. Only the names listed in `supplied` are written;
    the other attributes are ignored. A supplied None clears an optional field.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    contact_type: str | None = None
    supplied: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        unknown = self.supplied - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")
        for name in ("first_name", "last_name"):
            if name in self.supplied and not (getattr(self, name) or "").strip():
                raise ValueError(f"Contact {name} must be non-empty.")

    def changes(self) -> dict[str, str | None]:
        """Return only the supplied fields, keyed by attribute name."""
        return {name: getattr(self, name) for name in MUTABLE_FIELDS if name in self.supplied}

    def apply_to(self, contact: Contact) -> Contact:
        """Return a copy of contact with the supplied fields replaced."""
        return Contact(
            id=contact.id,
            created_at=contact.created_at,
            **{
                name: getattr(contact, name)
                for name in MUTABLE_FIELDS
                if name not in self.supplied
            },
            **self.changes(),
        )

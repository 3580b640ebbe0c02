"""Neo4j implementation of ContactRepository.
Graph: one (:Contact) node per contact, properties in snake_case.
Uniqueness of id and email is enforced by node property constraints, so a
duplicate email fails inside the same statement that writes it.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from neo4j.exceptions import ConstraintError, DriverError, Neo4jError

from contactbook.application.identifiers import new_contact_id
from contactbook.application.ports import DuplicateEmailError, PersistenceError
from contactbook.domain import Contact, ContactUpdate

_CONSTRAINT_QUERIES = (
    """
    CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
    FOR (c:Contact) REQUIRE c.id IS UNIQUE
    """,
    """
    CREATE CONSTRAINT contact_email_unique IF NOT EXISTS
    FOR (c:Contact) REQUIRE c.email IS UNIQUE
    """,
)

_CREATE_QUERY = """
CREATE (c:Contact $props)
RETURN c
"""

_GET_QUERY = """
MATCH (c:Contact {id: $id})
RETURN c
"""

# SET += with a null value removes the property, which is how an optional field is cleared.
_UPDATE_QUERY = """
MATCH (c:Contact {id: $id})
SET c += $changes
RETURN c
"""

_DELETE_QUERY = """
MATCH (c:Contact {id: $id})
WITH c, properties(c) AS props
DETACH DELETE c
RETURN props AS c
"""

_LIST_QUERY = """
MATCH (c:Contact)
RETURN c
ORDER BY c.created_at, c.id
"""


def ensure_contact_constraints(driver) -> None:
    """Create unique constraints on Contact(id) and Contact(email) if missing."""
    with driver.session() as session:
        for query in _CONSTRAINT_QUERIES:
            session.run(query)


@contextmanager
def _store_errors(email: str | None) -> Iterator[None]:
    try:
        yield
    except ConstraintError as e:
        raise DuplicateEmailError(email) from e
    except (Neo4jError, DriverError) as e:
        raise PersistenceError(str(e)) from e


class Neo4jContactRepository:
    """Stores contacts as Contact nodes. One auto-commit statement per operation."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def create(self, contact: Contact) -> Contact:
        props = {
            "id": new_contact_id(),
            "first_name": contact.first_name,
            "last_name": contact.last_name,
            "email": contact.email,
            "phone": contact.phone,
            "contact_type": contact.contact_type,
            "created_at": contact.created_at,
        }
        props = {key: value for key, value in props.items() if value is not None}
        with _store_errors(contact.email), self._driver.session() as session:
            record = session.run(_CREATE_QUERY, props=props).single()
        if not record:
            raise PersistenceError("create: expected one result")
        return _record_to_contact(record)

    def get_by_id(self, contact_id: str) -> Contact | None:
        with _store_errors(None), self._driver.session() as session:
            record = session.run(_GET_QUERY, id=contact_id).single()
        if not record:
            return None
        return _record_to_contact(record)

    def update(self, contact_id: str, changes: ContactUpdate) -> Contact | None:
        values = changes.changes()
        with _store_errors(values.get("email")), self._driver.session() as session:
            record = session.run(_UPDATE_QUERY, id=contact_id, changes=values).single()
        if not record:
            return None
        return _record_to_contact(record)

    def delete(self, contact_id: str) -> Contact | None:
        with _store_errors(None), self._driver.session() as session:
            record = session.run(_DELETE_QUERY, id=contact_id).single()
        if not record:
            return None
        return _record_to_contact(record)

    def list_all(self) -> list[Contact]:
        with _store_errors(None), self._driver.session() as session:
            result = session.run(_LIST_QUERY)
            return [_record_to_contact(rec) for rec in result]


def _record_to_contact(record) -> Contact:
    c: Mapping = record["c"]
    return Contact(
        id=c["id"],
        first_name=c["first_name"],
        last_name=c["last_name"],
        email=c.get("email"),
        phone=c.get("phone"),
        contact_type=c.get("contact_type"),
        created_at=c["created_at"],
    )

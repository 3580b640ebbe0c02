"""Result types returned by the application layer instead of raising."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Invalid:
    """Payload failed validation (missing, empty or wrongly typed field)."""

    reason: str


@dataclass(frozen=True)
class DuplicateEmail:
    """Another live contact already uses this normalized email."""

    email: str | None


@dataclass(frozen=True)
class NotFound:
    """Identifier is malformed or no live contact has it."""

    contact_id: str


@dataclass(frozen=True)
class StorageFailure:
    """The store rejected or failed the operation for any other reason."""

    reason: str

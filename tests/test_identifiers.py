"""Tests for contact id format checks."""

from contactbook.application import is_valid_id, new_contact_id


def test_new_ids_are_valid_and_distinct():
    ids = {new_contact_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(is_valid_id(i) for i in ids)


def test_accepts_32_lowercase_hex():
    assert is_valid_id("0123456789abcdef0123456789abcdef")


def test_rejects_malformed():
    assert not is_valid_id("not-a-valid-id")
    assert not is_valid_id("")
    assert not is_valid_id("0123456789abcdef0123456789abcde")  # 31 chars
    assert not is_valid_id("0123456789abcdef0123456789abcdef0")  # 33 chars
    assert not is_valid_id("0123456789ABCDEF0123456789ABCDEF")
    assert not is_valid_id("0123456789abcdef0123456789abcdeg")
    assert not is_valid_id("01234567-89ab-cdef-0123-456789abcdef")
    assert not is_valid_id("0123456789abcdef0123456789abcdef\n")
    assert not is_valid_id(None)
    assert not is_valid_id(123)

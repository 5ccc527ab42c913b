"""Tests for base entity columns and key generation."""

import uuid
from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from entityspec.utils.id_generator import PK_MODULUS, generate_new_pk, generate_pk, new_sk

from sample_models import Author


def test_new_entity_gets_keys_and_defaults():
    """Test that sk/pk/flags/timestamps are set at construction."""
    author = Author(first_name="Ada", last_name="Lovelace")
    assert uuid.UUID(author.sk).version == 4
    assert 0 <= author.pk < PK_MODULUS
    assert author.deleted is False
    assert author.archived is False
    assert author.created_at is not None
    assert author.updated_at is not None
    assert author.id is None


def test_secondary_keys_are_unique_per_entity():
    """Test that two entities never share a secondary key."""
    a = Author(first_name="A", last_name="A")
    b = Author(first_name="B", last_name="B")
    assert a.sk != b.sk


def test_immutable_keys_cannot_be_reassigned(session):
    """Test that sk, pk, created_at and a persisted id are fixed."""
    author = Author(first_name="Ada", last_name="Lovelace")
    session.add(author)
    session.commit()

    with pytest.raises(ValueError, match="sk is immutable"):
        author.sk = new_sk()
    with pytest.raises(ValueError, match="pk is immutable"):
        author.pk = author.pk + 1
    with pytest.raises(ValueError, match="created_at is immutable"):
        author.created_at = datetime(2000, 1, 1)
    with pytest.raises(ValueError, match="id is immutable"):
        author.id = author.id + 100


def test_updated_at_refreshes_on_update(session):
    """Test that any update bumps updated_at."""
    author = Author(first_name="Ada", last_name="Lovelace")
    session.add(author)
    session.commit()
    author.updated_at = datetime(2000, 1, 1)
    session.commit()
    assert author.updated_at.year == 2000

    author.last_name = "King"
    session.commit()
    assert author.updated_at.year > 2000


def test_duplicate_pk_is_a_hard_failure(session):
    """Test that the store rejects a colliding derived key (no retry)."""
    first = Author(first_name="A", last_name="A")
    session.add(first)
    session.commit()

    session.add(Author(first_name="B", last_name="B", pk=first.pk))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_equality_is_identity_based(session):
    """Test entity equality by persisted id."""
    a = Author(first_name="A", last_name="A")
    b = Author(first_name="A", last_name="A")
    assert a != b
    session.add_all([a, b])
    session.commit()
    assert a == session.get(Author, a.id)
    assert a != b
    assert hash(a) == hash(a.id)


def test_generate_pk_is_deterministic_and_bounded():
    """Test the derived numeric key."""
    sk = "0f8fad5b-d9cb-469f-a165-70867728950e"
    assert generate_pk(sk, now_ms=1_700_000_000_000) == generate_pk(sk, now_ms=1_700_000_000_000)
    for now_ms in (0, 1, 1_700_000_000_000, 2**62):
        assert 0 <= generate_pk(sk, now_ms=now_ms) < PK_MODULUS


def test_generate_new_pk_is_positive_63_bit():
    """Test the random alternative key."""
    values = {generate_new_pk() for _ in range(50)}
    assert all(0 <= v < 2**63 for v in values)
    assert len(values) > 1

"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy.orm import sessionmaker

from entityspec.database.sqlite_client import get_engine

from sample_models import Author, Book  # registers the test entities on Base.metadata


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = get_engine("sqlite:///:memory:")

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def add_author(session, first_name, last_name, **kwargs):
    author = Author(first_name=first_name, last_name=last_name, **kwargs)
    session.add(author)
    return author


@pytest.fixture
def john_doe_authors(session):
    """
    12 live authors matching "john" or "doe", plus rows that must never match
    a deleted=False "john doe" search.
    """
    matching = []
    for i in range(6):
        matching.append(add_author(session, "John", f"Walker{i:02d}", email=f"john{i}@example.com"))
    for i in range(6):
        matching.append(add_author(session, f"Mary{i:02d}", "Doe", email=f"mary{i}@example.org"))
    add_author(session, "Jane", "Smith", email="jane@example.net")
    add_author(session, "Bob", "Stone")
    add_author(session, "John", "Removed", deleted=True)
    add_author(session, "Old", "Doe", deleted=True, archived=True)
    session.commit()
    return matching


@pytest.fixture
def authors_with_books(session):
    alice = add_author(session, "Alice", "Archer")
    bruno = add_author(session, "Bruno", "Baker")
    session.flush()
    session.add_all(
        [
            Book(title="First Light", author_id=alice.id),
            Book(title="Second Wind", author_id=alice.id),
            Book(title="Third Rail", author_id=bruno.id),
        ]
    )
    session.commit()
    return [alice, bruno]

from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import create_all


def _unicode_lower(value: Optional[Any]) -> Optional[Any]:
    if isinstance(value, str):
        return value.lower()
    return value


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the shared engine for a database URL and make sure tables exist.

    Create it once per process and hand it to get_session/session_context.
    On SQLite, lower() is replaced by a Unicode-aware version so text search
    folds case the same way on both sides of the comparison.
    """
    engine = create_engine(database_url, echo=echo, future=True)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _register_functions(dbapi_connection, _record) -> None:
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    create_all(engine)
    return engine


def get_session(engine: Engine) -> Session:
    """Get a SQLAlchemy session bound to the shared engine (caller must close it)."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(engine: Engine) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.

    Rolls back and re-raises on error and always closes the session. The
    engine is left open for the next call. Committing is left to the caller.

    Usage:
        engine = get_engine(get_database_url(config))
        with session_context(engine) as session:
            repo = EntityRepository(session, Author)
            ...
            session.commit()
    """
    session = get_session(engine)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

"""
Module: connector_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and transactional scope utilities.  Single point of database connection
    configuration for contact resolution.
Architecture position: Kernel > DB.  May import from db/base.py.
    MUST NOT import from selectors/, domain/, or outer layers (except
    create_tables, which imports models so metadata is complete).

Failure modes:
    - RuntimeError if get_engine/get_session/get_session_factory is called
      before init_engine_from_url().
"""

import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from connector_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

DEFAULT_DATABASE_URL = "sqlite://"

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Database URL from CONNECTOR_DATABASE_URL, or in-memory SQLite."""
    return os.environ.get("CONNECTOR_DATABASE_URL", DEFAULT_DATABASE_URL)


def init_engine_from_url(
    database_url: str | None = None,
    echo: bool = False,
    pool_pre_ping: bool = True,
) -> Engine:
    """
    Initialize the SQLAlchemy engine.

    In-memory SQLite shares one connection across sessions (StaticPool) so
    every session sees the same database.  A second call replaces the first.

    Args:
        database_url: Connection URL.  Defaults to get_database_url().
        echo: If True, log all SQL statements.
        pool_pre_ping: If True, test connections before use.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    url = database_url or get_database_url()
    if url == "sqlite://" or (url.startswith("sqlite") and ":memory:" in url):
        _engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        _engine = create_engine(url, echo=echo, pool_pre_ping=pool_pre_ping)

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    """
    Get the current engine instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    return get_session_factory()()


def get_session_factory() -> sessionmaker[Session]:
    """
    Get the session factory, e.g. one session per worker thread.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Commits on normal exit; rolls back and re-raises on exception; always
    closes the session.
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create all tables for the connector's models."""
    from connector_kernel.db.base import Base
    import connector_kernel.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """Drop all tables. Primarily for testing."""
    from connector_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None

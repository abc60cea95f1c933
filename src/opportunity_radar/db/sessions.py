"""Database engine and session management."""
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from opportunity_radar.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Opportunity, ScoreEvent)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine; SQLite gets thread-safe connect args.

    In-memory SQLite uses a StaticPool so every session shares one connection
    and sees the same tables.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on error."""
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call on startup (idempotent for existing tables)."""
    SQLModel.metadata.create_all(engine)

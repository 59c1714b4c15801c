"""Database engine, session factory, and declarative base.

All three tables (customers, suppliers, orders) share one `Base`.
Request-scoped sessions are handed out through `grainbroker.persistence.get_context`.
"""

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from grainbroker.config import settings


class Base(DeclarativeBase):
    """Models for the grain brokerage schema."""
    pass


def enable_sqlite_foreign_keys(sync_engine: Engine) -> None:
    """Turn on FK enforcement (and therefore ON DELETE CASCADE) for SQLite.

    SQLite ships with foreign keys disabled per connection.
    """

    @event.listens_for(sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine, applying SQLite pragmas where needed."""
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=settings.debug, **kwargs)
        enable_sqlite_foreign_keys(engine.sync_engine)
        return engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=20,
        max_overflow=10,
        **kwargs,
    )


engine = build_engine(settings.database_url)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

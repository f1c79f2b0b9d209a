"""
Engine and session lifecycle for the relational store.

One engine serves the whole process. HTTP routes take a session per request
through ``DatabaseSession``; the websocket gateways run outside any request
and open their own sessions from ``default_session_factory``.
"""

import logging
from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from booksphere.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every table in ``booksphere.models``."""


@dataclass
class _DatabaseState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_state = _DatabaseState()


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` given the configured backend."""
    if make_url(settings.DATABASE_URL).get_backend_name() == "sqlite":
        # In-memory SQLite lives inside one connection, so every thread shares it
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": settings.DATABASE_POOL_RECYCLE_SECONDS,
    }


def initialize_database(settings: Settings) -> sessionmaker[Session]:
    """Create the engine and session factory, replacing any earlier ones."""
    dispose_engine()
    engine = create_engine(settings.DATABASE_URL, **engine_options(settings))
    _state.engine = engine
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    _state.session_factory = session_factory
    logger.info("Database engine ready (backend=%s)", engine.url.get_backend_name())
    return session_factory


def get_engine() -> Engine:
    if _state.engine is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")
    return _state.engine


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    """The process-wide session factory, created on first use."""
    if _state.session_factory is None:
        return initialize_database(settings)
    return _state.session_factory


def default_session_factory() -> sessionmaker[Session]:
    """Session factory for code running outside a request (websocket gateways)."""
    return get_session_factory(get_settings())


def dispose_engine() -> None:
    """Close pooled connections and forget the engine; safe to call twice."""
    if _state.engine is not None:
        _state.engine.dispose()
    _state.engine = None
    _state.session_factory = None


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


DatabaseSession = Annotated[Session, Depends(get_db)]

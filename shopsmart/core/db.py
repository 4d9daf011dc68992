from __future__ import annotations

from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shopsmart.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the SQLAlchemy models."""


def _engine_kwargs(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live inside one connection; share it across threads.
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    # pool_pre_ping avoids handing out connections the server already dropped
    return {"pool_pre_ping": True}


class Database:
    """
    Storage handle owned by the application: one engine and its session factory.

    Built once at startup by ``create_app`` and disposed on shutdown.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, **_engine_kwargs(url))
        self.sessionmaker = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            class_=Session,
        )

    def create_all(self) -> None:
        # Import models so they are registered on Base.metadata
        from shopsmart import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        """
        Yield a session and always close it, dependency/fixture friendly.
        """
        db = self.sessionmaker()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()

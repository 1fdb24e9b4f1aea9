from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hirelink.core.base import Base

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the persistence layer fails; reported to clients as a 500."""


class Store:
    """
    Process-wide store handle: one engine + session factory.

    Created at startup, closed at shutdown. Request handlers get their own
    session through ``get_db``.
    """

    def __init__(self, database_url: str, *, timeout_seconds: float = 10.0) -> None:
        if not database_url:
            raise RuntimeError("DATABASE_URL must be set")
        self.database_url = database_url
        self.timeout_seconds = timeout_seconds
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not connected")
        return self._engine

    def _engine_kwargs(self) -> dict:
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite":
            kwargs: dict = {
                "connect_args": {"check_same_thread": False, "timeout": self.timeout_seconds},
            }
            if url.database in (None, "", ":memory:"):
                # Share the single in-memory database across the request threadpool.
                kwargs["poolclass"] = StaticPool
            return kwargs

        kwargs = {
            "pool_pre_ping": True,  # checks stale connections
            "pool_timeout": self.timeout_seconds,
        }
        if url.get_backend_name() == "postgresql":
            kwargs["connect_args"] = {"connect_timeout": max(1, int(self.timeout_seconds))}
        return kwargs

    def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_engine(self.database_url, **self._engine_kwargs())
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        logger.info("Store engine created for backend=%s", self._engine.url.get_backend_name())

    def create_schema(self) -> None:
        # Import models so they register with SQLAlchemy metadata.
        from hirelink.models import account, job  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Store is not connected")
        return self._sessionmaker()

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Store engine disposed")


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_db(request: Request) -> Generator[Session, None, None]:
    db = get_store(request).session()
    try:
        yield db
    finally:
        db.close()

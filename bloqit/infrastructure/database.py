from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Engine + session factory for one application instance.

    Built by the application factory, opened at startup and disposed at shutdown.
    """

    def __init__(self, url: str) -> None:
        kwargs: dict = {}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # a single shared connection keeps the in-memory database alive
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **kwargs)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self) -> None:
        from bloqit.infrastructure.models import models  # noqa: F401  (registers tables)

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        return self._session_factory()

    def dispose(self) -> None:
        self.engine.dispose()

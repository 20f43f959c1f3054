"""
Database engine and session handling
"""
import logging
from contextlib import contextmanager
from typing import Dict, Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Store handle owning one engine (and its connection pool)

    Created on application startup, disposed on shutdown and handed to
    request handlers through the ``get_db`` dependency.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: int = 30,
        connect_timeout: int = 10,
        echo: bool = False
    ):
        self.url = make_url(url)

        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if self.url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url.database in (None, "", ":memory:"):
                # every session must see the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                connect_args={"connect_timeout": connect_timeout},
            )

        self.engine = create_engine(self.url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create tables for all registered models"""
        # Import models so they are registered on Base.metadata
        from order_tracker.models import order  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def check_connection(self) -> Dict[str, str]:
        """
        Run a probe query against the database

        Returns:
            Backend name and the server's current time

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the database is unreachable
        """
        with self.engine.connect() as connection:
            current_time = connection.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
        return {
            "backend": self.url.get_backend_name(),
            "current_time": str(current_time)
        }

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session for a single unit of work"""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        """Close every pooled connection"""
        self.engine.dispose()

    def __repr__(self):
        return f"<Database(url='{self.url.render_as_string(hide_password=True)}')>"


def get_db(request: Request) -> Iterator[Session]:
    """Dependency yielding a session from the application's database"""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db

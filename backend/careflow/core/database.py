"""Database configuration and session management."""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .config import Settings
from .sessions import SessionRegistry

logger = logging.getLogger(__name__)

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Store:
    """
    Process-wide state for one application instance.

    Owns the SQLAlchemy engine and session factory for actors and reports,
    plus the registry of live login sessions. Create one per app (or per
    test) and hand it to whatever needs it; call ``dispose()`` on teardown.
    """

    def __init__(self, database_url: str, echo: bool = False):
        engine_kwargs = {"pool_pre_ping": True, "echo": echo}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in _IN_MEMORY_URLS:
                # One shared connection, otherwise every checkout sees an empty DB
                engine_kwargs["poolclass"] = StaticPool

        self.database_url = database_url
        self.engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)
        self.sessions = SessionRegistry()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(settings.DATABASE_URL, echo=settings.debug)

    def init_db(self) -> None:
        """Create all tables."""
        from ..models import Base

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database ready at {self.engine.url.render_as_string()}")

    def get_db(self) -> Generator[Session, None, None]:
        """
        Yield a database session, closing it afterwards.

        Usage:
            def get_items(db: Session = Depends(get_db)):
                return db.query(Item).all()
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def session_scope(self):
        """
        Context manager for database sessions.

        Usage:
            with store.session_scope() as db:
                db.query(Actor).all()
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self, drop_all: Optional[bool] = False) -> None:
        """Release connections and forget every login session."""
        if drop_all:
            from ..models import Base

            Base.metadata.drop_all(bind=self.engine)
        self.sessions.clear()
        self.engine.dispose()

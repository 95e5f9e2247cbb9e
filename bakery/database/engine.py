import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bakery.config import Settings
from bakery.database.base import Base

logger = logging.getLogger(__name__)


def _is_sqlite_memory(url) -> bool:
    database = url.database
    if database in (None, "", ":memory:"):
        return True
    return url.query.get("mode") == "memory"


def build_engine(database_url: str, *, timeout_seconds: int = 30, echo: bool = False) -> Engine:
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    connect_args: dict[str, object] = {}
    engine_kwargs: dict[str, object] = dict(pool_pre_ping=True, echo=echo)
    is_memory = False
    if is_sqlite:
        is_memory = _is_sqlite_memory(url)
        connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
        if is_memory:
            engine_kwargs.update(poolclass=StaticPool)
        else:
            engine_kwargs.update(pool_timeout=timeout_seconds)
    else:
        engine_kwargs.update(pool_timeout=timeout_seconds)
        if url.get_backend_name() == "postgresql":
            connect_args = {
                "connect_timeout": timeout_seconds,
                "options": "-c statement_timeout={}".format(timeout_seconds * 1000),
            }

    engine = create_engine(url, connect_args=connect_args, **engine_kwargs)

    if is_sqlite:
        busy_timeout_ms = timeout_seconds * 1000

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
                if not is_memory:
                    try:
                        cursor.execute("PRAGMA journal_mode=WAL")
                        cursor.execute("PRAGMA synchronous=NORMAL")
                    except sqlite3.DatabaseError:
                        pass
            finally:
                cursor.close()

    return engine


class Database:
    """Store handle owned by the application: one engine plus its session factory."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            build_engine(
                settings.DATABASE_URL,
                timeout_seconds=settings.DB_TIMEOUT_SECONDS,
                echo=settings.DB_ECHO,
            )
        )

    def create_all(self) -> None:
        import bakery.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed.")

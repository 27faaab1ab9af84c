"""SQLite engine for the account stores."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from houseconnect.account_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

IN_MEMORY = ":memory:"


def _enable_sqlite_pragmas(dbapi_connection: object, _connection_record: object) -> None:
    # WAL lets login reads proceed while a signup or approval is committing
    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(db_path: str) -> Engine:
    if db_path == IN_MEMORY:
        # Every session must see the same private database
        engine = create_engine(
            "sqlite:///:memory:",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        # Request handlers run on FastAPI's threadpool
        engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": False},
        )
    event.listen(engine, "connect", _enable_sqlite_pragmas)
    return engine


class Database:
    """The single SQLite file holding students, landlords, administrators
    and listing verifications.

    The engine is created on first use and shared by every per-role store.
    Sessions keep loaded accounts usable after commit, since stores hand
    detached records back to the services.
    """

    def __init__(self, db_path: str = "houseconnect.db") -> None:
        """Initialize the database.

        Args:
            db_path: SQLite file path, or ":memory:" for a throwaway database
                (tests and local experiments).
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = _build_engine(self.db_path)
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def create_tables(self) -> None:
        """Create the account tables that are missing. Existing data is kept."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Open a session; the caller closes it."""
        return self.session_factory()

    def close(self) -> None:
        """Release every pooled connection. An in-memory database is lost."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

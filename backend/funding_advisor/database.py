"""Database connection, session management, and table initialization.

Nothing here touches the database at import time. The application builds
one Store at startup and hands sessions out per request.
"""

import logging
from pathlib import Path
from typing import List

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.requests import Request

from funding_advisor.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""
    pass


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if not database_url.startswith("sqlite:///"):
        return
    path = database_url.replace("sqlite:///", "", 1)
    if not path or path.startswith(":memory:"):
        return
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine.

    Uses check_same_thread=False for SQLite to allow FastAPI's
    threaded request handling.
    """
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        _ensure_sqlite_directory(database_url)
        if ":memory:" in database_url:
            # One shared connection, otherwise every thread sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)


def build_session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def apply_additive_migrations(engine) -> List[str]:
    """Add mapped columns that are missing from already-existing tables.

    Only nullable, non-primary-key columns are added, so older databases
    pick up new fields without touching existing rows.
    Returns the list of ``table.column`` names that were added.
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    added: List[str] = []

    with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            if table.name not in existing_tables:
                continue
            present = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in present:
                    continue
                if not column.nullable or column.primary_key:
                    logger.warning(
                        "Skipping non-nullable column %s.%s in additive migration",
                        table.name,
                        column.name,
                    )
                    continue
                col_type = column.type.compile(dialect=engine.dialect)
                conn.execute(
                    text(f'ALTER TABLE {table.name} ADD COLUMN "{column.name}" {col_type}')
                )
                added.append(f"{table.name}.{column.name}")
                logger.info("Added column %s.%s", table.name, column.name)

    return added


def create_schema(engine) -> Engine:
    """Create missing tables, then add missing nullable columns."""
    # Import models so they register with Base.metadata
    import funding_advisor.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    apply_additive_migrations(engine)
    return engine


# ---------------------------------------------------------------------------
# Application store: built explicitly at startup and attached to app.state
# ---------------------------------------------------------------------------


class Store:
    """Engine plus session factory for one database URL.

    Constructed once by whoever owns the process (the FastAPI lifespan,
    the DI container, the facade) and passed to the code that needs it.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = build_session_factory(self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(settings.database_url, echo=settings.debug)

    def init_schema(self) -> None:
        create_schema(self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency that yields a database session per request."""
    store: Store = request.app.state.store
    db = store.session()
    try:
        yield db
    finally:
        db.close()

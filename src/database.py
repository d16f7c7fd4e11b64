"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_settings

AUTH_SCHEMA = "auth"
CATALOGUE_SCHEMA = "recipe_catalogue"

# Primary and foreign keys are PostgreSQL INTEGER columns
MAX_ID = 2**31 - 1

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine for PostgreSQL, or SQLite with schemas flattened."""
    if database_url.startswith("sqlite"):
        sqlite_engine = create_engine(database_url, connect_args={"check_same_thread": False})

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        # SQLite has no schemas; tables live in the main database
        return sqlite_engine.execution_options(
            schema_translate_map={AUTH_SCHEMA: None, CATALOGUE_SCHEMA: None}
        )

    connect_args = {}
    if settings.db_statement_timeout_ms > 0:
        connect_args["options"] = f"-c statement_timeout={settings.db_statement_timeout_ms}"

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        connect_args=connect_args,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_schemas(bind: Engine) -> None:
    """Create the auth and recipe_catalogue schemas on PostgreSQL."""
    if bind.dialect.name != "postgresql":
        return
    with bind.begin() as conn:
        for schema in (AUTH_SCHEMA, CATALOGUE_SCHEMA):
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))


"""Database configuration for the Task Scheduler."""
from typing import Generator
from sqlmodel import create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine
from fastapi import Request


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLModel engine for the SQLite database file."""
    # SQLite connections are shared across FastAPI's worker threads
    engine = create_engine(database_url, echo=False, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def get_session(request: Request) -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(request.app.state.engine) as session:
        yield session

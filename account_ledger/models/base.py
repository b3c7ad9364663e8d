"""
Database engine, session management, and base model.

The ledger lives in an in-memory SQLite database. Every model
inherits from Base. Every request gets a session from get_db(),
and only one request holds a session at a time.
"""

import asyncio

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


# --- Base Model Class ---
# Every model (Customer, Operation) inherits from this class.
class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the in-memory store for one running service.

    StaticPool keeps a single connection alive for the engine's
    lifetime. An in-memory SQLite database exists only as long as
    its connection, so every session must share that one.

    The lock serializes access to the store. A balance check and
    the append that follows it always run under the same hold.
    """

    URL = "sqlite://"

    def __init__(self):
        self.engine = create_engine(
            self.URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        # expire_on_commit=False so objects returned from a
        # committed session can still be serialized.
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        self.lock = asyncio.Lock()

    def create_all(self) -> None:
        # Import the models so they register on Base.metadata
        import account_ledger.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


# --- Dependencies for FastAPI ---
def get_database(request: Request) -> Database:
    """Return the store created by the application lifespan."""
    return request.app.state.database


async def get_db(request: Request):
    """
    Provide a database session for a single request.

    The lock is an asyncio lock held by the event loop, so a
    request waiting its turn does not tie up a worker thread.
    The sync path operation runs in the threadpool while the
    lock is held.

    Changes are only kept if the endpoint commits. Closing the
    session discards anything left uncommitted, so a request
    that fails half way leaves no trace.
    """
    database = get_database(request)
    async with database.lock:
        db = database.session()
        try:
            yield db
        finally:
            db.close()

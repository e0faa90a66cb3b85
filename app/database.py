"""
Database engine and session. Supports SQLite (dev, tests) and Postgres via DATABASE_URL.

get_db is the single dependency for DB access; the gateway and the library,
auth and users routers all go through it.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from config import DATABASE_URL
from errors import StoreUnavailable

# SQLite needs check_same_thread=False for FastAPI's threadpool; Postgres does not
_connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    _connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, connect_args=_connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine)

Base = declarative_base()


def init_db():
    """Create users and books tables if they do not exist yet."""
    import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)


def get_db():
    """FastAPI dependency: yields a DB session and closes it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, action: str):
    """
    Translate SQLAlchemy failures inside the block into StoreUnavailable.
    The session is rolled back and the failure logged, so callers never
    confuse a broken store with a missing row or an empty result.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logging.exception("Store failure while %s", action)
        raise StoreUnavailable(action) from exc

"""
User store: lookup, upsert on login, and session token assignment.

Every database failure is rolled back, logged and surfaced as StoreUnavailable
so callers never confuse it with a missing user.
"""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import store_errors
from errors import StoreUnavailable
from models import User


@dataclass(frozen=True)
class Profile:
    """Identity returned by the OAuth provider."""
    user_id: str
    first_name: str | None = None
    last_name: str | None = None


def find_by_external_id(db: Session, user_id: str) -> User | None:
    with store_errors(db, "looking up user by provider id"):
        return db.scalars(select(User).where(User.user_id == str(user_id))).first()


def find_by_id(db: Session, user_pk: int) -> User | None:
    with store_errors(db, "looking up user by id"):
        return db.get(User, user_pk)


def upsert_user(db: Session, profile: Profile) -> User:
    """
    Insert a user for an unseen provider id, otherwise refresh the name fields.

    The row is flushed (so it has an id) but not committed; the caller commits
    together with the session token. If a concurrent login inserted the same
    provider id first, the winning row is updated instead.
    """
    user = find_by_external_id(db, profile.user_id)
    if user is None:
        user = User(
            user_id=str(profile.user_id),
            first_name=profile.first_name,
            last_name=profile.last_name,
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            # Nothing else is pending in this transaction, so a full rollback is safe
            db.rollback()
            logging.info("Concurrent insert for provider id %s; updating existing row", profile.user_id)
            user = find_by_external_id(db, profile.user_id)
            if user is None:
                raise StoreUnavailable("upserting user")
        except SQLAlchemyError as exc:
            db.rollback()
            logging.exception("Store failure while inserting user")
            raise StoreUnavailable("inserting user") from exc
        else:
            return user
    user.first_name = profile.first_name
    user.last_name = profile.last_name
    with store_errors(db, "updating user"):
        db.flush()
    return user


def set_access_token(db: Session, user: User, token: str) -> User:
    """Make token the user's only current session token and commit."""
    user.access_token = token
    with store_errors(db, "storing access token"):
        db.commit()
    return user


def clear_access_token(db: Session, user: User) -> User:
    """Revoke the user's current session token and commit."""
    user.access_token = None
    with store_errors(db, "clearing access token"):
        db.commit()
    return user

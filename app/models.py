"""
Data models for the book-thing backend.

"""
from sqlalchemy import Column, Integer, String, Text

from database import Base


class User(Base):
    """
    Authenticated principal, keyed internally by id and externally by Google sub.

    - id: store-assigned integer primary key.
    - user_id: Google subject id; unique and never changed once set.
    - first_name, last_name: from the Google profile, refreshed on every login.
    - access_token: the single current session token issued by this service.
      Overwritten on login (last write wins), null after logout.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(255))
    last_name = Column(String(255))

    access_token = Column(String(2048), nullable=True)


class Book(Base):
    """A library entry. id is always assigned by the store."""
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    blurb = Column(Text, nullable=False)

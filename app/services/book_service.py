"""
Book store: list and insert rows of the books table.
"""
from sqlalchemy import select
from sqlalchemy.orm import Session

from database import store_errors
from models import Book


def list_books(db: Session) -> list[Book]:
    """All books in insertion order."""
    with store_errors(db, "listing books"):
        return list(db.scalars(select(Book).order_by(Book.id)))


def create_book(db: Session, title: str, author: str, blurb: str) -> Book:
    """Insert a book and return it with its store-assigned id."""
    book = Book(title=title, author=author, blurb=blurb)
    with store_errors(db, "inserting book"):
        db.add(book)
        db.commit()
        db.refresh(book)
    return book

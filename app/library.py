"""
Library router: list and add books. Every route sits behind the auth gateway.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from database import get_db
from gateway import get_current_user
from services.book_service import create_book, list_books

router = APIRouter(prefix="/api/library", dependencies=[Depends(get_current_user)])


# --- Request / response models ---


class BookIn(BaseModel):
    """Request body for adding a book. Whitespace is stripped before length checks."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    blurb: str = Field(..., min_length=1)


class BookOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    blurb: str


# --- Endpoints ---


@router.get("", response_model=list[BookOut])
def get_library(db: Session = Depends(get_db)):
    """Return every book in insertion order."""
    return list_books(db)


@router.post("", response_model=BookOut, status_code=201)
def add_book(body: BookIn, db: Session = Depends(get_db)):
    """Store a new book; the id is assigned by the database."""
    return create_book(db, body.title, body.author, body.blurb)

"""
Identity endpoint: the caller's own user record.
"""
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator

from gateway import get_current_user
from models import User

router = APIRouter(prefix="/api")


class MeOut(BaseModel):
    """
    Public view of a User. user_id is always a string on the wire, whatever
    type the row holds; access_token is deliberately absent.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    first_name: str | None
    last_name: str | None

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id_as_string(cls, value: Any) -> str:
        return str(value)


@router.get("/me", response_model=MeOut)
def me(user: User = Depends(get_current_user)):
    """Return the authenticated user (id, user_id, first_name, last_name)."""
    return user

"""
Auth gateway: the dependency that guards /api/library and /api/me.

A request passes three stages in order, and any failure stops it with a bare
401 before the route handler runs:

1. extract_credential: Authorization: Bearer header, else the accessToken cookie.
2. verify_access_token: signature, shape and expiry of the JWT.
3. resolve_user: the user exists and still holds exactly this token.

On success the user is attached to request.state.user and returned. Store
failures during resolution propagate as StoreUnavailable (503), never as 401.
"""
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from config import ACCESS_TOKEN_COOKIE_NAME
from database import get_db
from errors import Unauthorized
from models import User
from security import verify_access_token
from services.user_service import find_by_id

bearer_scheme = HTTPBearer(auto_error=False)


def extract_credential(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = None,
) -> str | None:
    """Bearer header wins over the cookie; empty values count as absent."""
    if bearer is not None and bearer.credentials:
        return bearer.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE_NAME) or None


def resolve_user(db: Session, user_id: int, token: str) -> User | None:
    """Load the user and check the token is still their current one."""
    user = find_by_id(db, user_id)
    if user is None or not user.access_token:
        return None
    if not secrets.compare_digest(user.access_token, token):
        return None
    return user


def authenticate(request: Request, db: Session, bearer: HTTPAuthorizationCredentials | None = None) -> User:
    """Run all gateway stages; raises Unauthorized on the first failure."""
    token = extract_credential(request, bearer)
    if token is None:
        logging.debug("Rejected %s: no credential", request.url.path)
        raise Unauthorized()

    user_id = verify_access_token(token)
    if user_id is None:
        logging.debug("Rejected %s: token failed verification", request.url.path)
        raise Unauthorized()

    user = resolve_user(db, user_id, token)
    if user is None:
        logging.debug("Rejected %s: token does not resolve to a current session", request.url.path)
        raise Unauthorized()

    request.state.user = user
    return user


def get_current_user(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency wrapping authenticate for protected routes."""
    return authenticate(request, db, bearer)

"""
Session token creation and verification.

A session token is an HS256 JWT whose sub is the internal user id. It is
handed to the client as the accessToken cookie (or used as a Bearer token)
and also stored on the user row, which is what makes logout and re-login
revoke older tokens. Pure functions: no I/O, no state.
"""
from datetime import datetime, timedelta, UTC

from jose import jwt, JWTError

from config import ACCESS_TOKEN_MAX_AGE, JWT_ALGORITHM, JWT_SECRET


def create_access_token(
    user_id: int,
    *,
    secret: str | None = JWT_SECRET,
    max_age: int = ACCESS_TOKEN_MAX_AGE,
    now: datetime | None = None,
) -> str:
    """
    Build a session token for the given internal user id.

    iat is always set; exp = iat + max_age unless max_age is 0. Raises
    RuntimeError when no signing secret is configured.
    """
    if not secret:
        raise RuntimeError("JWT secret is not configured")
    issued_at = now or datetime.now(UTC)
    payload = {"sub": str(user_id), "iat": issued_at}
    if max_age > 0:
        payload["exp"] = issued_at + timedelta(seconds=max_age)
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_access_token(token: str, *, secret: str | None = JWT_SECRET) -> int | None:
    """
    Return the internal user id carried by a token, or None if the token is
    malformed, badly signed, expired or has no integer sub. Never raises.
    """
    if not token or not secret:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.isdigit():
        return None
    return int(sub)

"""
Google OAuth 2.0 login, callback and logout.

- /api/auth/google redirects to Google with a CSRF state stored in a short-lived cookie.
- /api/auth/google/callback validates state, exchanges the code for a profile,
  upserts the User, issues a session token, stores it on the user row, sets it
  as the accessToken cookie and redirects home. Any provider failure redirects
  to LOGIN_FAILURE_REDIRECT without touching the users table.
- /api/auth/logout revokes the presented token (when it is a current one) and
  always clears the cookie.
"""
import logging
import secrets

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import (
    ACCESS_TOKEN_COOKIE_NAME,
    ACCESS_TOKEN_MAX_AGE,
    LOGIN_FAILURE_REDIRECT,
    LOGIN_SUCCESS_REDIRECT,
    OAUTH_STATE_COOKIE_NAME,
    OAUTH_STATE_MAX_AGE,
    SECURE_COOKIES,
)
from database import get_db
from errors import ProviderError, StoreUnavailable
from gateway import bearer_scheme, extract_credential, resolve_user
from security import create_access_token, verify_access_token
from services.google_service import build_authorization_url, exchange_code
from services.user_service import clear_access_token, set_access_token, upsert_user

router = APIRouter(prefix="/api/auth")


# Cookie flags: HttpOnly (no JS access), SameSite=Lax (CSRF mitigation), Secure in production is set per-response
def _cookie_kwargs(secure: bool = False) -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": secure,
        "path": "/",
    }


def _expired_cookie_header(name: str, secure: bool = False) -> str:
    """
    Set-Cookie value that empties a cookie. Written by hand because
    Response.delete_cookie quotes the empty value as name="".
    """
    header = f"{name}=; Max-Age=0; Path=/; HttpOnly; SameSite=lax"
    if secure:
        header += "; Secure"
    return header


@router.get("/google")
def google_login():
    """
    Redirect to Google OAuth consent. Sets a short-lived cookie with a random
    state value and includes the same state in the redirect URL so the callback
    can verify the request was not forged (CSRF protection).
    """
    state = secrets.token_urlsafe(32)
    redirect = RedirectResponse(url=build_authorization_url(state), status_code=302)
    redirect.set_cookie(
        OAUTH_STATE_COOKIE_NAME,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        **_cookie_kwargs(secure=SECURE_COOKIES),
    )
    return redirect


def _login_failed(reason: str) -> RedirectResponse:
    logging.warning("Google login failed: %s", reason)
    redirect = RedirectResponse(url=LOGIN_FAILURE_REDIRECT, status_code=302)
    redirect.delete_cookie(OAUTH_STATE_COOKIE_NAME, path="/")
    return redirect


@router.get("/google/callback")
def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    db: Session = Depends(get_db),
):
    """
    Handle redirect from Google. Validates state cookie (CSRF), exchanges code
    for a profile, creates/updates the User, stores a fresh session token on it
    and sets that token as the accessToken cookie.
    """
    if error:
        return _login_failed(f"provider returned error {error!r}")
    if not code or not state:
        return _login_failed("missing code or state")

    state_cookie = request.cookies.get(OAUTH_STATE_COOKIE_NAME)
    if not state_cookie or not secrets.compare_digest(state, state_cookie):
        return _login_failed("invalid or expired state")

    try:
        profile = exchange_code(code)
    except ProviderError as e:
        return _login_failed(e.msg)

    user = upsert_user(db, profile)
    token = create_access_token(user.id)
    set_access_token(db, user, token)
    logging.info("User %s logged in", user.id)

    redirect = RedirectResponse(url=LOGIN_SUCCESS_REDIRECT, status_code=302)
    cookie_max_age = ACCESS_TOKEN_MAX_AGE or None
    redirect.set_cookie(
        ACCESS_TOKEN_COOKIE_NAME,
        token,
        max_age=cookie_max_age,
        **_cookie_kwargs(secure=SECURE_COOKIES),
    )
    # Clear state cookie
    redirect.delete_cookie(OAUTH_STATE_COOKIE_NAME, path="/")
    return redirect


@router.api_route("/logout", methods=["GET", "POST"])
def logout(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
):
    """
    Clear the session cookie and redirect home. If the request presents a
    current session token, it is also revoked on the user row; a store
    failure skips revocation but the cookie is still cleared. Works without
    a session and is safe to repeat.
    """
    token = extract_credential(request, bearer)
    user_id = verify_access_token(token) if token is not None else None
    if user_id is not None:
        try:
            user = resolve_user(db, user_id, token)
            if user is not None:
                clear_access_token(db, user)
                logging.info("User %s logged out", user.id)
        except StoreUnavailable:
            logging.warning("Logout for user %s could not revoke the stored token", user_id)

    redirect = RedirectResponse(url="/", status_code=302)
    redirect.headers.append("set-cookie", _expired_cookie_header(ACCESS_TOKEN_COOKIE_NAME, SECURE_COOKIES))
    return redirect

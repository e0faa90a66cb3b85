"""
Google OAuth 2.0 client: authorization URL and authorization code exchange.

Business logic separated from the HTTP layer. All Google calls use timeouts;
any failure is raised as ProviderError so the callback never half-logs-in a user.
"""
from typing import Any
from urllib.parse import urlencode

import requests

from config import (
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_REDIRECT_URI,
    GOOGLE_REQUEST_TIMEOUT,
    GOOGLE_SCOPES,
)
from errors import ProviderError
from services.user_service import Profile

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
USERINFO_ENDPOINT = "https://openidconnect.googleapis.com/v1/userinfo"


def build_authorization_url(state: str) -> str:
    """Consent screen URL; Google sends the user back to GOOGLE_REDIRECT_URI with a code."""
    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": GOOGLE_SCOPES,
        "state": state,
    }
    return f"{AUTHORIZATION_ENDPOINT}?{urlencode(params)}"


def _google_json(method: str, url: str, **kwargs: Any) -> dict:
    """Call a Google endpoint with timeout; returns the JSON object or raises ProviderError."""
    kwargs.setdefault("timeout", GOOGLE_REQUEST_TIMEOUT)
    try:
        resp = requests.request(method, url, **kwargs)
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise ProviderError(f"Google request failed: {e}") from e
    if not isinstance(data, dict):
        raise ProviderError("Google returned a non-object response")
    if "error" in data:
        raise ProviderError(f"Google error: {data.get('error_description', data['error'])}")
    if resp.status_code >= 400:
        raise ProviderError(f"Google returned HTTP {resp.status_code}")
    return data


def exchange_code(code: str) -> Profile:
    """
    Exchange an authorization code for tokens, then read the user's profile.
    Returns the Google sub and names; raises ProviderError on any failure.
    """
    token_data = _google_json(
        "POST",
        TOKEN_ENDPOINT,
        data={
            "client_id": GOOGLE_CLIENT_ID,
            "client_secret": GOOGLE_CLIENT_SECRET,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": GOOGLE_REDIRECT_URI,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    access_token = token_data.get("access_token")
    if not access_token:
        raise ProviderError("Token exchange did not return access_token")

    userinfo = _google_json(
        "GET",
        USERINFO_ENDPOINT,
        headers={"Authorization": f"Bearer {access_token}"},
    )
    sub = userinfo.get("sub")
    if not sub:
        raise ProviderError("Google userinfo missing sub")
    return Profile(
        user_id=str(sub),
        first_name=userinfo.get("given_name"),
        last_name=userinfo.get("family_name"),
    )

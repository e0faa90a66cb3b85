"""
Application configuration from environment variables.

main loads .env with python-dotenv (development only) before importing this
module. Validates critical secrets at module load; missing values raise
RuntimeError.
"""
import os

# --- Required (raise if missing) ---
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI")
JWT_SECRET = os.getenv("JWT_SECRET")

for name, val in [
    ("GOOGLE_CLIENT_ID", GOOGLE_CLIENT_ID),
    ("GOOGLE_CLIENT_SECRET", GOOGLE_CLIENT_SECRET),
    ("GOOGLE_REDIRECT_URI", GOOGLE_REDIRECT_URI),
    ("JWT_SECRET", JWT_SECRET),
]:
    if not val or not str(val).strip():
        raise RuntimeError(f"Required env var {name} is missing or empty")

JWT_ALGORITHM = "HS256"

# --- Optional with defaults ---
# Frontend origin allowed by CORS (cookies are sent cross-origin only to it)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")

# Session token cookie; token lifetime and cookie max_age match.
# ACCESS_TOKEN_MAX_AGE=0 issues tokens without expiry (session cookie).
ACCESS_TOKEN_COOKIE_NAME = os.getenv("ACCESS_TOKEN_COOKIE_NAME", "accessToken")
_MAX_AGE_RAW = os.getenv("ACCESS_TOKEN_MAX_AGE", "86400")
try:
    ACCESS_TOKEN_MAX_AGE = max(0, int(_MAX_AGE_RAW))
except ValueError:
    ACCESS_TOKEN_MAX_AGE = 86400

# OAuth CSRF: cookie name for state parameter, short-lived
OAUTH_STATE_COOKIE_NAME = os.getenv("OAUTH_STATE_COOKIE_NAME", "oauth_state")
OAUTH_STATE_MAX_AGE = 600  # 10 minutes

GOOGLE_SCOPES = os.getenv("GOOGLE_SCOPES", "openid profile")

# Google token/userinfo timeouts (connect, read) in seconds
GOOGLE_REQUEST_TIMEOUT = (5, 30)

# Where the browser lands after the OAuth callback
LOGIN_SUCCESS_REDIRECT = os.getenv("LOGIN_SUCCESS_REDIRECT", "/")
LOGIN_FAILURE_REDIRECT = os.getenv("LOGIN_FAILURE_REDIRECT", "/?error=login_failed")

# Secure cookie flag (set True in production over HTTPS)
SECURE_COOKIES = os.getenv("SECURE_COOKIES", "false").lower() in ("1", "true", "yes")

# Database URL (SQLite default; use Postgres URL in production)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./app.db")

# Skip create_all at startup (set in production when tables are managed elsewhere)
SKIP_DB_INIT = os.getenv("SKIP_DB_INIT", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ENV (development | production) is read by main before this module loads,
# since it decides whether .env is loaded at all.

"""
Book-thing backend: Google OAuth login, bearer/cookie session tokens, book library.

Load .env in development only (production uses env vars directly). Add CORS,
exception handlers for the application error types, optional DB init.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env only in development, before config reads the environment
if os.getenv("ENV", "development").lower() == "development":
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import FRONTEND_URL, LOG_LEVEL, SKIP_DB_INIT
from database import init_db
from errors import ProviderError, StoreUnavailable, Unauthorized
from auth import router as auth_router
from library import router as library_router
from users import router as users_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Create DB tables if not skipping
if not SKIP_DB_INIT:
    init_db()

app = FastAPI(
    title="Book-thing Backend",
    description="Google login, session tokens, and a token-protected book library.",
)

# CORS: explicit origin, allow credentials (cookies). Never use "*" with cookies.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL] if FRONTEND_URL else [],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    """Every gateway rejection looks the same: 401 with the literal text Unauthorized."""
    return PlainTextResponse("Unauthorized", status_code=401, headers={"WWW-Authenticate": "Bearer"})


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    # user_service has already logged the underlying database error
    logging.error("Store unavailable on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"detail": "Service unavailable"})


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    logging.error("Identity provider error on %s: %s", request.url.path, exc.msg)
    return JSONResponse(status_code=502, content={"detail": "Identity provider error"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions; log and return generic 500. Never leak stack traces."""
    # Let FastAPI handle HTTPException (validation etc.)
    if isinstance(exc, HTTPException):
        raise exc
    logging.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(library_router)
app.include_router(users_router)

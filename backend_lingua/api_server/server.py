"""
FastAPI server for the Lingua mini-app.

Routes are mounted under /api; the identity of every authenticated call comes
from the session token (see auth.py). Config via env (DATABASE_URL, SESSION_SECRET).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from backend_lingua import __version__
from backend_lingua.api_server.contacts import router as contacts_router
from backend_lingua.api_server.middleware import install_request_logging
from backend_lingua.api_server.ratings import router as ratings_router
from backend_lingua.api_server.users import router as users_router
from backend_lingua.core.exceptions import LinguaError, UpstreamFailure
from backend_lingua.database import init_db
from backend_lingua.lingua_logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    init_db()
    logger.info("api_started", version=__version__)
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="Backend Lingua API",
    description="Contacts, ratings and profiles for the Lingua language-exchange mini-app.",
    version=__version__,
    lifespan=lifespan,
)

install_request_logging(app)

app.include_router(contacts_router, prefix="/api")
app.include_router(ratings_router, prefix="/api")
app.include_router(users_router, prefix="/api")


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.exception_handler(LinguaError)
def lingua_error_handler(request: Any, exc: LinguaError) -> JSONResponse:
    """Map service errors to their status code with a JSON detail."""
    content: dict[str, Any] = {"detail": exc.message}
    if isinstance(exc, UpstreamFailure) and exc.details is not None:
        content["details"] = exc.details
    if exc.status_code >= 500:
        logger.warning("api_error", error_type=type(exc).__name__, detail=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --reload
"""

from fastapi import FastAPI  # The FastAPI framework

from app.core.config import settings  # Application settings
from app.core.cors import NoContentPreflightCORSMiddleware  # CORS with 204 preflights
from app.core.errors import AppError, app_error_handler  # {"message": ...} error bodies
from app.routers import account, tools  # Route handlers (endpoints)

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The web client sends its session cookie cross-origin, so credentials are
# allowed. With allow_origins=["*"] the caller's Origin is echoed back
# instead of a literal "*" (browsers reject "*" with credentials).
app.add_middleware(
    NoContentPreflightCORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Cookie"],
)

# ---------------------------------------------------------------------------
# ERROR HANDLING
# ---------------------------------------------------------------------------
# AppError subclasses (NotAuthenticated, DeletionFailed, ...) become
# {"message": "..."} with the error's status code.
app.add_exception_handler(AppError, app_error_handler)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# account.router: /api/delete-account
# tools.router: /api/enhance-prompt, /api/generate-tool, /api/analyze-image
app.include_router(account.router)
app.include_router(tools.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple liveness check.

    Does NOT check database connectivity or the AI provider.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}

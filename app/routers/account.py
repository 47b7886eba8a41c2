"""
Account router - account deletion endpoint.

DELETE /api/delete-account removes the session user and everything they
own, then tells the browser to drop its session cookie.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import DeletionFailed, NotAuthenticated, StorageUnavailable
from app.db.session import get_db
from app.deps import get_session_user_id
from app.schemas.account import AccountDeletedOut, MessageOut
from app.services.account_service import account_service

logger = logging.getLogger("edutools.account")

# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["account"])


@router.options("/delete-account", status_code=status.HTTP_204_NO_CONTENT)
def delete_account_options() -> Response:
    """
    Answer a bare OPTIONS request with 204.

    Real CORS preflights (with Access-Control-Request-Method) are answered
    by the CORS middleware before reaching this route, also with 204.
    """
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/delete-account",
    response_model=AccountDeletedOut,
    responses={
        401: {"model": MessageOut, "description": "Not authenticated"},
        500: {"model": MessageOut, "description": "Database not configured or deletion failed"},
    },
)
def delete_account(
    response: Response,
    user_id: Optional[uuid.UUID] = Depends(get_session_user_id),
    db: Optional[Session] = Depends(get_db),
):
    """
    Delete the authenticated user's account.

    Flow:
    1. Resolve the session cookie -> 401 if there is no valid session
    2. Check storage is configured -> 500 if not
    3. Cascade-delete in one transaction -> 500 if it fails (nothing deleted)
    4. Clear the session cookie and return {"success": true, ...}
    """
    if user_id is None:
        raise NotAuthenticated()

    if db is None:
        raise StorageUnavailable()

    try:
        account_service.delete_account(db, user_id)
    except DeletionFailed:
        raise
    except Exception as e:
        logger.exception(f"Delete account error: {e}")
        raise DeletionFailed() from e

    # Same attributes the cookie was set with, Max-Age=0
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path="/",
        secure=True,
        httponly=True,
        samesite="lax",
    )

    return AccountDeletedOut(success=True, message="Account deleted successfully")

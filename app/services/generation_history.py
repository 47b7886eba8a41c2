"""
Generation history - records generation attempts for signed-in users.

Recording is best effort: a database error is logged and rolled back
rather than changing the response the user gets.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.generation_request import GenerationRequest

logger = logging.getLogger("edutools.history")

GENERATION_COMPLETED = "completed"
GENERATION_FAILED = "failed"


def record_generation(
    db: Session,
    user_id: UUID,
    prompt: str,
    html: Optional[str],
    tool_type: Optional[str] = None,
    category: Optional[str] = None,
    status: str = GENERATION_COMPLETED,
) -> Optional[GenerationRequest]:
    """
    Store one generation attempt for the user.

    Args:
        html: The generated tool, or None for a failed attempt
        status: GENERATION_COMPLETED or GENERATION_FAILED

    Returns the saved row, or None if it could not be written.
    """
    record = GenerationRequest(
        user_id=user_id,
        prompt=prompt,
        tool_type=tool_type,
        category=category,
        html=html,
        status=status,
    )

    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Could not record generation for user {user_id}: {e}")
        return None

    return record

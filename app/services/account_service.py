"""
Account service - deletes a user and everything they own.

Deletion order matters: dependent rows go first, the user row last,
so foreign keys are never left dangling.

    generation_requests -> custom_tool_types -> custom_categories -> users

All four deletes run in ONE transaction. If any of them fails, the whole
cascade is rolled back and the account is left exactly as it was.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DeletionFailed
from app.models.custom_category import CustomCategory
from app.models.custom_tool_type import CustomToolType
from app.models.generation_request import GenerationRequest
from app.models.user import User

logger = logging.getLogger("edutools.account")


@dataclass
class DeletionSummary:
    """Row counts removed by one account deletion."""

    generation_requests: int = 0
    custom_tool_types: int = 0
    custom_categories: int = 0
    users: int = 0

    @property
    def total(self) -> int:
        return (
            self.generation_requests
            + self.custom_tool_types
            + self.custom_categories
            + self.users
        )


class AccountService:
    """
    Cascade-deletes user accounts.

    Usage:
        summary = account_service.delete_account(db, user_id)
    """

    # (summary field, model, owner column) in deletion order
    CASCADE = (
        ("generation_requests", GenerationRequest, GenerationRequest.user_id),
        ("custom_tool_types", CustomToolType, CustomToolType.user_id),
        ("custom_categories", CustomCategory, CustomCategory.user_id),
        ("users", User, User.id),
    )

    def delete_account(self, db: Session, user_id: UUID) -> DeletionSummary:
        """
        Delete every row owned by user_id, then the user.

        Args:
            db: Session; this method commits or rolls back
            user_id: The authenticated user's ID

        Returns:
            DeletionSummary with per-table counts

        Raises:
            DeletionFailed: a delete failed; nothing was removed
        """
        summary = DeletionSummary()

        try:
            for field_name, model, owner_column in self.CASCADE:
                result = db.execute(
                    delete(model)
                    .where(owner_column == user_id)
                    .execution_options(synchronize_session=False)
                )
                setattr(summary, field_name, result.rowcount or 0)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Delete account error for user {user_id}: {e}")
            raise DeletionFailed() from e

        logger.info(
            f"Deleted account {user_id}: "
            f"{summary.generation_requests} generation requests, "
            f"{summary.custom_tool_types} tool types, "
            f"{summary.custom_categories} categories"
        )
        return summary


# Singleton instance
account_service = AccountService()

"""
Account schemas - Pydantic models for account endpoint responses.
"""

from pydantic import BaseModel


class AccountDeletedOut(BaseModel):
    """
    Response for a successful DELETE /api/delete-account.

    Example response:
    {
        "success": true,
        "message": "Account deleted successfully"
    }
    """

    success: bool
    message: str


class MessageOut(BaseModel):
    """Error body used by every failure response: {"message": "..."}."""

    message: str

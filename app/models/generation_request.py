"""
GenerationRequest model - one educational tool generated for a user.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class GenerationRequest(Base):
    """
    SQLAlchemy ORM model for the 'generation_requests' table.

    Stores the prompt a user submitted and the HTML tool that came back,
    so the app can show a history of generated tools.
    """

    __tablename__ = "generation_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # Owner - deleted before the user row during account deletion
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False
    )

    # ---------------------------------------------------------------------------
    # REQUEST
    # ---------------------------------------------------------------------------
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    tool_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # ---------------------------------------------------------------------------
    # RESULT
    # ---------------------------------------------------------------------------
    html: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "completed" or "failed" (html is None when failed)
    status: Mapped[str] = mapped_column(String(20), default="completed")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    owner: Mapped["User"] = relationship("User", back_populates="generation_requests")

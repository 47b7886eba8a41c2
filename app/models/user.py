"""
User model - represents a registered user of the educational tools app.
Users own generation history plus their custom tool types and categories.
"""

import uuid  # Python's built-in module for generating unique identifiers
from datetime import datetime, timezone  # For timestamps with timezone awareness

from sqlalchemy import String, DateTime, Uuid  # Column types for database
from sqlalchemy.orm import Mapped, mapped_column, relationship  # SQLAlchemy 2.0 ORM tools

from app.db.base import Base  # Our declarative base class that all models inherit from


class User(Base):
    """
    SQLAlchemy ORM model for the 'users' table.

    A user can:
    - Generate interactive educational tools (stored as GenerationRequest rows)
    - Define their own tool types and categories
    - Delete their account, which removes every row they own
    """

    __tablename__ = "users"

    # ---------------------------------------------------------------------------
    # PRIMARY KEY
    # ---------------------------------------------------------------------------
    # Uuid maps to native UUID on PostgreSQL and CHAR(32) elsewhere (SQLite tests)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # ---------------------------------------------------------------------------
    # PROFILE INFORMATION
    # ---------------------------------------------------------------------------
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # ---------------------------------------------------------------------------
    # TIMESTAMPS
    # ---------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # ---------------------------------------------------------------------------
    # RELATIONSHIPS
    # ---------------------------------------------------------------------------
    # Account deletion issues explicit bulk deletes in dependency order,
    # so these relationships are read-only conveniences.
    generation_requests: Mapped[list["GenerationRequest"]] = relationship(
        "GenerationRequest", back_populates="owner"
    )
    custom_tool_types: Mapped[list["CustomToolType"]] = relationship(
        "CustomToolType", back_populates="owner"
    )
    custom_categories: Mapped[list["CustomCategory"]] = relationship(
        "CustomCategory", back_populates="owner"
    )

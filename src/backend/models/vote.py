"""
Vote model.

One vote per voter per subcategory, enforced by a unique constraint so that
concurrent duplicate votes are rejected by the database.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base
from models.nominator import utcnow


class Vote(Base):
    """A single vote cast for an approved nomination."""

    __tablename__ = "votes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    voter_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("voters.id", ondelete="CASCADE"),
        index=True,
    )
    nomination_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("nominations.id", ondelete="CASCADE"),
        index=True,
    )
    subcategory_id: Mapped[str] = mapped_column(String(100), index=True)

    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("voter_id", "subcategory_id", name="uq_votes_voter_subcategory"),
        Index("ix_votes_nomination_created", "nomination_id", "created_at"),
    )

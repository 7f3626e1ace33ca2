"""
Nomination model.

Links a nominee to an award subcategory. Nominations start as drafts and are
moderated by admins; only approved nominations are public and can receive
votes.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base
from models.nominator import Nominator, utcnow
from models.nominee import Nominee


class NominationStatus(str, Enum):
    """Moderation state. Only draft -> approved and draft -> rejected are allowed."""

    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"


class NominationSource(str, Enum):
    PUBLIC = "public"
    ADMIN = "admin"
    BULK = "bulk"


class Nomination(Base):
    """A nominee entered into one subcategory."""

    __tablename__ = "nominations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Bulk uploads may have no nominator
    nominator_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("nominators.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    nominee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("nominees.id", ondelete="CASCADE"),
        index=True,
    )

    category_group_id: Mapped[str] = mapped_column(String(100), index=True)
    subcategory_id: Mapped[str] = mapped_column(String(100), index=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=NominationStatus.DRAFT.value,
        server_default=NominationStatus.DRAFT.value,
        index=True,
    )

    # Real votes are counted by the vote endpoint; additional_votes is an admin adjustment
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    additional_votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    source: Mapped[str] = mapped_column(
        String(20),
        default=NominationSource.PUBLIC.value,
        server_default=NominationSource.PUBLIC.value,
    )
    upload_batch_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    nominee: Mapped[Nominee] = relationship(lazy="selectin")
    nominator: Mapped[Optional[Nominator]] = relationship(lazy="selectin")

    __table_args__ = (
        Index("ix_nominations_subcategory_status", "subcategory_id", "status"),
    )

    @property
    def total_votes(self) -> int:
        return (self.votes or 0) + (self.additional_votes or 0)

    @property
    def is_approved(self) -> bool:
        return self.status == NominationStatus.APPROVED.value

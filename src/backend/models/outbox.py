"""
HubSpot outbox model.

Domain writes append an event row in the same transaction; the sync job
drains pending rows into HubSpot later.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base
from models.nominator import utcnow


class OutboxEventType(str, Enum):
    NOMINATION_SUBMITTED = "nomination_submitted"
    NOMINATION_APPROVED = "nomination_approved"
    VOTE_CAST = "vote_cast"


class OutboxStatus(str, Enum):
    """pending -> processing -> done | pending (retry next run) | dead"""

    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    DEAD = "dead"


class HubSpotOutboxEvent(Base):
    """Pending CRM sync event."""

    __tablename__ = "hubspot_outbox"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    event_type: Mapped[str] = mapped_column(String(50), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON().with_variant(JSONB, "postgresql"))
    status: Mapped[str] = mapped_column(
        String(20),
        default=OutboxStatus.PENDING.value,
        server_default=OutboxStatus.PENDING.value,
    )
    attempt_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    last_error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_hubspot_outbox_status_created", "status", "created_at"),
    )

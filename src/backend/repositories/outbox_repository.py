"""HubSpot outbox repository."""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.outbox import HubSpotOutboxEvent, OutboxEventType, OutboxStatus

logger = logging.getLogger(__name__)


class OutboxRepository:
    """Repository for CRM sync outbox rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def enqueue(self, event_type: OutboxEventType, payload: dict[str, Any]) -> HubSpotOutboxEvent:
        """Append a pending event in the caller's transaction."""
        event = HubSpotOutboxEvent(
            event_type=event_type.value,
            payload=payload,
            status=OutboxStatus.PENDING.value,
            attempt_count=0,
        )
        self.db.add(event)
        await self.db.flush()
        logger.debug("Queued outbox event %s (%s)", event.id, event_type.value)
        return event

    async def claim_pending(self, limit: int) -> list[HubSpotOutboxEvent]:
        """
        Take up to ``limit`` pending events, oldest first, and mark them processing.

        Each claim counts as one attempt.
        """
        result = await self.db.execute(
            select(HubSpotOutboxEvent)
            .where(HubSpotOutboxEvent.status == OutboxStatus.PENDING.value)
            .order_by(HubSpotOutboxEvent.created_at)
            .limit(limit)
        )
        events = list(result.scalars().all())

        now = datetime.now(timezone.utc)
        for event in events:
            event.status = OutboxStatus.PROCESSING.value
            event.attempt_count = (event.attempt_count or 0) + 1
            event.updated_at = now

        await self.db.flush()
        return events

    async def mark_done(self, event: HubSpotOutboxEvent) -> None:
        event.status = OutboxStatus.DONE.value
        event.last_error = None
        event.updated_at = datetime.now(timezone.utc)
        await self.db.flush()

    async def mark_failed(self, event: HubSpotOutboxEvent, error: str, max_attempts: int) -> None:
        """Return the event to pending, or park it as dead once attempts are exhausted."""
        if event.attempt_count >= max_attempts:
            event.status = OutboxStatus.DEAD.value
        else:
            event.status = OutboxStatus.PENDING.value
        event.last_error = error[:2000]
        event.updated_at = datetime.now(timezone.utc)
        await self.db.flush()

    async def count_by_status(self, status: OutboxStatus) -> int:
        result = await self.db.execute(
            select(func.count(HubSpotOutboxEvent.id)).where(HubSpotOutboxEvent.status == status.value)
        )
        return result.scalar() or 0

"""
Tests for the HubSpot outbox repository.
"""

import pytest

from models import OutboxEventType, OutboxStatus
from repositories.outbox_repository import OutboxRepository


@pytest.mark.unit
class TestOutboxRepository:
    async def test_enqueue_pending(self, db_session) -> None:
        event = await OutboxRepository(db_session).enqueue(OutboxEventType.VOTE_CAST, {"vote_id": "v-1"})

        assert event.id
        assert event.status == "pending"
        assert event.attempt_count == 0
        assert event.payload == {"vote_id": "v-1"}

    async def test_claim_marks_processing(self, db_session) -> None:
        repo = OutboxRepository(db_session)
        for i in range(3):
            await repo.enqueue(OutboxEventType.VOTE_CAST, {"n": i})

        claimed = await repo.claim_pending(2)

        assert [e.payload["n"] for e in claimed] == [0, 1]
        assert {e.status for e in claimed} == {"processing"}
        assert {e.attempt_count for e in claimed} == {1}
        assert await repo.count_by_status(OutboxStatus.PENDING) == 1

    async def test_mark_failed_until_dead(self, db_session) -> None:
        repo = OutboxRepository(db_session)
        event = await repo.enqueue(OutboxEventType.VOTE_CAST, {})

        (claimed,) = await repo.claim_pending(1)
        await repo.mark_failed(claimed, "timeout", max_attempts=2)
        assert event.status == "pending"
        assert event.last_error == "timeout"

        (claimed,) = await repo.claim_pending(1)
        await repo.mark_failed(claimed, "timeout again", max_attempts=2)
        assert event.status == "dead"
        assert await repo.claim_pending(10) == []
        assert await repo.count_by_status(OutboxStatus.DEAD) == 1

    async def test_mark_done_clears_error(self, db_session) -> None:
        repo = OutboxRepository(db_session)
        await repo.enqueue(OutboxEventType.VOTE_CAST, {})
        (claimed,) = await repo.claim_pending(1)
        claimed.last_error = "old"

        await repo.mark_done(claimed)

        assert claimed.status == "done"
        assert claimed.last_error is None

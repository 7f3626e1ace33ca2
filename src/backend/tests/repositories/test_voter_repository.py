"""
Tests for voter and nominator upserts against SQLite.
"""

import pytest
from sqlalchemy import func, select

from db.upsert import insert_if_absent
from models import Nominator, Voter
from repositories.nominator_repository import NominatorRepository
from repositories.voter_repository import VoterRepository


@pytest.mark.unit
class TestInsertIfAbsent:
    async def test_conflicting_insert_is_ignored(self, db_session) -> None:
        values = {"email": "sam@staffingco.com", "firstname": "Sam", "lastname": "Lee"}
        await insert_if_absent(db_session, Voter, values, ["email"])
        await insert_if_absent(db_session, Voter, {**values, "firstname": "Other"}, ["email"])

        count = (await db_session.execute(select(func.count(Voter.id)))).scalar()
        voter = (await db_session.execute(select(Voter))).scalar_one()
        assert count == 1
        assert voter.firstname == "Sam"


@pytest.mark.unit
class TestVoterUpsert:
    async def test_creates_then_updates(self, session_maker) -> None:
        async with session_maker() as session:
            first = await VoterRepository(session).upsert(
                "Sam@StaffingCo.com", firstname="Sam", lastname="Lee", company="StaffingCo"
            )
            await session.commit()

        # Another request for the same voter; the row already exists when it inserts
        async with session_maker() as session:
            second = await VoterRepository(session).upsert(
                "sam@staffingco.com", firstname="Samuel", lastname="Lee", company=None
            )
            await session.commit()

            assert second.id == first.id
            assert second.email == "sam@staffingco.com"
            assert second.firstname == "Samuel"
            assert second.company == "StaffingCo"
            assert (await session.execute(select(func.count(Voter.id)))).scalar() == 1


@pytest.mark.unit
class TestNominatorUpsert:
    async def test_existing_profile_replaced(self, db_session) -> None:
        repo = NominatorRepository(db_session)
        first = await repo.upsert("dana@staffingco.com", firstname="Dana", lastname="Reyes", phone="555-0100")
        second = await repo.upsert("DANA@staffingco.com", firstname="Dana", lastname="Reyes-Kim", phone=None)

        assert second.id == first.id
        assert second.lastname == "Reyes-Kim"
        assert second.phone is None
        assert (await db_session.execute(select(func.count(Nominator.id)))).scalar() == 1

"""Voter repository for database operations."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.upsert import insert_if_absent
from models.voter import Voter


class VoterRepository:
    """Repository for voter database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[Voter]:
        result = await self.db.execute(select(Voter).where(Voter.email == email.lower()))
        return result.scalar_one_or_none()

    async def upsert(self, email: str, **fields: Any) -> Voter:
        """Create the voter or update the stored identity fields."""
        email = email.lower()
        await insert_if_absent(self.db, Voter, {"email": email, **fields}, ["email"])
        voter = await self.get_by_email(email)
        for key, value in fields.items():
            if value is not None:
                setattr(voter, key, value)
        voter.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        return voter

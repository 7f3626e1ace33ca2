"""Nominator repository for database operations."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.upsert import insert_if_absent
from models.nominator import Nominator


class NominatorRepository:
    """Repository for nominator database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[Nominator]:
        result = await self.db.execute(select(Nominator).where(Nominator.email == email.lower()))
        return result.scalar_one_or_none()

    async def upsert(self, email: str, **fields: Any) -> Nominator:
        """Create the nominator or refresh the profile of an existing one."""
        email = email.lower()
        await insert_if_absent(self.db, Nominator, {"email": email, **fields}, ["email"])
        nominator = await self.get_by_email(email)
        for key, value in fields.items():
            setattr(nominator, key, value)
        nominator.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        return nominator

"""
Vote repository for database operations.

One vote per voter per subcategory is enforced by the database; callers
map the resulting IntegrityError to a conflict response.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.vote import Vote


class VoteRepository:
    """Repository for vote database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists_for_voter(self, voter_id: str, subcategory_id: str) -> bool:
        """Check if the voter already voted in this subcategory."""
        result = await self.db.execute(
            select(func.count(Vote.id)).where(
                Vote.voter_id == voter_id,
                Vote.subcategory_id == subcategory_id,
            )
        )
        count = result.scalar() or 0
        return count > 0

    async def create(
        self,
        voter_id: str,
        nomination_id: str,
        subcategory_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Vote:
        """
        Insert a vote.

        Raises:
            sqlalchemy.exc.IntegrityError: the voter already voted in this subcategory
        """
        vote = Vote(
            voter_id=voter_id,
            nomination_id=nomination_id,
            subcategory_id=subcategory_id,
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None,
        )

        self.db.add(vote)
        await self.db.flush()
        await self.db.refresh(vote)

        return vote

    async def count_unique_voters(self) -> int:
        result = await self.db.execute(select(func.count(func.distinct(Vote.voter_id))))
        return result.scalar() or 0

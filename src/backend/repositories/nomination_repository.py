"""
Nomination repository for database operations.

Covers nominee creation, duplicate lookups, moderation listings, vote
counters and the aggregates behind the stats and podium endpoints.
"""

from typing import Any, Optional

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.categories import NomineeType
from models.nomination import Nomination, NominationSource, NominationStatus
from models.nominee import Nominee


class NominationRepository:
    """Repository for nomination database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, nomination_id: str) -> Optional[Nomination]:
        result = await self.db.execute(select(Nomination).where(Nomination.id == nomination_id))
        return result.scalar_one_or_none()

    async def get_approved(self, id_or_slug: str) -> Optional[Nomination]:
        """Get an approved nomination by nomination id, nominee id or nominee slug."""
        result = await self.db.execute(
            select(Nomination)
            .join(Nominee, Nomination.nominee_id == Nominee.id)
            .where(
                Nomination.status == NominationStatus.APPROVED.value,
                or_(
                    Nomination.id == id_or_slug,
                    Nominee.id == id_or_slug,
                    Nominee.slug == id_or_slug,
                ),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        nominee: Nominee,
        category_group_id: str,
        subcategory_id: str,
        nominator_id: Optional[str] = None,
        source: NominationSource = NominationSource.PUBLIC,
        upload_batch_id: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> Nomination:
        """Persist a nominee and its draft nomination."""
        nomination = Nomination(
            nominator_id=nominator_id,
            category_group_id=category_group_id,
            subcategory_id=subcategory_id,
            status=NominationStatus.DRAFT.value,
            votes=0,
            additional_votes=0,
            source=source.value,
            upload_batch_id=upload_batch_id,
            admin_notes=admin_notes,
        )
        nomination.nominee = nominee

        self.db.add(nomination)
        await self.db.flush()

        return nomination

    async def find_duplicate(
        self,
        subcategory_id: str,
        nominee_type: NomineeType,
        email: Optional[str] = None,
        linkedin: Optional[str] = None,
        company_name: Optional[str] = None,
    ) -> Optional[Nomination]:
        """
        Find a non-rejected nomination for the same nominee in a subcategory.

        People match on LinkedIn URL or email, companies on LinkedIn URL or
        case-insensitive name.
        """
        conditions = []
        if nominee_type == NomineeType.PERSON:
            if linkedin:
                conditions.append(Nominee.person_linkedin == linkedin)
            if email:
                conditions.append(func.lower(Nominee.person_email) == email.lower())
        else:
            if linkedin:
                conditions.append(Nominee.company_linkedin == linkedin)
            if company_name:
                conditions.append(func.lower(Nominee.company_name) == company_name.strip().lower())

        if not conditions:
            return None

        result = await self.db.execute(
            select(Nomination)
            .join(Nominee, Nomination.nominee_id == Nominee.id)
            .where(
                Nomination.subcategory_id == subcategory_id,
                Nomination.status != NominationStatus.REJECTED.value,
                Nominee.type == nominee_type.value,
                or_(*conditions),
            )
            .order_by(Nomination.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_for_admin(
        self,
        status: Optional[str] = None,
        subcategory_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Nomination], int]:
        """List nominations newest first, with the unpaged total."""
        filters = []
        if status:
            filters.append(Nomination.status == status)
        if subcategory_id:
            filters.append(Nomination.subcategory_id == subcategory_id)

        total_result = await self.db.execute(select(func.count(Nomination.id)).where(*filters))
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Nomination)
            .where(*filters)
            .order_by(Nomination.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def list_all(self, status: Optional[str] = None) -> list[Nomination]:
        query = select(Nomination).order_by(Nomination.created_at)
        if status:
            query = query.where(Nomination.status == status)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_approved(
        self,
        subcategory_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Nomination]:
        """Approved nominations sorted by total votes (real + additional), highest first."""
        query = (
            select(Nomination)
            .where(Nomination.status == NominationStatus.APPROVED.value)
            .order_by(
                (Nomination.votes + Nomination.additional_votes).desc(),
                Nomination.approved_at,
                Nomination.created_at,
            )
        )
        if subcategory_id:
            query = query.where(Nomination.subcategory_id == subcategory_id)
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def search_approved(self, text: str, limit: int) -> list[Nomination]:
        """Approved nominations whose nominee name, company name or job title contains ``text``."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        full_name = func.coalesce(Nominee.firstname, "") + " " + func.coalesce(Nominee.lastname, "")
        query = (
            select(Nomination)
            .join(Nominee, Nomination.nominee_id == Nominee.id)
            .where(
                Nomination.status == NominationStatus.APPROVED.value,
                or_(
                    full_name.ilike(pattern, escape="\\"),
                    Nominee.company_name.ilike(pattern, escape="\\"),
                    Nominee.jobtitle.ilike(pattern, escape="\\"),
                ),
            )
            .order_by((Nomination.votes + Nomination.additional_votes).desc(), Nomination.created_at)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_vote_counts(
self, subcategory_id: Optional[str] = None) -> list[Any]:
        """Current totals per approved nomination."""
        query = select(
            Nomination.id,
            Nomination.subcategory_id,
            (Nomination.votes + Nomination.additional_votes).label("total"),
        ).where(Nomination.status == NominationStatus.APPROVED.value)
        if subcategory_id:
            query = query.where(Nomination.subcategory_id == subcategory_id)
        result = await self.db.execute(query)
        return list(result.all())

    async def increment_votes(self, nomination_id: str) -> int:
        """Atomically add one real vote and return the new total."""
        await self.db.execute(
            update(Nomination)
            .where(Nomination.id == nomination_id)
            .values(votes=Nomination.votes + 1)
        )
        result = await self.db.execute(
            select(Nomination.votes + Nomination.additional_votes).where(Nomination.id == nomination_id)
        )
        return result.scalar() or 0

    async def slug_taken(self, slug: str, exclude_nominee_id: Optional[str] = None) -> bool:
        query = select(func.count(Nominee.id)).where(Nominee.slug == slug)
        if exclude_nominee_id:
            query = query.where(Nominee.id != exclude_nominee_id)
        result = await self.db.execute(query)
        return (result.scalar() or 0) > 0

    async def delete(self, nomination_id: str) -> bool:
        """Hard delete. Votes cascade in the database."""
        result = await self.db.execute(delete(Nomination).where(Nomination.id == nomination_id))
        return (result.rowcount or 0) > 0

    async def count_by_status(self) -> dict[str, int]:
        result = await self.db.execute(
            select(Nomination.status, func.count(Nomination.id)).group_by(Nomination.status)
        )
        return {row[0]: row[1] for row in result.all()}

    async def vote_totals(self) -> tuple[int, int]:
        """Sum of (real, additional) votes over approved nominations."""
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(Nomination.votes), 0),
                func.coalesce(func.sum(Nomination.additional_votes), 0),
            ).where(Nomination.status == NominationStatus.APPROVED.value)
        )
        row = result.one()
        return int(row[0]), int(row[1])

    async def stats_by_subcategory(self) -> list[Any]:
        approved = func.sum(case((Nomination.status == NominationStatus.APPROVED.value, 1), else_=0))
        result = await self.db.execute(
            select(
                Nomination.subcategory_id,
                func.count(Nomination.id).label("nominations"),
                func.coalesce(approved, 0).label("approved"),
                func.coalesce(func.sum(Nomination.votes + Nomination.additional_votes), 0).label("votes"),
            )
            .group_by(Nomination.subcategory_id)
            .order_by(Nomination.subcategory_id)
        )
        return list(result.all())

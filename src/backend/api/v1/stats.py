"""Aggregate statistics and the per-category podium."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import OptionalAdmin
from core.categories import get_subcategory
from db.session import get_db
from models.nomination import NominationStatus
from repositories.nomination_repository import NominationRepository
from repositories.vote_repository import VoteRepository
from schemas.converters import nomination_to_podium_entry
from schemas.stats import CategoryStats, PodiumResponse, StatsResponse

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, response_model_exclude_none=True)
async def get_stats(admin: OptionalAdmin, db: AsyncSession = Depends(get_db)) -> StatsResponse:
    """
    Public totals. Admins additionally get the real/additional vote split and
    per-category breakdown.
    """
    nomination_repo = NominationRepository(db)
    vote_repo = VoteRepository(db)

    by_status = await nomination_repo.count_by_status()
    real_votes, additional_votes = await nomination_repo.vote_totals()

    stats = StatsResponse(
        total_nominations=sum(by_status.values()),
        pending_nominations=by_status.get(NominationStatus.DRAFT.value, 0),
        approved_nominations=by_status.get(NominationStatus.APPROVED.value, 0),
        rejected_nominations=by_status.get(NominationStatus.REJECTED.value, 0),
        total_votes=real_votes + additional_votes,
        unique_voters=await vote_repo.count_unique_voters(),
    )

    if admin is not None:
        stats.real_votes = real_votes
        stats.additional_votes = additional_votes
        stats.by_category = [
            CategoryStats(
                subcategory_id=row.subcategory_id,
                nominations=row.nominations,
                approved=int(row.approved),
                votes=int(row.votes),
            )
            for row in await nomination_repo.stats_by_subcategory()
        ]

    return stats


@router.get("/podium", response_model=PodiumResponse)
async def get_podium(
    category: str = Query(..., min_length=1, description="Subcategory id"),
    db: AsyncSession = Depends(get_db),
) -> PodiumResponse:
    """Top three approved nominees in a subcategory by total votes."""
    subcategory = get_subcategory(category)
    if subcategory is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    top = await NominationRepository(db).list_approved(subcategory_id=category, limit=3)
    return PodiumResponse(
        category=category,
        title=subcategory.title,
        items=[nomination_to_podium_entry(n, rank) for rank, n in enumerate(top, start=1)],
    )

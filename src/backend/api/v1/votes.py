"""
Voting endpoints.

One vote per voter email per subcategory. The unique constraint on
(voter_id, subcategory_id) backs the pre-check, so concurrent double-submits
still get a 409.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import mask_email
from db.session import get_db
from models.outbox import OutboxEventType
from repositories.nomination_repository import NominationRepository
from repositories.outbox_repository import OutboxRepository
from repositories.vote_repository import VoteRepository
from repositories.voter_repository import VoterRepository
from schemas.vote import VoteCount, VoteCountsResponse, VoteCreate, VoteResponse
from services.nomination_service import vote_payload
from services.site_settings_service import get_site_status

logger = structlog.get_logger(__name__)

router = APIRouter()


def _client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post("/vote", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> VoteResponse:
    """
    Cast a vote for an approved nomination.

    Requirements:
    - Voting window must be open
    - Nomination must exist, be approved and belong to the given subcategory
    - The voter email has not voted in this subcategory yet
    """
    site = await get_site_status(db)
    if not site.voting_open:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=site.voting_closed_message)

    nomination_repo = NominationRepository(db)
    nomination = await nomination_repo.get_by_id(vote_data.nomination_id)
    if nomination is None or not nomination.is_approved:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nominee not found")

    if nomination.subcategory_id != vote_data.subcategory_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nominee does not belong to this category",
        )

    voter_in = vote_data.voter
    voter = await VoterRepository(db).upsert(
        voter_in.email,
        firstname=voter_in.firstname,
        lastname=voter_in.lastname,
        linkedin=voter_in.linkedin,
        company=voter_in.company,
        job_title=voter_in.job_title,
        country=voter_in.country,
    )

    vote_repo = VoteRepository(db)
    already_voted = HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="You have already voted in this category",
    )
    if await vote_repo.exists_for_voter(voter.id, nomination.subcategory_id):
        logger.info("duplicate_vote", voter=mask_email(voter.email), subcategory_id=nomination.subcategory_id)
        raise already_voted

    try:
        vote = await vote_repo.create(
            voter_id=voter.id,
            nomination_id=nomination.id,
            subcategory_id=nomination.subcategory_id,
            ip_address=_client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    except IntegrityError as e:
        # Lost a race with a concurrent vote; the request transaction is rolled back
        logger.info("duplicate_vote_race", voter=mask_email(voter.email), subcategory_id=nomination.subcategory_id)
        raise already_voted from e

    new_count = await nomination_repo.increment_votes(nomination.id)
    await OutboxRepository(db).enqueue(OutboxEventType.VOTE_CAST, vote_payload(vote, voter, nomination))

    logger.info("vote_cast", nomination_id=nomination.id, subcategory_id=nomination.subcategory_id)

    return VoteResponse(
        success=True,
        message="Vote recorded",
        vote_id=vote.id,
        nomination_id=nomination.id,
        new_vote_count=new_count,
    )


@router.get("/votes/counts", response_model=VoteCountsResponse)
async def get_vote_counts(
    subcategory_id: Optional[str] = Query(None),
    subcategory_id_camel: Optional[str] = Query(None, alias="subcategoryId", include_in_schema=False),
    db: AsyncSession = Depends(get_db),
) -> VoteCountsResponse:
    """Current vote totals per approved nomination, for polling clients."""
    rows = await NominationRepository(db).get_vote_counts(subcategory_id or subcategory_id_camel)
    return VoteCountsResponse(
        counts=[VoteCount(nomination_id=row[0], subcategory_id=row[1], votes=row[2]) for row in rows]
    )

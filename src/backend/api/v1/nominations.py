"""
Public nomination endpoints.

Submissions create draft nominations that admins moderate. An admin session
bypasses the nominations-closed check so staff can add entries late.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import OptionalAdmin
from core.categories import get_subcategory
from core.security import mask_email
from db.session import get_db
from models.nomination import NominationSource
from models.outbox import OutboxEventType
from repositories.nomination_repository import NominationRepository
from repositories.nominator_repository import NominatorRepository
from repositories.outbox_repository import OutboxRepository
from schemas.common import normalize_linkedin_url
from schemas.nomination import (
    NominationCheckResponse,
    NominationSubmit,
    NominationSubmitResponse,
    PersonNomineeInput,
)
from services.nomination_service import build_nominee, submitted_payload
from services.site_settings_service import get_site_status

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/nomination/submit", response_model=NominationSubmitResponse)
async def submit_nomination(
    payload: NominationSubmit,
    admin: OptionalAdmin,
    db: AsyncSession = Depends(get_db),
) -> NominationSubmitResponse:
    """
    Submit a nomination.

    Upserts the nominator by email, creates the nominee and a draft
    nomination, and queues a CRM sync event in the same transaction.
    """
    if admin is None:
        site = await get_site_status(db)
        if not site.nominations_open:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=site.nominations_close_message,
            )

    nominee_in = payload.nominee
    is_person = isinstance(nominee_in, PersonNomineeInput)
    repo = NominationRepository(db)

    duplicate = await repo.find_duplicate(
        subcategory_id=payload.subcategory_id,
        nominee_type=payload.type,
        email=nominee_in.email if is_person else None,
        linkedin=nominee_in.linkedin,
        company_name=None if is_person else nominee_in.name,
    )
    if duplicate is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This nominee has already been nominated in this category",
        )

    nominator_in = payload.nominator
    nominator = await NominatorRepository(db).upsert(
        nominator_in.email,
        firstname=nominator_in.firstname,
        lastname=nominator_in.lastname,
        linkedin=nominator_in.linkedin,
        company=nominator_in.company,
        job_title=nominator_in.job_title,
        phone=nominator_in.phone,
        country=nominator_in.country,
    )

    nomination = await repo.create(
        nominee=build_nominee(nominee_in),
        category_group_id=payload.category_group_id or "",
        subcategory_id=payload.subcategory_id,
        nominator_id=nominator.id,
        source=NominationSource.ADMIN if admin else NominationSource.PUBLIC,
    )
    await OutboxRepository(db).enqueue(
        OutboxEventType.NOMINATION_SUBMITTED,
        submitted_payload(nomination, nominator),
    )

    logger.info(
        "nomination_submitted",
        nomination_id=nomination.id,
        subcategory_id=nomination.subcategory_id,
        nominator=mask_email(nominator.email),
    )

    return NominationSubmitResponse(
        nomination_id=nomination.id,
        nominator_id=nominator.id,
        nominee_id=nomination.nominee_id,
        status=nomination.status,
    )


@router.get("/nominations/check", response_model=NominationCheckResponse)
async def check_nomination(
    subcategory_id: str = Query(..., min_length=1),
    email: Optional[str] = Query(None),
    linkedin: Optional[str] = Query(None),
    company_name: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> NominationCheckResponse:
    """Whether a non-rejected nomination already exists for this nominee in the subcategory."""
    subcategory = get_subcategory(subcategory_id)
    if subcategory is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown subcategory")

    normalized_linkedin = None
    if linkedin:
        try:
            normalized_linkedin = normalize_linkedin_url(linkedin)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if not (email or normalized_linkedin or company_name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide email, linkedin or company_name",
        )

    existing = await NominationRepository(db).find_duplicate(
        subcategory_id=subcategory_id,
        nominee_type=subcategory.nominee_type,
        email=email.strip().lower() if email else None,
        linkedin=normalized_linkedin,
        company_name=company_name,
    )
    if existing is None:
        return NominationCheckResponse(exists=False)
    return NominationCheckResponse(exists=True, nomination_id=existing.id, status=existing.status)

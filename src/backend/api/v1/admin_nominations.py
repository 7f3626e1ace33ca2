"""
Admin nomination moderation endpoints.

All routes require an admin session cookie.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentAdmin, get_current_admin
from core.security import mask_email
from db.session import get_db
from models.nomination import NominationStatus
from repositories.nomination_repository import NominationRepository
from schemas.admin import (
    AdminNominationListResponse,
    AdminNominationResponse,
    BulkApproveFailure,
    BulkApproveRequest,
    BulkApproveResponse,
    NominationUpdate,
)
from schemas.converters import nomination_to_admin_response
from services.nomination_service import (
    InvalidTransitionError,
    approve_nomination,
    export_nominations_csv,
    reject_nomination,
)

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=AdminNominationListResponse)
async def list_nominations(
    status_filter: Optional[NominationStatus] = Query(None, alias="status"),
    subcategory_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> AdminNominationListResponse:
    """List nominations newest first, filtered by status and subcategory."""
    nominations, total = await NominationRepository(db).list_for_admin(
        status=status_filter.value if status_filter else None,
        subcategory_id=subcategory_id,
        limit=per_page,
        offset=(page - 1) * per_page,
    )
    return AdminNominationListResponse(
        nominations=[nomination_to_admin_response(n) for n in nominations],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/export")
async def export_nominations(
    status_filter: Optional[NominationStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Download nominations as CSV."""
    nominations = await NominationRepository(db).list_all(status=status_filter.value if status_filter else None)
    filename = f"wsa-nominations-{datetime.now(timezone.utc):%Y%m%d}.csv"
    return Response(
        content=export_nominations_csv(nominations),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-approve", response_model=BulkApproveResponse)
async def bulk_approve(
    request: BulkApproveRequest,
    admin: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> BulkApproveResponse:
    """Approve several drafts; failures are reported per id and do not stop the batch."""
    repo = NominationRepository(db)
    approved: list[str] = []
    failed: list[BulkApproveFailure] = []

    for nomination_id in dict.fromkeys(request.nomination_ids):
        nomination = await repo.get_by_id(nomination_id)
        if nomination is None:
            failed.append(BulkApproveFailure(id=nomination_id, error="Nomination not found"))
            continue
        try:
            await approve_nomination(db, nomination, admin.email)
        except InvalidTransitionError as e:
            failed.append(BulkApproveFailure(id=nomination_id, error=str(e)))
            continue
        approved.append(nomination_id)

    logger.info("bulk_approve", approved=len(approved), failed=len(failed), admin=mask_email(admin.email))
    return BulkApproveResponse(approved=approved, failed=failed)


@router.get("/{nomination_id}", response_model=AdminNominationResponse)
async def get_nomination(nomination_id: str, db: AsyncSession = Depends(get_db)) -> AdminNominationResponse:
    nomination = await NominationRepository(db).get_by_id(nomination_id)
    if nomination is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nomination not found")
    return nomination_to_admin_response(nomination)


@router.patch("/{nomination_id}", response_model=AdminNominationResponse)
async def update_nomination(
    nomination_id: str,
    update: NominationUpdate,
    admin: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> AdminNominationResponse:
    """
    Edit a nomination and optionally change its status.

    Only draft -> approved and draft -> rejected are allowed; anything else
    returns 409.
    """
    nomination = await NominationRepository(db).get_by_id(nomination_id)
    if nomination is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nomination not found")

    now = datetime.now(timezone.utc)
    changes = update.model_dump(exclude_unset=True, exclude={"status", "rejection_reason"})
    nominee = nomination.nominee

    if "admin_notes" in changes:
        nomination.admin_notes = changes["admin_notes"]
    if changes.get("additional_votes") is not None:
        nomination.additional_votes = changes["additional_votes"]
    if "live_url" in changes:
        nominee.live_url = changes["live_url"]
    if changes.get("why_vote") is not None:
        if nominee.is_person:
            nominee.why_me = changes["why_vote"]
        else:
            nominee.why_us = changes["why_vote"]
    if "linkedin" in changes:
        if nominee.is_person:
            nominee.person_linkedin = changes["linkedin"]
        else:
            nominee.company_linkedin = changes["linkedin"]
    if changes.get("image_url") is not None:
        if nominee.is_person:
            nominee.headshot_url = changes["image_url"]
        else:
            nominee.logo_url = changes["image_url"]
    for field in ("bio", "achievements"):
        if field in changes:
            setattr(nominee, field, changes[field])

    nomination.updated_at = now
    nominee.updated_at = now
    await db.flush()

    try:
        if update.status == NominationStatus.APPROVED.value:
            await approve_nomination(db, nomination, admin.email)
        elif update.status == NominationStatus.REJECTED.value:
            await reject_nomination(db, nomination, update.rejection_reason)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    logger.info(
        "nomination_updated",
        nomination_id=nomination.id,
        fields=sorted(changes),
        status=nomination.status,
        admin=mask_email(admin.email),
    )
    return nomination_to_admin_response(nomination)


@router.delete("/{nomination_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_nomination(
    nomination_id: str,
    admin: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Permanently delete a nomination and its votes."""
    deleted = await NominationRepository(db).delete(nomination_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nomination not found")
    logger.info("nomination_deleted", nomination_id=nomination_id, admin=mask_email(admin.email))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

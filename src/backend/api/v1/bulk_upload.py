"""Admin CSV bulk upload of nominations."""

import uuid

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentAdmin
from core.categories import NomineeType
from core.config import settings
from core.security import mask_email
from db.session import get_db
from models.nomination import NominationSource
from repositories.nomination_repository import NominationRepository
from schemas.admin import BulkUploadResponse, BulkUploadRowError
from schemas.bulk_upload import BulkUploadRow
from services.nomination_service import BulkUploadError, nominee_from_bulk_row, parse_bulk_upload

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/bulk-upload", response_model=BulkUploadResponse)
async def bulk_upload(
    admin: CurrentAdmin,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
) -> BulkUploadResponse:
    """
    Create draft nominations from a CSV file.

    Invalid rows and duplicates are reported with their row number; valid
    rows are imported. All rows share one upload batch id.
    """
    content = await file.read()
    try:
        rows = parse_bulk_upload(content, settings.MAX_BULK_UPLOAD_ROWS)
    except BulkUploadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    batch_id = str(uuid.uuid4())
    repo = NominationRepository(db)
    created = 0
    errors: list[BulkUploadRowError] = []

    for row_number, row in rows:
        if not isinstance(row, BulkUploadRow):
            errors.append(BulkUploadRowError(row=row_number, errors=row))
            continue

        duplicate = await repo.find_duplicate(
            subcategory_id=row.subcategory_id,
            nominee_type=row.type,
            email=row.email,
            linkedin=row.linkedin,
            company_name=row.company_name if row.type == NomineeType.COMPANY else None,
        )
        if duplicate is not None:
            errors.append(BulkUploadRowError(row=row_number, errors=["Nominee already nominated in this category"]))
            continue

        await repo.create(
            nominee=nominee_from_bulk_row(row),
            category_group_id=row.category_group_id,
            subcategory_id=row.subcategory_id,
            source=NominationSource.BULK,
            upload_batch_id=batch_id,
            admin_notes=_nominator_note(row),
        )
        created += 1

    logger.info(
        "bulk_upload_complete",
        batch_id=batch_id,
        rows=len(rows),
        created=created,
        failed=len(errors),
        admin=mask_email(admin.email),
    )
    return BulkUploadResponse(
        batch_id=batch_id,
        total_rows=len(rows),
        created=created,
        failed=len(errors),
        errors=errors,
    )


def _nominator_note(row: BulkUploadRow) -> str | None:
    if not (row.nominator_name or row.nominator_email):
        return None
    parts = [p for p in (row.nominator_name, row.nominator_email) if p]
    return f"Nominated by: {' - '.join(parts)}"

"""Public directory of approved nominees."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_db
from repositories.nomination_repository import NominationRepository
from schemas.converters import nomination_to_nominee_response
from schemas.nomination import NomineeListResponse, NomineeResponse

router = APIRouter()


@router.get("", response_model=NomineeListResponse)
async def list_nominees(
    subcategory_id: Optional[str] = Query(None),
    subcategory_id_camel: Optional[str] = Query(None, alias="subcategoryId", include_in_schema=False),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> NomineeListResponse:
    """Approved nominees sorted by total votes, highest first."""
    nominations = await NominationRepository(db).list_approved(
        subcategory_id=subcategory_id or subcategory_id_camel,
        limit=limit,
    )
    nominees = [nomination_to_nominee_response(n) for n in nominations]
    return NomineeListResponse(nominees=nominees, total=len(nominees))


@router.get("/{id_or_slug}", response_model=NomineeResponse)
async def get_nominee(id_or_slug: str, db: AsyncSession = Depends(get_db)) -> NomineeResponse:
    """One approved nominee by nomination id, nominee id or slug."""
    nomination = await NominationRepository(db).get_approved(id_or_slug)
    if nomination is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nominee not found")
    return nomination_to_nominee_response(nomination)

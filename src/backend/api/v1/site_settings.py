"""Public site settings and the admin settings update."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentAdmin
from core.security import mask_email
from db.session import get_db
from repositories.settings_repository import SettingsRepository
from schemas.settings import PublicSettingsResponse, SettingsUpdate
from services.site_settings_service import SiteStatus, get_site_status

logger = structlog.get_logger(__name__)

router = APIRouter()


def _to_response(site: SiteStatus) -> PublicSettingsResponse:
    return PublicSettingsResponse(
        nominations_enabled=site.nominations_enabled,
        nominations_open=site.nominations_open,
        voting_open=site.voting_open,
        voting_start_date=site.voting_start,
        voting_end_date=site.voting_end,
        nomination_deadline=site.nomination_deadline,
        nominations_close_message=site.nominations_close_message,
        voting_closed_message=site.voting_closed_message,
    )


@router.get("/settings", response_model=PublicSettingsResponse)
async def get_public_settings(db: AsyncSession = Depends(get_db)) -> PublicSettingsResponse:
    """Current nomination/voting status for the public site."""
    return _to_response(await get_site_status(db))


@router.put("/admin/settings", response_model=PublicSettingsResponse)
async def update_settings(
    update: SettingsUpdate,
    admin: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> PublicSettingsResponse:
    """Write the provided settings keys and return the resulting status."""
    repo = SettingsRepository(db)
    changes = update.model_dump(exclude_unset=True)

    for key, value in changes.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        await repo.set(key, value or None, updated_by=admin.email)

    logger.info("settings_updated", keys=sorted(changes), admin=mask_email(admin.email))
    return _to_response(await get_site_status(db))

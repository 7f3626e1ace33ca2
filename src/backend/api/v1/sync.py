"""
HubSpot CRM sync endpoints.

``POST /run`` drains the outbox (admin session or cron secret);
``GET /run`` checks connectivity (admin session).
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentAdmin, require_admin_or_cron
from core.config import settings
from core.security import mask_email
from db.session import get_db
from models.outbox import OutboxStatus
from repositories.outbox_repository import OutboxRepository
from schemas.sync import SyncHealthResponse, SyncItemResult, SyncRunResponse
from services.hubspot_client import HubSpotClient, HubSpotError, get_hubspot_client
from services.hubspot_sync import HubSpotSyncService

logger = structlog.get_logger(__name__)

router = APIRouter()


def require_hubspot_client() -> HubSpotClient:
    client = get_hubspot_client()
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="HubSpot integration is not configured",
        )
    return client


@router.post("/run", response_model=SyncRunResponse)
async def run_sync(
    limit: Optional[int] = Query(None, ge=1, le=100),
    caller: str = Depends(require_admin_or_cron),
    client: HubSpotClient = Depends(require_hubspot_client),
    db: AsyncSession = Depends(get_db),
) -> SyncRunResponse:
    """Push up to ``limit`` pending outbox events to HubSpot."""
    batch_size = limit or settings.HUBSPOT_SYNC_BATCH_SIZE
    logger.info("hubspot_sync_run_started", caller=mask_email(caller) if caller != "cron" else caller, limit=batch_size)

    run = await HubSpotSyncService(client).process_outbox(db, batch_size)
    return SyncRunResponse(
        processed=run.processed,
        succeeded=run.succeeded,
        failed=run.failed,
        results=[
            SyncItemResult(id=r.id, event_type=r.event_type, status=r.status, error=r.error)
            for r in run.results
        ],
    )


@router.get("/run", response_model=SyncHealthResponse)
async def check_sync(admin: CurrentAdmin, db: AsyncSession = Depends(get_db)) -> SyncHealthResponse:
    """Report HubSpot configuration, connectivity and outbox backlog."""
    repo = OutboxRepository(db)
    pending = await repo.count_by_status(OutboxStatus.PENDING)
    dead = await repo.count_by_status(OutboxStatus.DEAD)

    client = get_hubspot_client()
    if client is None:
        return SyncHealthResponse(configured=False, connected=False, pending=pending, dead=dead)

    try:
        details = await client.get_account_details()
    except HubSpotError as e:
        logger.warning("hubspot_connectivity_failed", error=str(e))
        return SyncHealthResponse(configured=True, connected=False, pending=pending, dead=dead, error=str(e))

    return SyncHealthResponse(
        configured=True,
        connected=True,
        portal_id=(details or {}).get("portalId"),
        pending=pending,
        dead=dead,
    )

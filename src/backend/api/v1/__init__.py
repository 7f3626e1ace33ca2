"""
API router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.admin_nominations import router as admin_nominations_router
from api.v1.auth import router as auth_router
from api.v1.bulk_upload import router as bulk_upload_router
from api.v1.categories import router as categories_router
from api.v1.nominations import router as nominations_router
from api.v1.nominees import router as nominees_router
from api.v1.search import router as search_router
from api.v1.site_settings import router as site_settings_router
from api.v1.stats import router as stats_router
from api.v1.sync import router as sync_router
from api.v1.votes import router as votes_router

router = APIRouter()

router.include_router(categories_router, prefix="/categories", tags=["Categories"])
router.include_router(site_settings_router, tags=["Settings"])
router.include_router(nominations_router, tags=["Nominations"])
router.include_router(nominees_router, prefix="/nominees", tags=["Nominees"])
router.include_router(search_router, tags=["Search"])
router.include_router(votes_router, tags=["Votes"])
router.include_router(stats_router, tags=["Statistics"])
router.include_router(auth_router, prefix="/admin", tags=["Admin Authentication"])
router.include_router(admin_nominations_router, prefix="/admin/nominations", tags=["Admin"])
router.include_router(bulk_upload_router, prefix="/admin", tags=["Admin"])
router.include_router(sync_router, prefix="/sync/hubspot", tags=["CRM Sync"])

"""
Application lifecycle event handlers.

Manages startup and shutdown tasks for the database engine and the HubSpot
HTTP client.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from db.session import close_db, init_db
from services.hubspot_client import close_hubspot_client

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("Starting World Staffing Awards API...")

        if settings.DB_AUTO_CREATE:
            await init_db()
            logger.info("Database tables created")

        if not settings.admin_credentials:
            logger.warning("No admin credentials configured; admin endpoints will reject all logins")
        if not settings.HUBSPOT_ACCESS_TOKEN:
            logger.warning("HUBSPOT_ACCESS_TOKEN not set; CRM sync is disabled")

        logger.info("World Staffing Awards API started successfully")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("Shutting down World Staffing Awards API...")

        await close_hubspot_client()
        await close_db()

        logger.info("World Staffing Awards API shutdown complete")

    return stop_app

"""
Shared dependencies for API endpoints.

Includes:
- Admin session authentication (signed cookie)
- Cron secret authentication for scheduled sync triggers
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request, status

from core.config import settings
from core.security import decode_admin_session_token, is_configured_admin, mask_email, secrets_match

logger = structlog.get_logger(__name__)


@dataclass
class AdminSession:
    """Decoded admin session. Never stored server-side."""

    email: str
    issued_at: datetime
    expires_at: datetime


def _session_from_request(request: Request) -> Optional[AdminSession]:
    token = request.cookies.get(settings.ADMIN_SESSION_COOKIE_NAME)
    if not token:
        return None

    payload = decode_admin_session_token(token)
    if payload is None:
        return None

    email = payload["sub"]
    # Admins removed from configuration lose access immediately
    if not is_configured_admin(email):
        logger.warning("admin_session_for_unknown_admin", email=mask_email(email))
        return None

    return AdminSession(
        email=email,
        issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


async def get_optional_admin(request: Request) -> Optional[AdminSession]:
    """
    Return the admin session if a valid cookie is present.

    Does not raise - useful for public endpoints that show more to admins.
    """
    return _session_from_request(request)


async def get_current_admin(request: Request) -> AdminSession:
    """
    Require a valid admin session cookie.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired.
    """
    session = _session_from_request(request)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin authentication required",
        )
    return session


async def require_admin_or_cron(
    request: Request,
    x_cron_secret: Annotated[Optional[str], Header()] = None,
) -> str:
    """
    Allow either an admin session or the shared cron secret.

    Returns:
        A label for the caller, used in logs ("cron" or the admin email).
    """
    if secrets_match(x_cron_secret, settings.CRON_SECRET):
        return "cron"

    session = _session_from_request(request)
    if session is not None:
        return session.email

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Admin session or cron secret required",
    )


CurrentAdmin = Annotated[AdminSession, Depends(get_current_admin)]
OptionalAdmin = Annotated[Optional[AdminSession], Depends(get_optional_admin)]

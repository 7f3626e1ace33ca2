"""
Admin authentication endpoints.

Admins log in with an email/password pair configured in the environment and
receive a signed session cookie. Failures never reveal which field was wrong.
"""

import structlog
from fastapi import APIRouter, HTTPException, Response, status

from api.deps import CurrentAdmin
from core.config import settings
from core.security import authenticate_admin, create_admin_session_token, mask_email
from schemas.auth import AdminLoginRequest, AdminSessionResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.ADMIN_SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ADMIN_SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post("/login", response_model=AdminSessionResponse)
async def login(credentials: AdminLoginRequest, response: Response) -> AdminSessionResponse:
    """Check admin credentials and start a session."""
    email = authenticate_admin(credentials.email, credentials.password)
    if email is None:
        logger.warning("admin_login_failed", email=mask_email(credentials.email))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token, expires_at = create_admin_session_token(email)
    _set_session_cookie(response, token)
    logger.info("admin_login", email=mask_email(email))

    return AdminSessionResponse(email=email, expires_at=expires_at)


@router.post("/logout")
async def logout(response: Response) -> dict[str, bool]:
    """Clear the session cookie. Always succeeds."""
    response.delete_cookie(
        key=settings.ADMIN_SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return {"success": True}


@router.get("/session", response_model=AdminSessionResponse)
async def get_session(admin: CurrentAdmin) -> AdminSessionResponse:
    """Report the current admin session (401 if none)."""
    return AdminSessionResponse(email=admin.email, expires_at=admin.expires_at)

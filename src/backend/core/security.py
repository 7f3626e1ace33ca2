"""Security utilities for admin authentication.

Admins are configured through environment variables (email + bcrypt hash
pairs). A successful login yields a signed, time-limited session token that
is carried in an HttpOnly cookie.
"""

import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from core.config import settings

# Token issuer and audience for validation
TOKEN_ISSUER = "wsa-api"
TOKEN_AUDIENCE = "wsa-admin"
ADMIN_SESSION_TOKEN_TYPE = "admin_session"

# Compared against when the email is unknown so both failure paths cost one bcrypt round
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=12))


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (for ADMIN_PASSWORD_HASHES)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time bcrypt comparison. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def authenticate_admin(email: str, password: str) -> str | None:
    """
    Check submitted credentials against the configured admin pairs.

    Returns:
        The normalized admin email on success, None otherwise. Callers must not
        reveal which part of the credentials was wrong.
    """
    normalized = email.strip().lower()
    stored_hash = settings.admin_credentials.get(normalized)

    if stored_hash is None:
        bcrypt.checkpw(password.encode("utf-8"), _DUMMY_HASH)
        return None

    if not verify_password(password, stored_hash):
        return None
    return normalized


def is_configured_admin(email: str) -> bool:
    return email.strip().lower() in settings.admin_credentials


def create_admin_session_token(
    email: str,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create a signed admin session token. Returns (token, expires_at)."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ADMIN_SESSION_TTL_MINUTES))
    claims = {
        "sub": email,
        "exp": expire,
        "iat": now,
        "type": ADMIN_SESSION_TOKEN_TYPE,
        "iss": TOKEN_ISSUER,
        "aud": TOKEN_AUDIENCE,
        "jti": secrets.token_urlsafe(16),
    }
    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, expire


def decode_admin_session_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate an admin session token.

    Returns:
        The decoded payload or None if invalid, expired, or of the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=TOKEN_ISSUER,
            audience=TOKEN_AUDIENCE,
        )
    except JWTError:
        return None
    if payload.get("type") != ADMIN_SESSION_TOKEN_TYPE or not payload.get("sub"):
        return None
    return payload


def secrets_match(provided: str | None, expected: str | None) -> bool:
    """Constant-time comparison for shared secrets (e.g. cron triggers)."""
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def mask_email(email: str | None) -> str:
    """Redact an email address for log output."""
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@***{domain[-4:]}"

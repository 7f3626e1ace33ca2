"""
Shared field validators and annotated types for request schemas.

Format transforms (lowercasing emails, normalizing LinkedIn URLs) happen here
so handlers only ever see canonical values.
"""

import re
from typing import Annotated, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BeforeValidator, EmailStr, StringConstraints

PERSONAL_EMAIL_DOMAINS = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "aol.com",
        "icloud.com",
        "me.com",
        "mac.com",
        "live.com",
        "msn.com",
        "ymail.com",
        "rocketmail.com",
        "protonmail.com",
        "tutanota.com",
        "mail.com",
        "gmx.com",
        "zoho.com",
        "fastmail.com",
    }
)

_LINKEDIN_RE = re.compile(
    r"^(?:https?://)?(?:[a-z]{2,3}\.|www\.)?linkedin\.com/(in|company)/([^/?#\s]+)/?(?:[?#].*)?$",
    re.IGNORECASE,
)


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return _strip(value)


def lowercase_email(value: str) -> str:
    return value.strip().lower()


def ensure_business_email(value: str) -> str:
    domain = value.rsplit("@", 1)[-1].lower()
    if domain in PERSONAL_EMAIL_DOMAINS:
        raise ValueError(
            "Please use a business email address. Personal email domains "
            "(Gmail, Yahoo, etc.) are not allowed"
        )
    return value


def normalize_linkedin_url(value: str) -> str:
    """
    Normalize a LinkedIn profile or company URL.

    Accepts the URL with or without scheme, ``www.`` or a country subdomain,
    trailing slash, query string or fragment, and returns
    ``https://www.linkedin.com/in/<slug>`` (or ``/company/<slug>``).
    """
    match = _LINKEDIN_RE.match(value.strip())
    if not match:
        raise ValueError("Please enter a valid LinkedIn URL (e.g., https://www.linkedin.com/in/username)")
    kind, slug = match.group(1).lower(), match.group(2).lower()
    return f"https://www.linkedin.com/{kind}/{slug}"


def validate_http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Please enter a valid website URL")
    return value


def validate_image_url(value: str) -> str:
    """Absolute http(s) URLs or site-relative paths."""
    if value.startswith("/"):
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Please provide a valid image URL")
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
Email = Annotated[EmailStr, AfterValidator(lowercase_email)]
BusinessEmail = Annotated[EmailStr, AfterValidator(lowercase_email), AfterValidator(ensure_business_email)]
LinkedInUrl = Annotated[str, BeforeValidator(_strip), AfterValidator(normalize_linkedin_url)]
WebsiteUrl = Annotated[str, BeforeValidator(_strip), AfterValidator(validate_http_url)]
ImageUrl = Annotated[str, BeforeValidator(_strip), AfterValidator(validate_image_url)]
WhyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]
LongText = Annotated[
    Optional[Annotated[str, StringConstraints(max_length=2000)]],
    BeforeValidator(_blank_to_none),
]


def optional_linkedin(value: Optional[str]) -> Optional[str]:
    """Normalize an optional LinkedIn URL; blank values become None."""
    if value is None or not value.strip():
        return None
    return normalize_linkedin_url(value)


OptionalLinkedInUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(optional_linkedin)]


def optional_website(value: Optional[str]) -> Optional[str]:
    return validate_http_url(value) if value else None


def optional_image(value: Optional[str]) -> Optional[str]:
    return validate_image_url(value) if value else None


OptionalWebsiteUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(optional_website)]
OptionalImageUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(optional_image)]

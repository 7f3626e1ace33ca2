"""
Site status derived from admin-managed settings.

Voting is open when a start date is set, now >= start and now < end (if an
end date is set). Nominations are open when they are not explicitly disabled,
voting has not started and the nomination deadline (if any) has not passed.
Missing settings leave nominations open.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.settings_repository import SettingsRepository

logger = structlog.get_logger(__name__)

NOMINATIONS_ENABLED = "nominations_enabled"
VOTING_START_DATE = "voting_start_date"
VOTING_END_DATE = "voting_end_date"
NOMINATION_DEADLINE = "nomination_deadline"
NOMINATIONS_CLOSE_MESSAGE = "nominations_close_message"
VOTING_CLOSED_MESSAGE = "voting_closed_message"

DEFAULT_NOMINATIONS_CLOSED_MESSAGE = "Nominations are currently closed"
DEFAULT_VOTING_CLOSED_MESSAGE = "Voting is currently closed"


def parse_setting_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO-8601 setting; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.warning("invalid_setting_datetime", value=value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class SiteStatus:
    nominations_enabled: bool
    nominations_open: bool
    voting_open: bool
    voting_start: Optional[datetime]
    voting_end: Optional[datetime]
    nomination_deadline: Optional[datetime]
    nominations_close_message: str
    voting_closed_message: str


def compute_site_status(values: dict[str, Optional[str]], now: Optional[datetime] = None) -> SiteStatus:
    now = now or datetime.now(timezone.utc)
    start = parse_setting_datetime(values.get(VOTING_START_DATE))
    end = parse_setting_datetime(values.get(VOTING_END_DATE))
    deadline = parse_setting_datetime(values.get(NOMINATION_DEADLINE))

    voting_open = start is not None and now >= start and (end is None or now < end)
    nominations_enabled = (values.get(NOMINATIONS_ENABLED) or "").strip().lower() != "false"

    return SiteStatus(
        nominations_enabled=nominations_enabled,
        nominations_open=nominations_enabled and not voting_open and (deadline is None or now < deadline),
        voting_open=voting_open,
        voting_start=start,
        voting_end=end,
        nomination_deadline=deadline,
        nominations_close_message=values.get(NOMINATIONS_CLOSE_MESSAGE) or DEFAULT_NOMINATIONS_CLOSED_MESSAGE,
        voting_closed_message=values.get(VOTING_CLOSED_MESSAGE) or DEFAULT_VOTING_CLOSED_MESSAGE,
    )


async def get_site_status(db: AsyncSession) -> SiteStatus:
    values = await SettingsRepository(db).get_all()
    return compute_site_status(values)

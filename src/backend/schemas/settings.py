"""Site settings schemas."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator


class PublicSettingsResponse(BaseModel):
    """Settings exposed to the public site, with derived open/closed flags."""

    nominations_enabled: bool
    nominations_open: bool
    voting_open: bool
    voting_start_date: Optional[datetime] = None
    voting_end_date: Optional[datetime] = None
    nomination_deadline: Optional[datetime] = None
    nominations_close_message: Optional[str] = None
    voting_closed_message: Optional[str] = None


class SettingsUpdate(BaseModel):
    """
    Admin update of site settings. Only provided keys are written.

    Dates are stored as ISO-8601 strings; an empty string clears a date. A new
    nomination deadline must lie in the future.
    """

    nominations_enabled: Optional[bool] = None
    voting_start_date: Optional[str] = None
    voting_end_date: Optional[str] = None
    nomination_deadline: Optional[str] = None
    nominations_close_message: Optional[str] = None
    voting_closed_message: Optional[str] = None

    @field_validator("voting_start_date", "voting_end_date")
    @classmethod
    def validate_iso_date(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return v
        try:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError("Must be an ISO-8601 date/time") from e
        return v

    @field_validator("nomination_deadline")
    @classmethod
    def validate_deadline(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return v
        try:
            deadline = datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError("Must be an ISO-8601 date/time") from e
        if deadline.tzinfo is None:
            deadline = deadline.replace(tzinfo=timezone.utc)
        if deadline <= datetime.now(timezone.utc):
            raise ValueError("Nomination deadline must be in the future")
        return v

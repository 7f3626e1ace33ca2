"""Row schema for admin CSV bulk uploads."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from core.categories import NomineeType, get_subcategory
from schemas.common import (
    Email,
    ImageUrl,
    LongText,
    OptionalLinkedInUrl,
    OptionalStr,
    OptionalWebsiteUrl,
)

BULK_UPLOAD_COLUMNS = (
    "type",
    "subcategory_id",
    "first_name",
    "last_name",
    "job_title",
    "company_name",
    "email",
    "linkedin",
    "website",
    "country",
    "why_vote_for_me",
    "headshot_url",
    "logo_url",
    "bio",
    "achievements",
    "nominator_name",
    "nominator_email",
)


def _blank_cell_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class BulkUploadRow(BaseModel):
    """One CSV row. Unknown columns are ignored; blank cells are treated as missing."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    type: NomineeType
    subcategory_id: str
    first_name: OptionalStr = None
    last_name: OptionalStr = None
    job_title: OptionalStr = None
    company_name: OptionalStr = None
    email: Optional[Email] = None
    linkedin: OptionalLinkedInUrl = None
    website: OptionalWebsiteUrl = None
    country: OptionalStr = None
    why_vote_for_me: LongText = None
    headshot_url: Optional[ImageUrl] = None
    logo_url: Optional[ImageUrl] = None
    bio: LongText = None
    achievements: LongText = None
    nominator_name: OptionalStr = None
    nominator_email: Optional[Email] = None

    @model_validator(mode="before")
    @classmethod
    def blank_cells_to_none(cls, data: object) -> object:
        if isinstance(data, dict):
            cleaned = {k: _blank_cell_to_none(v) for k, v in data.items() if k is not None}
            if isinstance(cleaned.get("type"), str):
                cleaned["type"] = cleaned["type"].strip().lower()
            return cleaned
        return data

    @model_validator(mode="after")
    def check_required_for_type(self) -> "BulkUploadRow":
        subcategory = get_subcategory(self.subcategory_id)
        if subcategory is None:
            raise ValueError(f"Unknown subcategory: {self.subcategory_id}")
        if subcategory.nominee_type != self.type:
            raise ValueError(f"Category '{subcategory.title}' only accepts {subcategory.nominee_type.value} nominees")
        if self.type == NomineeType.PERSON:
            missing = [f for f in ("first_name", "last_name", "job_title") if not getattr(self, f)]
        else:
            missing = [f for f in ("company_name", "website") if not getattr(self, f)]
        if missing:
            raise ValueError(f"Missing required fields for {self.type.value}: {', '.join(missing)}")
        if self.why_vote_for_me and len(self.why_vote_for_me) > 1000:
            raise ValueError("why_vote_for_me must be at most 1000 characters")
        return self

    @property
    def category_group_id(self) -> str:
        subcategory = get_subcategory(self.subcategory_id)
        return subcategory.group_id if subcategory else ""

"""Admin moderation schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.common import LongText, OptionalImageUrl, OptionalLinkedInUrl, OptionalStr, OptionalWebsiteUrl


class NominationUpdate(BaseModel):
    """
    Admin edit of a nomination.

    ``status`` moves a draft to approved or rejected; every other field is a
    plain edit applied to the nomination or its nominee.
    """

    status: Optional[Literal["approved", "rejected"]] = None
    rejection_reason: OptionalStr = None
    admin_notes: Optional[str] = None
    additional_votes: Optional[int] = Field(default=None, ge=0)
    live_url: OptionalWebsiteUrl = None
    why_vote: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    bio: LongText = None
    achievements: LongText = None
    linkedin: OptionalLinkedInUrl = None
    image_url: OptionalImageUrl = None


class BulkApproveRequest(BaseModel):
    nomination_ids: list[str] = Field(min_length=1, max_length=500)


class BulkApproveFailure(BaseModel):
    id: str
    error: str


class BulkApproveResponse(BaseModel):
    approved: list[str]
    failed: list[BulkApproveFailure]


class NominatorSummary(BaseModel):
    id: str
    email: str
    name: str
    company: Optional[str] = None


class AdminNominationResponse(BaseModel):
    """Full admin view of a nomination, nominee and nominator."""

    id: str
    status: str
    source: str
    category_group_id: str
    subcategory_id: str
    nominee_id: str
    nominee_type: str
    nominee_name: str
    nominee_email: Optional[str] = None
    nominee_linkedin: Optional[str] = None
    image_url: Optional[str] = None
    why_vote: Optional[str] = None
    live_url: Optional[str] = None
    slug: Optional[str] = None
    bio: Optional[str] = None
    achievements: Optional[str] = None
    votes: int
    additional_votes: int
    total_votes: int
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    upload_batch_id: Optional[str] = None
    nominator: Optional[NominatorSummary] = None
    created_at: datetime
    updated_at: datetime


class AdminNominationListResponse(BaseModel):
    nominations: list[AdminNominationResponse]
    total: int
    page: int
    per_page: int


class BulkUploadRowError(BaseModel):
    row: int
    errors: list[str]


class BulkUploadResponse(BaseModel):
    batch_id: str
    total_rows: int
    created: int
    failed: int
    errors: list[BulkUploadRowError]

"""
Nomination-related Pydantic schemas.

The nominee payload shape depends on the top-level ``type``: person nominees
need a name, job title, headshot and "why me"; companies need a name,
website, logo and "why us".
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from core.categories import NomineeType, get_subcategory
from schemas.common import (
    BusinessEmail,
    Email,
    ImageUrl,
    LinkedInUrl,
    LongText,
    NonEmptyStr,
    OptionalLinkedInUrl,
    OptionalStr,
    OptionalWebsiteUrl,
    WebsiteUrl,
    WhyText,
)


class NominatorInput(BaseModel):
    """Person submitting the nomination."""

    model_config = ConfigDict(populate_by_name=True)

    firstname: NonEmptyStr = Field(validation_alias=AliasChoices("firstname", "firstName"))
    lastname: NonEmptyStr = Field(validation_alias=AliasChoices("lastname", "lastName"))
    email: BusinessEmail
    linkedin: LinkedInUrl
    company: OptionalStr = None
    job_title: OptionalStr = Field(default=None, validation_alias=AliasChoices("job_title", "jobTitle"))
    phone: OptionalStr = None
    country: OptionalStr = None


class PersonNomineeInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["person"] = "person"
    firstname: NonEmptyStr = Field(validation_alias=AliasChoices("firstname", "firstName"))
    lastname: NonEmptyStr = Field(validation_alias=AliasChoices("lastname", "lastName"))
    jobtitle: NonEmptyStr = Field(validation_alias=AliasChoices("jobtitle", "jobTitle", "title"))
    email: Optional[Email] = None
    linkedin: OptionalLinkedInUrl = None
    company: OptionalStr = None
    country: OptionalStr = None
    headshot_url: ImageUrl = Field(validation_alias=AliasChoices("headshot_url", "headshotUrl", "imageUrl"))
    why_me: WhyText = Field(validation_alias=AliasChoices("why_me", "whyMe", "whyVoteForMe"))
    live_url: OptionalWebsiteUrl = Field(default=None, validation_alias=AliasChoices("live_url", "liveUrl"))
    bio: LongText = None
    achievements: LongText = None


class CompanyNomineeInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["company"] = "company"
    name: NonEmptyStr
    website: WebsiteUrl
    linkedin: OptionalLinkedInUrl = None
    country: OptionalStr = None
    size: OptionalStr = None
    industry: OptionalStr = None
    logo_url: ImageUrl = Field(validation_alias=AliasChoices("logo_url", "logoUrl", "imageUrl"))
    why_us: WhyText = Field(validation_alias=AliasChoices("why_us", "whyUs", "whyVoteForMe"))
    live_url: OptionalWebsiteUrl = Field(default=None, validation_alias=AliasChoices("live_url", "liveUrl"))
    bio: LongText = None
    achievements: LongText = None


NomineeInput = Annotated[Union[PersonNomineeInput, CompanyNomineeInput], Field(discriminator="type")]


class NominationSubmit(BaseModel):
    """Public nomination submission."""

    model_config = ConfigDict(populate_by_name=True)

    type: NomineeType
    subcategory_id: str = Field(validation_alias=AliasChoices("subcategory_id", "subcategoryId"))
    category_group_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("category_group_id", "categoryGroupId"),
    )
    nominator: NominatorInput
    nominee: NomineeInput

    @model_validator(mode="before")
    @classmethod
    def tag_nominee_with_type(cls, data: Any) -> Any:
        """The nominee shape is selected by the top-level type."""
        if isinstance(data, dict) and isinstance(data.get("nominee"), dict) and "type" in data:
            data = {**data, "nominee": {**data["nominee"], "type": data["type"]}}
        return data

    @field_validator("subcategory_id")
    @classmethod
    def validate_subcategory(cls, v: str) -> str:
        if get_subcategory(v) is None:
            raise ValueError(f"Unknown subcategory: {v}")
        return v

    @model_validator(mode="after")
    def check_category(self) -> "NominationSubmit":
        subcategory = get_subcategory(self.subcategory_id)
        if subcategory is None:
            return self
        if self.category_group_id is None:
            self.category_group_id = subcategory.group_id
        elif self.category_group_id != subcategory.group_id:
            raise ValueError("Subcategory does not belong to the given category group")
        if subcategory.nominee_type != self.type:
            raise ValueError(f"Category '{subcategory.title}' only accepts {subcategory.nominee_type.value} nominees")
        return self


class NominationSubmitResponse(BaseModel):
    success: bool = True
    nomination_id: str
    nominator_id: Optional[str] = None
    nominee_id: str
    status: str


class NominationCheckResponse(BaseModel):
    exists: bool
    nomination_id: Optional[str] = None
    status: Optional[str] = None


class NomineeResponse(BaseModel):
    """Public view of an approved nomination."""

    nomination_id: str
    nominee_id: str
    type: str
    display_name: str
    subcategory_id: str
    category_group_id: str
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    why_vote: Optional[str] = None
    live_url: Optional[str] = None
    slug: Optional[str] = None
    jobtitle: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    country: Optional[str] = None
    bio: Optional[str] = None
    achievements: Optional[str] = None
    votes: int
    approved_at: Optional[datetime] = None


class NomineeListResponse(BaseModel):
    nominees: list[NomineeResponse]
    total: int

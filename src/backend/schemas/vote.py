"""Vote-related Pydantic schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from schemas.common import BusinessEmail, LinkedInUrl, NonEmptyStr, OptionalStr


class VoterInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    firstname: NonEmptyStr = Field(validation_alias=AliasChoices("firstname", "firstName"))
    lastname: NonEmptyStr = Field(validation_alias=AliasChoices("lastname", "lastName"))
    email: BusinessEmail
    linkedin: LinkedInUrl
    company: OptionalStr = None
    job_title: OptionalStr = Field(default=None, validation_alias=AliasChoices("job_title", "jobTitle"))
    country: OptionalStr = None


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    model_config = ConfigDict(populate_by_name=True)

    nomination_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("nomination_id", "nominationId", "nomineeId"),
    )
    subcategory_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("subcategory_id", "subcategoryId", "category"),
    )
    voter: VoterInput


class VoteResponse(BaseModel):
    """Response after successfully casting a vote."""

    success: bool
    message: str
    vote_id: str
    nomination_id: str
    new_vote_count: int


class VoteCount(BaseModel):
    nomination_id: str
    subcategory_id: str
    votes: int


class VoteCountsResponse(BaseModel):
    counts: list[VoteCount]

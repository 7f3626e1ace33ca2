"""Admin authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from schemas.common import Email


class AdminLoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1, max_length=200)


class AdminSessionResponse(BaseModel):
    authenticated: bool = True
    email: str
    expires_at: datetime

"""Schemas module initialization."""

from schemas.auth import AdminLoginRequest, AdminSessionResponse
from schemas.nomination import NominationSubmit, NominationSubmitResponse, NomineeResponse
from schemas.settings import PublicSettingsResponse, SettingsUpdate
from schemas.vote import VoteCreate, VoteResponse

__all__ = [
    "AdminLoginRequest",
    "AdminSessionResponse",
    "NominationSubmit",
    "NominationSubmitResponse",
    "NomineeResponse",
    "PublicSettingsResponse",
    "SettingsUpdate",
    "VoteCreate",
    "VoteResponse",
]

"""CRM sync job schemas."""

from typing import Optional

from pydantic import BaseModel


class SyncItemResult(BaseModel):
    id: str
    event_type: str
    status: str
    error: Optional[str] = None


class SyncRunResponse(BaseModel):
    processed: int
    succeeded: int
    failed: int
    results: list[SyncItemResult]


class SyncHealthResponse(BaseModel):
    configured: bool
    connected: bool
    portal_id: Optional[int] = None
    pending: int
    dead: int
    error: Optional[str] = None

"""Statistics and podium schemas."""

from typing import Optional

from pydantic import BaseModel


class CategoryStats(BaseModel):
    subcategory_id: str
    nominations: int
    approved: int
    votes: int


class StatsResponse(BaseModel):
    total_nominations: int
    pending_nominations: int
    approved_nominations: int
    rejected_nominations: int
    total_votes: int
    unique_voters: int
    # Admin-only breakdown
    real_votes: Optional[int] = None
    additional_votes: Optional[int] = None
    by_category: Optional[list[CategoryStats]] = None


class PodiumEntry(BaseModel):
    rank: int
    nomination_id: str
    display_name: str
    image_url: Optional[str] = None
    live_url: Optional[str] = None
    slug: Optional[str] = None
    votes: int


class PodiumResponse(BaseModel):
    category: str
    title: str
    items: list[PodiumEntry]


class SubcategoryResponse(BaseModel):
    id: str
    title: str
    nominee_type: str


class CategoryGroupResponse(BaseModel):
    id: str
    title: str
    subcategories: list[SubcategoryResponse]


class CategoriesResponse(BaseModel):
    groups: list[CategoryGroupResponse]

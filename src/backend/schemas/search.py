"""Public search suggestion schemas."""

from typing import Literal, Optional

from pydantic import BaseModel


class SearchSuggestion(BaseModel):
    text: str
    type: Literal["name", "company", "category"]
    url: Optional[str] = None
    nomination_id: Optional[str] = None
    subcategory_id: Optional[str] = None


class SearchSuggestionsResponse(BaseModel):
    query: str
    suggestions: list[SearchSuggestion]

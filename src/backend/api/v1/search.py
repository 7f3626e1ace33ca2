"""
Search suggestions for the public nominee directory.

Matches approved nominees by name, company name or job title, followed by
subcategories whose title matches. Queries shorter than two characters
return no suggestions.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.categories import SUBCATEGORIES
from db.session import get_db
from repositories.nomination_repository import NominationRepository
from schemas.search import SearchSuggestion, SearchSuggestionsResponse

router = APIRouter()

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 10


@router.get("/search/suggestions", response_model=SearchSuggestionsResponse)
async def search_suggestions(
    q: str = Query("", max_length=100),
    db: AsyncSession = Depends(get_db),
) -> SearchSuggestionsResponse:
    text = q.strip()
    if len(text) < MIN_QUERY_LENGTH:
        return SearchSuggestionsResponse(query=text, suggestions=[])

    suggestions: list[SearchSuggestion] = []
    seen: set[str] = set()

    for nomination in await NominationRepository(db).search_approved(text, limit=MAX_SUGGESTIONS):
        nominee = nomination.nominee
        name = nominee.display_name
        if not name or name in seen:
            continue
        seen.add(name)
        suggestions.append(
            SearchSuggestion(
                text=name,
                type="name" if nominee.is_person else "company",
                url=f"/nominee/{nominee.slug or nomination.id}",
                nomination_id=nomination.id,
                subcategory_id=nomination.subcategory_id,
            )
        )

    needle = text.lower()
    for sub in SUBCATEGORIES:
        if needle in sub.title.lower() and sub.title not in seen:
            seen.add(sub.title)
            suggestions.append(SearchSuggestion(text=sub.title, type="category", subcategory_id=sub.id))

    return SearchSuggestionsResponse(query=text, suggestions=suggestions[:MAX_SUGGESTIONS])

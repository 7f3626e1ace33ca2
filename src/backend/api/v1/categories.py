"""Award category catalogue endpoint."""

from fastapi import APIRouter

from schemas.converters import categories_to_schema
from schemas.stats import CategoriesResponse

router = APIRouter()


@router.get("", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    """All category groups and their subcategories."""
    return categories_to_schema()

"""
Schema converter functions.

Centralized helper functions for converting SQLAlchemy models to Pydantic schemas.
These are the single source of truth for model-to-schema conversions.
"""

from typing import TYPE_CHECKING

from core.categories import CATEGORY_GROUPS, SUBCATEGORIES
from schemas.admin import AdminNominationResponse, NominatorSummary
from schemas.nomination import NomineeResponse
from schemas.stats import CategoriesResponse, CategoryGroupResponse, PodiumEntry, SubcategoryResponse

if TYPE_CHECKING:
    from models.nomination import Nomination


def nomination_to_nominee_response(nomination: "Nomination") -> NomineeResponse:
    """
    Public view of an approved nomination.

    ``votes`` is the public total (real + additional).
    """
    nominee = nomination.nominee
    return NomineeResponse(
        nomination_id=nomination.id,
        nominee_id=nominee.id,
        type=nominee.type,
        display_name=nominee.display_name,
        subcategory_id=nomination.subcategory_id,
        category_group_id=nomination.category_group_id,
        image_url=nominee.image_url,
        linkedin_url=nominee.linkedin_url,
        why_vote=nominee.why_vote,
        live_url=nominee.live_url,
        slug=nominee.slug,
        jobtitle=nominee.jobtitle,
        company=nominee.person_company if nominee.is_person else nominee.company_name,
        website=nominee.company_website,
        country=nominee.country,
        bio=nominee.bio,
        achievements=nominee.achievements,
        votes=nomination.total_votes,
        approved_at=nomination.approved_at,
    )


def nomination_to_admin_response(nomination: "Nomination") -> AdminNominationResponse:
    nominee = nomination.nominee
    nominator = nomination.nominator
    return AdminNominationResponse(
        id=nomination.id,
        status=nomination.status,
        source=nomination.source,
        category_group_id=nomination.category_group_id,
        subcategory_id=nomination.subcategory_id,
        nominee_id=nominee.id,
        nominee_type=nominee.type,
        nominee_name=nominee.display_name,
        nominee_email=nominee.email,
        nominee_linkedin=nominee.linkedin_url,
        image_url=nominee.image_url,
        why_vote=nominee.why_vote,
        live_url=nominee.live_url,
        slug=nominee.slug,
        bio=nominee.bio,
        achievements=nominee.achievements,
        votes=nomination.votes,
        additional_votes=nomination.additional_votes,
        total_votes=nomination.total_votes,
        admin_notes=nomination.admin_notes,
        rejection_reason=nomination.rejection_reason,
        approved_at=nomination.approved_at,
        approved_by=nomination.approved_by,
        upload_batch_id=nomination.upload_batch_id,
        nominator=(
            NominatorSummary(
                id=nominator.id,
                email=nominator.email,
                name=nominator.full_name,
                company=nominator.company,
            )
            if nominator
            else None
        ),
        created_at=nomination.created_at,
        updated_at=nomination.updated_at,
    )


def nomination_to_podium_entry(nomination: "Nomination", rank: int) -> PodiumEntry:
    nominee = nomination.nominee
    return PodiumEntry(
        rank=rank,
        nomination_id=nomination.id,
        display_name=nominee.display_name,
        image_url=nominee.image_url,
        live_url=nominee.live_url,
        slug=nominee.slug,
        votes=nomination.total_votes,
    )


def categories_to_schema() -> CategoriesResponse:
    return CategoriesResponse(
        groups=[
            CategoryGroupResponse(
                id=group.id,
                title=group.title,
                subcategories=[
                    SubcategoryResponse(id=sub.id, title=sub.title, nominee_type=sub.nominee_type.value)
                    for sub in SUBCATEGORIES
                    if sub.group_id == group.id
                ],
            )
            for group in CATEGORY_GROUPS
        ]
    )

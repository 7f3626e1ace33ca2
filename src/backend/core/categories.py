"""
Award category catalogue.

Categories are fixed for the awards season: each subcategory belongs to one
category group and accepts either person or company nominees.
"""

from dataclasses import dataclass
from enum import Enum


class NomineeType(str, Enum):
    """Kind of entity a nomination is for."""

    PERSON = "person"
    COMPANY = "company"


@dataclass(frozen=True)
class CategoryGroup:
    id: str
    title: str


@dataclass(frozen=True)
class Subcategory:
    id: str
    group_id: str
    title: str
    nominee_type: NomineeType


CATEGORY_GROUPS: tuple[CategoryGroup, ...] = (
    CategoryGroup("role-specific-excellence", "Role-Specific Excellence"),
    CategoryGroup("innovation-technology", "Innovation & Technology"),
    CategoryGroup("culture-impact", "Culture & Impact"),
    CategoryGroup("growth-performance", "Growth & Performance"),
    CategoryGroup("geographic-excellence", "Geographic Excellence"),
    CategoryGroup("special-recognition", "Special Recognition"),
)

SUBCATEGORIES: tuple[Subcategory, ...] = (
    # Role-Specific Excellence
    Subcategory("top-recruiter", "role-specific-excellence", "Top Recruiter", NomineeType.PERSON),
    Subcategory("top-executive-leader", "role-specific-excellence", "Top Executive Leader", NomineeType.PERSON),
    Subcategory("rising-star-under-30", "role-specific-excellence", "Rising Star (Under 30)", NomineeType.PERSON),
    Subcategory("top-staffing-influencer", "role-specific-excellence", "Top Staffing Influencer", NomineeType.PERSON),
    Subcategory("best-sourcer", "role-specific-excellence", "Best Sourcer", NomineeType.PERSON),
    # Innovation & Technology
    Subcategory(
        "top-ai-driven-staffing-platform",
        "innovation-technology",
        "Top AI-Driven Staffing Platform",
        NomineeType.COMPANY,
    ),
    Subcategory(
        "top-digital-experience-for-clients",
        "innovation-technology",
        "Top Digital Experience for Clients",
        NomineeType.COMPANY,
    ),
    # Culture & Impact
    Subcategory("top-women-led-staffing-firm", "culture-impact", "Top Women-Led Staffing Firm", NomineeType.COMPANY),
    Subcategory(
        "fastest-growing-staffing-firm",
        "culture-impact",
        "Fastest Growing Staffing Firm",
        NomineeType.COMPANY,
    ),
    Subcategory(
        "best-diversity-inclusion-initiative",
        "culture-impact",
        "Best Diversity & Inclusion Initiative",
        NomineeType.COMPANY,
    ),
    Subcategory("best-candidate-experience", "culture-impact", "Best Candidate Experience", NomineeType.COMPANY),
    # Growth & Performance
    Subcategory(
        "best-staffing-process-at-scale",
        "growth-performance",
        "Best Staffing Process at Scale",
        NomineeType.COMPANY,
    ),
    Subcategory(
        "thought-leadership-and-influence",
        "growth-performance",
        "Thought Leadership & Influence",
        NomineeType.PERSON,
    ),
    Subcategory("best-recruitment-agency", "growth-performance", "Best Recruitment Agency", NomineeType.COMPANY),
    Subcategory(
        "best-in-house-recruitment-team",
        "growth-performance",
        "Best In-House Recruitment Team",
        NomineeType.COMPANY,
    ),
    # Geographic Excellence
    Subcategory("top-staffing-company-usa", "geographic-excellence", "Top Staffing Company - USA", NomineeType.COMPANY),
    Subcategory(
        "top-staffing-company-europe",
        "geographic-excellence",
        "Top Staffing Company - Europe",
        NomineeType.COMPANY,
    ),
    Subcategory("top-global-recruiter", "geographic-excellence", "Top Global Recruiter", NomineeType.PERSON),
    # Special Recognition
    Subcategory("special-recognition", "special-recognition", "Special Recognition", NomineeType.PERSON),
)

_SUBCATEGORIES_BY_ID = {sub.id: sub for sub in SUBCATEGORIES}
_GROUPS_BY_ID = {group.id: group for group in CATEGORY_GROUPS}


def get_subcategory(subcategory_id: str) -> Subcategory | None:
    return _SUBCATEGORIES_BY_ID.get(subcategory_id)


def get_category_group(group_id: str) -> CategoryGroup | None:
    return _GROUPS_BY_ID.get(group_id)


def is_valid_subcategory(subcategory_id: str) -> bool:
    return subcategory_id in _SUBCATEGORIES_BY_ID

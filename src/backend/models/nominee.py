"""
Nominee model.

A nominee is either a person or a company. Only the fields for its type are
populated; the ``display_name``, ``image_url``, ``linkedin_url`` and
``why_vote`` properties pick the right one for presentation.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from core.categories import NomineeType
from db.base import Base
from models.nominator import utcnow


class Nominee(Base):
    """Person or company put forward for an award."""

    __tablename__ = "nominees"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    type: Mapped[str] = mapped_column(String(20), index=True)

    # Person fields
    firstname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    person_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    person_linkedin: Mapped[Optional[str]] = mapped_column(String(500), nullable=True, index=True)
    jobtitle: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    person_company: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    person_country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    headshot_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    why_me: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Company fields
    company_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, index=True)
    company_website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    company_linkedin: Mapped[Optional[str]] = mapped_column(String(500), nullable=True, index=True)
    company_country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    company_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    company_industry: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    why_us: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Shared
    live_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    slug: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, unique=True, index=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    achievements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    @property
    def is_person(self) -> bool:
        return self.type == NomineeType.PERSON.value

    @property
    def display_name(self) -> str:
        if self.is_person:
            return f"{self.firstname or ''} {self.lastname or ''}".strip()
        return self.company_name or ""

    @property
    def image_url(self) -> Optional[str]:
        return self.headshot_url if self.is_person else self.logo_url

    @property
    def linkedin_url(self) -> Optional[str]:
        return self.person_linkedin if self.is_person else self.company_linkedin

    @property
    def why_vote(self) -> Optional[str]:
        return self.why_me if self.is_person else self.why_us

    @property
    def email(self) -> Optional[str]:
        return self.person_email if self.is_person else None

    @property
    def country(self) -> Optional[str]:
        return self.person_country if self.is_person else self.company_country

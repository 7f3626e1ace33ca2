"""
Pytest fixtures for World Staffing Awards backend tests.

The database dependency is overridden with an in-memory SQLite engine so
route handlers run end-to-end without PostgreSQL.
"""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

ADMIN_EMAIL = "admin@worldstaffingawards.com"
ADMIN_PASSWORD = "correct-horse-battery-staple"
CRON_SECRET = "test-cron-secret"

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SITE_URL", "https://awards.example.com")
os.environ.setdefault("CRON_SECRET", CRON_SECRET)
os.environ.setdefault("ADMIN_EMAILS", ADMIN_EMAIL)
os.environ.setdefault(
    "ADMIN_PASSWORD_HASHES",
    bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8"),
)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
async def db_engine() -> AsyncGenerator[Any, None]:
    """Fresh in-memory database per test."""
    import models  # noqa: F401
    from db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: Any) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def app(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[Any, None]:
    """FastAPI application wired to the test database."""
    from db.session import get_db
    from main import app as fastapi_app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Origin": "http://localhost:3000"},
    ) as ac:
        yield ac


@pytest.fixture
async def admin_client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Async test client carrying a valid admin session cookie."""
    from core.config import settings
    from core.security import create_admin_session_token

    token, _ = create_admin_session_token(ADMIN_EMAIL)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Origin": "http://localhost:3000"},
        cookies={settings.ADMIN_SESSION_COOKIE_NAME: token},
    ) as ac:
        yield ac


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def nominator_payload() -> dict[str, Any]:
    return {
        "firstname": "Dana",
        "lastname": "Reyes",
        "email": "Dana.Reyes@StaffingCo.com",
        "linkedin": "linkedin.com/in/dana-reyes/",
        "company": "StaffingCo",
        "jobTitle": "Head of Talent",
    }


@pytest.fixture
def person_nomination_payload(nominator_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "person",
        "subcategory_id": "top-recruiter",
        "nominator": nominator_payload,
        "nominee": {
            "firstname": "Priya",
            "lastname": "Shah",
            "jobtitle": "Senior Recruiter",
            "email": "priya@talentfirm.com",
            "linkedin": "https://uk.linkedin.com/in/PriyaShah?trk=profile",
            "country": "United Kingdom",
            "headshot_url": "https://cdn.example.com/priya.jpg",
            "why_me": "Placed 120 engineers in a single year.",
        },
    }


@pytest.fixture
def company_nomination_payload(nominator_payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "company",
        "subcategory_id": "best-recruitment-agency",
        "nominator": nominator_payload,
        "nominee": {
            "name": "Acme Talent",
            "website": "https://www.acmetalent.com",
            "linkedin": "https://www.linkedin.com/company/acme-talent",
            "country": "USA",
            "logo_url": "/uploads/acme.png",
            "why_us": "Fastest time-to-hire in the industry.",
        },
    }


@pytest.fixture
def voter_payload() -> dict[str, Any]:
    return {
        "firstname": "Sam",
        "lastname": "Lee",
        "email": "sam.lee@hiringpartners.com",
        "linkedin": "https://www.linkedin.com/in/samlee",
    }


# =============================================================================
# Seed helpers
# =============================================================================


async def seed_nomination(
    session_maker: async_sessionmaker[AsyncSession],
    status: str = "approved",
    subcategory_id: str = "top-recruiter",
    firstname: str = "Jordan",
    lastname: str = "Blake",
    votes: int = 0,
    additional_votes: int = 0,
    slug: Optional[str] = None,
    with_nominator: bool = True,
) -> Any:
    """Insert a person (or company, by subcategory) nomination and return it."""
    from core.categories import NomineeType, get_subcategory
    from models import Nomination, Nominator, Nominee

    subcategory = get_subcategory(subcategory_id)
    assert subcategory is not None

    async with session_maker() as session:
        if subcategory.nominee_type == NomineeType.PERSON:
            nominee = Nominee(
                type="person",
                firstname=firstname,
                lastname=lastname,
                jobtitle="Recruiter",
                person_email=f"{firstname.lower()}@example-firm.com",
                person_linkedin=f"https://www.linkedin.com/in/{firstname.lower()}-{lastname.lower()}",
                headshot_url="https://cdn.example.com/headshot.jpg",
                why_me="Consistently outstanding.",
                slug=slug,
            )
        else:
            nominee = Nominee(
                type="company",
                company_name=f"{firstname} {lastname}",
                company_website="https://example-firm.com",
                logo_url="https://cdn.example.com/logo.png",
                why_us="Great company.",
                slug=slug,
            )

        nomination = Nomination(
            category_group_id=subcategory.group_id,
            subcategory_id=subcategory_id,
            status=status,
            votes=votes,
            additional_votes=additional_votes,
        )
        nomination.nominee = nominee
        if with_nominator:
            nomination.nominator = Nominator(
                email=f"nominator-{firstname.lower()}@staffingco.com",
                firstname="Nia",
                lastname="Okafor",
            )
        if status == "approved":
            nomination.approved_at = datetime.now(timezone.utc)
            nomination.approved_by = ADMIN_EMAIL

        session.add(nomination)
        await session.commit()
        return nomination


async def set_settings(session_maker: async_sessionmaker[AsyncSession], **values: Optional[str]) -> None:
    from repositories.settings_repository import SettingsRepository

    async with session_maker() as session:
        repo = SettingsRepository(session)
        for key, value in values.items():
            await repo.set(key, value)
        await session.commit()


async def open_voting(session_maker: async_sessionmaker[AsyncSession]) -> None:
    now = datetime.now(timezone.utc)
    await set_settings(
        session_maker,
        voting_start_date=(now - timedelta(days=1)).isoformat(),
        voting_end_date=(now + timedelta(days=7)).isoformat(),
    )

"""
Nomination workflows shared by the public and admin endpoints.

Builds nominees from validated payloads, applies moderation transitions,
snapshots CRM outbox payloads and handles the CSV import/export formats.
"""

import csv
import io
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

import structlog
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from core.categories import NomineeType
from core.config import settings
from models.nomination import Nomination, NominationStatus
from models.nominator import Nominator
from models.nominee import Nominee
from models.outbox import OutboxEventType
from models.vote import Vote
from models.voter import Voter
from repositories.nomination_repository import NominationRepository
from repositories.outbox_repository import OutboxRepository
from schemas.bulk_upload import BULK_UPLOAD_COLUMNS, BulkUploadRow
from schemas.nomination import CompanyNomineeInput, PersonNomineeInput

logger = structlog.get_logger(__name__)

EXPORT_COLUMNS = (
    "nomination_id",
    "status",
    "category_group_id",
    "subcategory_id",
    "nominee_type",
    "nominee_name",
    "nominee_email",
    "nominee_linkedin",
    "live_url",
    "votes",
    "additional_votes",
    "total_votes",
    "nominator_name",
    "nominator_email",
    "source",
    "created_at",
    "approved_at",
)


class InvalidTransitionError(Exception):
    """Raised when a nomination status change is not allowed."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change status from '{current}' to '{target}'")


def slugify(text: str) -> str:
    """Lowercase, drop non-word characters, hyphenate whitespace and collapse dashes."""
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def build_live_url(slug: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}/nominee/{slug}"


def build_nominee(data: Union[PersonNomineeInput, CompanyNomineeInput]) -> Nominee:
    """Map a validated nominee payload onto a new Nominee row."""
    if isinstance(data, PersonNomineeInput):
        return Nominee(
            type=NomineeType.PERSON.value,
            firstname=data.firstname,
            lastname=data.lastname,
            person_email=data.email,
            person_linkedin=data.linkedin,
            jobtitle=data.jobtitle,
            person_company=data.company,
            person_country=data.country,
            headshot_url=data.headshot_url,
            why_me=data.why_me,
            live_url=data.live_url,
            bio=data.bio,
            achievements=data.achievements,
        )
    return Nominee(
        type=NomineeType.COMPANY.value,
        company_name=data.name,
        company_website=data.website,
        company_linkedin=data.linkedin,
        company_country=data.country,
        company_size=data.size,
        company_industry=data.industry,
        logo_url=data.logo_url,
        why_us=data.why_us,
        live_url=data.live_url,
        bio=data.bio,
        achievements=data.achievements,
    )


def nominee_from_bulk_row(row: BulkUploadRow) -> Nominee:
    if row.type == NomineeType.PERSON:
        return Nominee(
            type=NomineeType.PERSON.value,
            firstname=row.first_name,
            lastname=row.last_name,
            jobtitle=row.job_title,
            person_company=row.company_name,
            person_email=row.email,
            person_linkedin=row.linkedin,
            person_country=row.country,
            headshot_url=row.headshot_url,
            why_me=row.why_vote_for_me,
            bio=row.bio,
            achievements=row.achievements,
        )
    return Nominee(
        type=NomineeType.COMPANY.value,
        company_name=row.company_name,
        company_website=row.website,
        company_linkedin=row.linkedin,
        company_country=row.country,
        logo_url=row.logo_url,
        why_us=row.why_vote_for_me,
        bio=row.bio,
        achievements=row.achievements,
    )


# Outbox payloads are snapshots so the sync job never needs to re-read rows


def nominator_snapshot(nominator: Nominator) -> dict[str, Any]:
    return {
        "email": nominator.email,
        "firstname": nominator.firstname,
        "lastname": nominator.lastname,
        "linkedin": nominator.linkedin,
        "company": nominator.company,
        "job_title": nominator.job_title,
        "phone": nominator.phone,
        "country": nominator.country,
    }


def nominee_snapshot(nominee: Nominee) -> dict[str, Any]:
    return {
        "id": nominee.id,
        "type": nominee.type,
        "display_name": nominee.display_name,
        "firstname": nominee.firstname,
        "lastname": nominee.lastname,
        "email": nominee.person_email,
        "linkedin": nominee.linkedin_url,
        "jobtitle": nominee.jobtitle,
        "company": nominee.person_company,
        "company_name": nominee.company_name,
        "website": nominee.company_website,
        "country": nominee.country,
        "live_url": nominee.live_url,
    }


def submitted_payload(nomination: Nomination, nominator: Nominator) -> dict[str, Any]:
    return {
        "nomination_id": nomination.id,
        "category_group_id": nomination.category_group_id,
        "subcategory_id": nomination.subcategory_id,
        "nominee_type": nomination.nominee.type,
        "nominee_name": nomination.nominee.display_name,
        "nominator": nominator_snapshot(nominator),
    }


def approved_payload(nomination: Nomination) -> dict[str, Any]:
    return {
        "nomination_id": nomination.id,
        "category_group_id": nomination.category_group_id,
        "subcategory_id": nomination.subcategory_id,
        "nominee": nominee_snapshot(nomination.nominee),
    }


def vote_payload(vote: Vote, voter: Voter, nomination: Nomination) -> dict[str, Any]:
    return {
        "vote_id": vote.id,
        "nomination_id": nomination.id,
        "subcategory_id": vote.subcategory_id,
        "voted_for": nomination.nominee.display_name,
        "voter": {
            "email": voter.email,
            "firstname": voter.firstname,
            "lastname": voter.lastname,
            "linkedin": voter.linkedin,
            "company": voter.company,
            "job_title": voter.job_title,
            "country": voter.country,
        },
    }


async def _unique_slug(repo: NominationRepository, nominee: Nominee) -> str:
    base = slugify(nominee.display_name) or nominee.id[:8]
    if not await repo.slug_taken(base, exclude_nominee_id=nominee.id):
        return base
    return f"{base}-{nominee.id[:8]}"


async def approve_nomination(db: AsyncSession, nomination: Nomination, admin_email: str) -> Nomination:
    """
    Move a draft nomination to approved.

    Assigns the nominee slug and live URL (unless one was already set) and
    queues a ``nomination_approved`` outbox event.

    Raises:
        InvalidTransitionError: the nomination is not a draft
    """
    if nomination.status != NominationStatus.DRAFT.value:
        raise InvalidTransitionError(nomination.status, NominationStatus.APPROVED.value)

    now = datetime.now(timezone.utc)
    nominee = nomination.nominee
    repo = NominationRepository(db)

    if not nominee.slug:
        nominee.slug = await _unique_slug(repo, nominee)
    if not nominee.live_url:
        nominee.live_url = build_live_url(nominee.slug)
    nominee.updated_at = now

    nomination.status = NominationStatus.APPROVED.value
    nomination.approved_at = now
    nomination.approved_by = admin_email
    nomination.rejection_reason = None
    nomination.updated_at = now
    await db.flush()

    await OutboxRepository(db).enqueue(OutboxEventType.NOMINATION_APPROVED, approved_payload(nomination))
    logger.info("nomination_approved", nomination_id=nomination.id, slug=nominee.slug)
    return nomination


async def reject_nomination(
    db: AsyncSession,
    nomination: Nomination,
    reason: Optional[str] = None,
) -> Nomination:
    """
    Move a draft nomination to rejected.

    Raises:
        InvalidTransitionError: the nomination is not a draft
    """
    if nomination.status != NominationStatus.DRAFT.value:
        raise InvalidTransitionError(nomination.status, NominationStatus.REJECTED.value)

    nomination.status = NominationStatus.REJECTED.value
    nomination.rejection_reason = reason
    nomination.updated_at = datetime.now(timezone.utc)
    await db.flush()
    logger.info("nomination_rejected", nomination_id=nomination.id)
    return nomination


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _csv_safe(value: Any) -> Any:
    """Quote text cells that a spreadsheet would evaluate as a formula."""
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return f"'{value}"
    return value


def export_nominations_csv(nominations: Iterable[Nomination]) -> str:
    """Render nominations in the admin export format."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for nomination in nominations:
        nominee = nomination.nominee
        nominator = nomination.nominator
        row = [
            nomination.id,
            nomination.status,
            nomination.category_group_id,
            nomination.subcategory_id,
            nominee.type,
            nominee.display_name,
            nominee.email or "",
            nominee.linkedin_url or "",
            nominee.live_url or "",
            nomination.votes,
            nomination.additional_votes,
            nomination.total_votes,
            nominator.full_name if nominator else "",
            nominator.email if nominator else "",
            nomination.source,
            _iso(nomination.created_at),
            _iso(nomination.approved_at),
        ]
        writer.writerow([_csv_safe(cell) for cell in row])
    return buffer.getvalue()


class BulkUploadError(ValueError):
    """The uploaded file cannot be processed at all (as opposed to a bad row)."""


def parse_bulk_upload(content: bytes, max_rows: int) -> list[tuple[int, Union[BulkUploadRow, list[str]]]]:
    """
    Parse a bulk-upload CSV.

    Returns ``(row_number, row_or_errors)`` pairs; row numbers count the
    header as row 1 so they match what spreadsheet users see.

    Raises:
        BulkUploadError: the file is not UTF-8, has no header or misses columns
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise BulkUploadError("File must be UTF-8 encoded CSV") from e

    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise BulkUploadError("CSV file is empty")

    header = [name.strip().lower() for name in reader.fieldnames]
    missing = [col for col in ("type", "subcategory_id") if col not in header]
    if missing:
        raise BulkUploadError(f"Missing required columns: {', '.join(missing)}")
    reader.fieldnames = header

    unknown = sorted(set(header) - set(BULK_UPLOAD_COLUMNS))
    if unknown:
        logger.info("bulk_upload_unknown_columns", columns=unknown)

    parsed: list[tuple[int, Union[BulkUploadRow, list[str]]]] = []
    for index, raw in enumerate(reader, start=2):
        if len(parsed) >= max_rows:
            raise BulkUploadError(f"Too many rows (maximum {max_rows})")
        if not any((value or "").strip() for key, value in raw.items() if isinstance(value, str)):
            continue
        try:
            parsed.append((index, BulkUploadRow.model_validate(raw)))
        except ValidationError as e:
            parsed.append((index, [_format_row_error(err) for err in e.errors()]))
    return parsed


def _format_row_error(error: dict[str, Any]) -> str:
    message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
    loc = ".".join(str(part) for part in error.get("loc", ()))
    return f"{loc}: {message}" if loc else message

"""
HubSpot outbox processing.

Each pending outbox row becomes one contact or company upsert:

- ``nomination_submitted``: nominator contact (role ``Nominator``)
- ``nomination_approved``: person nominee contact (``Nominee_Person``) or
  company nominee (``Nominee_Company``)
- ``vote_cast``: voter contact (``Voter``)

Contacts are upserted by email; companies by domain, then name. Roles on an
existing record are merged rather than overwritten.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from models.outbox import HubSpotOutboxEvent, OutboxEventType
from repositories.outbox_repository import OutboxRepository
from services.hubspot_client import HubSpotClient, HubSpotError, extract_domain

logger = structlog.get_logger(__name__)

WSA_YEAR = "2026"
WSA_SOURCE = "World Staffing Awards"

ROLE_NOMINATOR = "Nominator"
ROLE_NOMINEE_PERSON = "Nominee_Person"
ROLE_NOMINEE_COMPANY = "Nominee_Company"
ROLE_VOTER = "Voter"


def merge_roles(existing: Optional[str], new_role: str) -> str:
    """Union of ``;``-separated roles, preserving existing order."""
    roles = [r.strip() for r in (existing or "").split(";") if r.strip()]
    if new_role not in roles:
        roles.append(new_role)
    return ";".join(roles)


def _compact(props: dict[str, Any]) -> dict[str, Any]:
    """Drop empty values so updates never blank out CRM data."""
    return {k: v for k, v in props.items() if v not in (None, "")}


def contact_properties(
    email: str,
    role: str,
    firstname: Optional[str] = None,
    lastname: Optional[str] = None,
    linkedin: Optional[str] = None,
    **extras: Any,
) -> dict[str, Any]:
    props = {
        "email": email,
        "firstname": firstname,
        "lastname": lastname,
        "lifecyclestage": "lead",
        "wsa_role": role,
        "wsa_year": WSA_YEAR,
        "wsa_source": WSA_SOURCE,
        "wsa_contact_tag": f"WSA{WSA_YEAR} {role.replace('_', ' ')}",
        **extras,
    }
    if linkedin:
        props[settings.HUBSPOT_CONTACT_LINKEDIN_KEY] = linkedin
    return _compact(props)


def nominator_properties(payload: dict[str, Any]) -> dict[str, Any]:
    nominator = payload["nominator"]
    return contact_properties(
        email=nominator["email"],
        role=ROLE_NOMINATOR,
        firstname=nominator.get("firstname"),
        lastname=nominator.get("lastname"),
        linkedin=nominator.get("linkedin"),
        company=nominator.get("company"),
        jobtitle=nominator.get("job_title"),
        phone=nominator.get("phone"),
        country=nominator.get("country"),
        wsa_nominated_display_name=payload.get("nominee_name"),
    )


def person_nominee_properties(payload: dict[str, Any]) -> dict[str, Any]:
    nominee = payload["nominee"]
    return contact_properties(
        email=nominee["email"],
        role=ROLE_NOMINEE_PERSON,
        firstname=nominee.get("firstname"),
        lastname=nominee.get("lastname"),
        linkedin=nominee.get("linkedin"),
        jobtitle=nominee.get("jobtitle"),
        company=nominee.get("company"),
        country=nominee.get("country"),
        wsa_live_url=nominee.get("live_url"),
        wsa_subcategory_id=payload.get("subcategory_id"),
    )


def company_nominee_properties(payload: dict[str, Any]) -> dict[str, Any]:
    nominee = payload["nominee"]
    website = nominee.get("website")
    return _compact(
        {
            "name": nominee.get("company_name") or nominee.get("display_name"),
            "domain": extract_domain(website),
            "website": website,
            "country": nominee.get("country"),
            "lifecyclestage": "lead",
            "wsa_role": ROLE_NOMINEE_COMPANY,
            "wsa_year": WSA_YEAR,
            "wsa_source": WSA_SOURCE,
            "wsa_live_url": nominee.get("live_url"),
            "wsa_subcategory_id": payload.get("subcategory_id"),
        }
    )


def voter_properties(payload: dict[str, Any]) -> dict[str, Any]:
    voter = payload["voter"]
    return contact_properties(
        email=voter["email"],
        role=ROLE_VOTER,
        firstname=voter.get("firstname"),
        lastname=voter.get("lastname"),
        linkedin=voter.get("linkedin"),
        company=voter.get("company"),
        jobtitle=voter.get("job_title"),
        country=voter.get("country"),
        wsa_voted_for_display_name=payload.get("voted_for"),
        wsa_voted_subcategory_id=payload.get("subcategory_id"),
    )


@dataclass
class SyncItemOutcome:
    id: str
    event_type: str
    status: str
    error: Optional[str] = None


@dataclass
class SyncRunResult:
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    results: list[SyncItemOutcome] = field(default_factory=list)


class HubSpotSyncService:
    """Pushes outbox events to HubSpot."""

    def __init__(self, client: HubSpotClient):
        self.client = client

    async def upsert_contact(self, properties: dict[str, Any]) -> str:
        """Search by email, then PATCH the existing contact or POST a new one. Returns the contact id."""
        email = properties["email"]
        existing = await self.client.search_contact_by_email(email, properties=["email", "wsa_role"])
        if existing:
            existing_roles = (existing.get("properties") or {}).get("wsa_role")
            update = {**properties, "wsa_role": merge_roles(existing_roles, properties["wsa_role"])}
            await self.client.update_contact(existing["id"], update)
            return str(existing["id"])
        created = await self.client.create_contact(properties)
        return str(created["id"])

    async def upsert_company(self, properties: dict[str, Any]) -> str:
        existing = await self.client.search_company(properties.get("domain"), properties["name"])
        if existing:
            existing_roles = (existing.get("properties") or {}).get("wsa_role")
            update = {**properties, "wsa_role": merge_roles(existing_roles, properties["wsa_role"])}
            await self.client.update_company(existing["id"], update)
            return str(existing["id"])
        created = await self.client.create_company(properties)
        return str(created["id"])

    async def handle_event(self, event: HubSpotOutboxEvent) -> str:
        """Push one event. Returns the HubSpot object id."""
        payload = event.payload or {}

        if event.event_type == OutboxEventType.NOMINATION_SUBMITTED.value:
            return await self.upsert_contact(nominator_properties(payload))

        if event.event_type == OutboxEventType.NOMINATION_APPROVED.value:
            nominee = payload.get("nominee") or {}
            if nominee.get("type") == "company":
                return await self.upsert_company(company_nominee_properties(payload))
            if not nominee.get("email"):
                raise ValueError("Person nominee has no email; cannot upsert contact")
            return await self.upsert_contact(person_nominee_properties(payload))

        if event.event_type == OutboxEventType.VOTE_CAST.value:
            return await self.upsert_contact(voter_properties(payload))

        raise ValueError(f"Unknown outbox event type: {event.event_type}")

    async def process_outbox(self, db: AsyncSession, limit: int) -> SyncRunResult:
        """
        Drain up to ``limit`` pending events in creation order.

        Failures are recorded per event and never abort the run.
        """
        repo = OutboxRepository(db)
        events = await repo.claim_pending(limit)
        run = SyncRunResult()

        for event in events:
            run.processed += 1
            try:
                object_id = await self.handle_event(event)
            except (HubSpotError, KeyError, ValueError) as e:
                error = str(e) if not isinstance(e, KeyError) else f"Missing field in payload: {e}"
                await self._record_failure(repo, run, event, error)
                continue
            except Exception as e:
                logger.exception("hubspot_sync_item_error", event_id=event.id, event_type=event.event_type)
                await self._record_failure(repo, run, event, f"Unexpected error: {type(e).__name__}: {e}")
                continue

            await repo.mark_done(event)
            run.succeeded += 1
            run.results.append(SyncItemOutcome(event.id, event.event_type, event.status))
            logger.info("hubspot_sync_item_done", event_id=event.id, event_type=event.event_type, hubspot_id=object_id)

        logger.info("hubspot_sync_run_complete", processed=run.processed, succeeded=run.succeeded, failed=run.failed)
        return run

    async def _record_failure(
        self,
        repo: OutboxRepository,
        run: SyncRunResult,
        event: HubSpotOutboxEvent,
        error: str,
    ) -> None:
        await repo.mark_failed(event, error, settings.HUBSPOT_MAX_ATTEMPTS)
        run.failed += 1
        run.results.append(SyncItemOutcome(event.id, event.event_type, event.status, error))
        logger.warning(
            "hubspot_sync_item_failed",
            event_id=event.id,
            event_type=event.event_type,
            attempt=event.attempt_count,
            status=event.status,
            error=error,
        )

"""
Tests for HubSpot outbox processing.
"""

import json
from typing import Any

import httpx
import pytest
from sqlalchemy import select

from models import HubSpotOutboxEvent, OutboxEventType
from repositories.outbox_repository import OutboxRepository
from services.hubspot_client import HubSpotClient
from services.hubspot_sync import (
    HubSpotSyncService,
    company_nominee_properties,
    contact_properties,
    merge_roles,
    nominator_properties,
)


class RecordingHubSpot:
    """MockTransport handler with optional existing contact/company records."""

    def __init__(self, existing_contact: dict[str, Any] | None = None, existing_company: dict[str, Any] | None = None):
        self.existing_contact = existing_contact
        self.existing_company = existing_company
        self.calls: list[tuple[str, str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        path = request.url.path

        if path == "/crm/v3/objects/contacts/search":
            return httpx.Response(200, json={"results": [self.existing_contact] if self.existing_contact else []})
        if path == "/crm/v3/objects/companies/search":
            return httpx.Response(200, json={"results": [self.existing_company] if self.existing_company else []})
        if request.method == "PATCH":
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1]})
        return httpx.Response(201, json={"id": "new-1"})

    def writes(self) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if not c[1].endswith("/search")]


def _service(fake: RecordingHubSpot) -> HubSpotSyncService:
    client = HubSpotClient("tok", base_url="https://hubspot.test", transport=httpx.MockTransport(fake))
    return HubSpotSyncService(client)


SUBMITTED = {
    "nomination_id": "nom-1",
    "subcategory_id": "top-recruiter",
    "nominee_name": "Priya Shah",
    "nominator": {
        "email": "dana.reyes@staffingco.com",
        "firstname": "Dana",
        "lastname": "Reyes",
        "linkedin": "https://www.linkedin.com/in/dana-reyes",
        "company": "StaffingCo",
        "job_title": None,
    },
}

APPROVED_COMPANY = {
    "nomination_id": "nom-2",
    "subcategory_id": "best-recruitment-agency",
    "nominee": {
        "type": "company",
        "display_name": "Acme Talent",
        "company_name": "Acme Talent",
        "website": "https://www.acmetalent.com",
        "live_url": "https://awards.example.com/nominee/acme-talent",
    },
}


@pytest.mark.unit
class TestProperties:
    def test_merge_roles(self) -> None:
        assert merge_roles(None, "Voter") == "Voter"
        assert merge_roles("Nominator", "Voter") == "Nominator;Voter"
        assert merge_roles("Nominator; Voter", "Voter") == "Nominator;Voter"

    def test_contact_properties_drop_empty_values(self) -> None:
        props = contact_properties("a@b.io", "Voter", firstname="A", lastname=None, linkedin="", company="")
        assert "lastname" not in props
        assert "company" not in props
        assert "linkedin" not in props
        assert props["lifecyclestage"] == "lead"
        assert props["wsa_contact_tag"] == "WSA2026 Voter"

    def test_nominator_properties(self) -> None:
        props = nominator_properties(SUBMITTED)
        assert props["email"] == "dana.reyes@staffingco.com"
        assert props["wsa_role"] == "Nominator"
        assert props["linkedin"] == "https://www.linkedin.com/in/dana-reyes"
        assert props["wsa_nominated_display_name"] == "Priya Shah"
        assert "jobtitle" not in props

    def test_company_properties_domain(self) -> None:
        props = company_nominee_properties(APPROVED_COMPANY)
        assert props["domain"] == "acmetalent.com"
        assert props["wsa_role"] == "Nominee_Company"


@pytest.mark.unit
class TestUpserts:
    async def test_new_contact_is_created(self) -> None:
        fake = RecordingHubSpot()
        contact_id = await _service(fake).upsert_contact(nominator_properties(SUBMITTED))

        assert contact_id == "new-1"
        assert fake.writes()[0][:2] == ("POST", "/crm/v3/objects/contacts")

    async def test_existing_contact_roles_merged(self) -> None:
        fake = RecordingHubSpot(existing_contact={"id": "77", "properties": {"wsa_role": "Voter"}})
        contact_id = await _service(fake).upsert_contact(nominator_properties(SUBMITTED))

        assert contact_id == "77"
        method, path, body = fake.writes()[0]
        assert (method, path) == ("PATCH", "/crm/v3/objects/contacts/77")
        assert body["properties"]["wsa_role"] == "Voter;Nominator"

    async def test_existing_company_updated(self) -> None:
        fake = RecordingHubSpot(existing_company={"id": "c-9", "properties": {"wsa_role": ""}})
        company_id = await _service(fake).upsert_company(company_nominee_properties(APPROVED_COMPANY))

        assert company_id == "c-9"
        assert fake.writes()[0][:2] == ("PATCH", "/crm/v3/objects/companies/c-9")


@pytest.mark.unit
class TestProcessOutbox:
    """Outbox draining against a real session."""

    async def test_processes_in_order_and_marks_done(self, db_session) -> None:
        repo = OutboxRepository(db_session)
        await repo.enqueue(OutboxEventType.NOMINATION_SUBMITTED, SUBMITTED)
        await repo.enqueue(OutboxEventType.NOMINATION_APPROVED, APPROVED_COMPANY)

        fake = RecordingHubSpot()
        run = await _service(fake).process_outbox(db_session, limit=10)

        assert (run.processed, run.succeeded, run.failed) == (2, 2, 0)
        assert [r.event_type for r in run.results] == ["nomination_submitted", "nomination_approved"]
        assert [w[1] for w in fake.writes()] == ["/crm/v3/objects/contacts", "/crm/v3/objects/companies"]

        events = (await db_session.execute(select(HubSpotOutboxEvent))).scalars().all()
        assert {e.status for e in events} == {"done"}

    async def test_person_without_email_fails(self, db_session) -> None:
        payload = {"nominee": {"type": "person", "firstname": "No", "lastname": "Email"}}
        await OutboxRepository(db_session).enqueue(OutboxEventType.NOMINATION_APPROVED, payload)

        fake = RecordingHubSpot()
        run = await _service(fake).process_outbox(db_session, limit=10)

        assert run.failed == 1
        assert "no email" in run.results[0].error
        assert run.results[0].status == "pending"
        assert fake.calls == []

    async def test_malformed_payload_fails(self, db_session) -> None:
        await OutboxRepository(db_session).enqueue(OutboxEventType.VOTE_CAST, {"vote_id": "v-1"})

        run = await _service(RecordingHubSpot()).process_outbox(db_session, limit=10)

        assert run.failed == 1
        assert "Missing field" in run.results[0].error

    async def test_create_without_id_fails_item(self, db_session) -> None:
        await OutboxRepository(db_session).enqueue(OutboxEventType.NOMINATION_SUBMITTED, SUBMITTED)

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/search"):
                return httpx.Response(200, json={"results": []})
            return httpx.Response(201)

        client = HubSpotClient("tok", base_url="https://hubspot.test", transport=httpx.MockTransport(handler))
        run = await HubSpotSyncService(client).process_outbox(db_session, limit=10)

        assert (run.processed, run.succeeded, run.failed) == (1, 0, 1)
        assert "no object id" in run.results[0].error
        assert run.results[0].status == "pending"

    async def test_unexpected_error_does_not_abort_run(self, db_session, monkeypatch) -> None:
        repo = OutboxRepository(db_session)
        broken = await repo.enqueue(OutboxEventType.NOMINATION_SUBMITTED, SUBMITTED)
        await repo.enqueue(OutboxEventType.NOMINATION_APPROVED, APPROVED_COMPANY)

        service = _service(RecordingHubSpot())
        handle_event = service.handle_event

        async def flaky_handle_event(event: HubSpotOutboxEvent) -> str:
            if event.id == broken.id:
                raise TypeError("'NoneType' object is not subscriptable")
            return await handle_event(event)

        monkeypatch.setattr(service, "handle_event", flaky_handle_event)
        run = await service.process_outbox(db_session, limit=10)

        assert (run.processed, run.succeeded, run.failed) == (2, 1, 1)
        assert run.results[0].error.startswith("Unexpected error: TypeError")
        assert run.results[1].status == "done"

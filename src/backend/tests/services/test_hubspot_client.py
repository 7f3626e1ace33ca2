"""
Tests for the HubSpot HTTP client.
"""

import json

import httpx
import pytest

from services.hubspot_client import (
    USER_AGENT,
    HubSpotClient,
    HubSpotError,
    extract_domain,
    get_hubspot_client,
    redact_pii,
)


def _client(handler) -> HubSpotClient:
    return HubSpotClient("tok-123", base_url="https://hubspot.test", transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestHelpers:
    @pytest.mark.parametrize(
        "website,expected",
        [
            ("https://www.acme.io/about", "acme.io"),
            ("acme.io", "acme.io"),
            ("http://jobs.acme.io", "jobs.acme.io"),
            (None, None),
            ("", None),
        ],
    )
    def test_extract_domain(self, website, expected) -> None:
        assert extract_domain(website) == expected

    def test_redact_pii_nested(self) -> None:
        data = {
            "properties": {"email": "dana.reyes@staffingco.com", "firstname": "Dana", "company": "StaffingCo"},
            "results": [{"phone": "+1 555"}],
        }
        redacted = redact_pii(data)

        assert redacted["properties"]["email"] == "da***@***.com"
        assert redacted["properties"]["firstname"] == "***REDACTED***"
        assert redacted["properties"]["company"] == "StaffingCo"
        assert redacted["results"][0]["phone"] == "***REDACTED***"


@pytest.mark.unit
class TestHubSpotClient:
    """Requests go through httpx with bearer auth."""

    async def test_headers_and_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "55"})

        client = _client(handler)
        result = await client.create_contact({"email": "dana@staffingco.com"})
        await client.close()

        assert result == {"id": "55"}
        request = seen[0]
        assert request.method == "POST"
        assert request.url == "https://hubspot.test/crm/v3/objects/contacts"
        assert request.headers["Authorization"] == "Bearer tok-123"
        assert request.headers["User-Agent"] == USER_AGENT
        assert json.loads(request.content) == {"properties": {"email": "dana@staffingco.com"}}

    async def test_no_content(self) -> None:
        client = _client(lambda request: httpx.Response(204))
        assert await client.request("DELETE", "/crm/v3/objects/contacts/1") is None

    async def test_error_response(self) -> None:
        client = _client(lambda request: httpx.Response(409, json={"message": "Contact already exists"}))

        with pytest.raises(HubSpotError) as exc_info:
            await client.create_contact({"email": "dana@staffingco.com"})

        assert exc_info.value.status == 409
        assert "Contact already exists" in str(exc_info.value)

    async def test_non_json_error(self) -> None:
        client = _client(lambda request: httpx.Response(502, text="Bad gateway"))

        with pytest.raises(HubSpotError) as exc_info:
            await client.get_account_details()
        assert exc_info.value.status == 502

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(HubSpotError) as exc_info:
            await _client(handler).get_account_details()
        assert exc_info.value.status == 0

    async def test_search_company_falls_back_to_name(self) -> None:
        filters: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            f = body["filterGroups"][0]["filters"][0]
            filters.append(f)
            if f["propertyName"] == "name":
                return httpx.Response(200, json={"results": [{"id": "c-1", "properties": {}}]})
            return httpx.Response(200, json={"results": []})

        company = await _client(handler).search_company("acme.io", "Acme")

        assert company["id"] == "c-1"
        assert [(f["propertyName"], f["value"]) for f in filters] == [("domain", "acme.io"), ("name", "Acme")]


@pytest.mark.unit
class TestClientFactory:
    def test_none_without_token(self, monkeypatch) -> None:
        from core.config import settings

        monkeypatch.setattr(settings, "HUBSPOT_ACCESS_TOKEN", None)
        assert get_hubspot_client() is None

"""
HubSpot CRM HTTP client.

Thin wrapper over ``httpx.AsyncClient`` with bearer authentication and PII
redaction in log output. Requests are not retried; a failed push is left to
the next sync run.
"""

import uuid
from typing import Any, Optional
from urllib.parse import urlparse

import httpx
import structlog

from core.config import settings
from core.security import mask_email

logger = structlog.get_logger(__name__)

USER_AGENT = "WSA-2026-App/1.0"
_PII_FIELDS = ("email", "firstname", "lastname", "phone", "address")


class HubSpotError(Exception):
    """HubSpot API call failed."""

    def __init__(self, message: str, status: int = 0, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data


def redact_pii(data: Any) -> Any:
    """Recursively mask PII values in a payload destined for logs."""
    if isinstance(data, list):
        return [redact_pii(item) for item in data]
    if not isinstance(data, dict):
        return data

    redacted: dict[str, Any] = {}
    for key, value in data.items():
        if key in _PII_FIELDS and value:
            redacted[key] = mask_email(value) if key == "email" and isinstance(value, str) else "***REDACTED***"
        else:
            redacted[key] = redact_pii(value)
    return redacted


def extract_domain(website: Optional[str]) -> Optional[str]:
    """Hostname of a website without ``www.``."""
    if not website:
        return None
    url = website if website.startswith("http") else f"https://{website}"
    host = urlparse(url).hostname
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host


class HubSpotClient:
    """Async HubSpot CRM v3 client."""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._access_token = access_token
        self._base_url = (base_url or settings.HUBSPOT_BASE_URL).rstrip("/")
        self._timeout = timeout or settings.HUBSPOT_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "Content-Type": "application/json",
                    "User-Agent": USER_AGENT,
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, json: Optional[dict[str, Any]] = None) -> Any:
        """
        Perform one API call.

        Returns:
            The decoded JSON body, or None for 204 responses

        Raises:
            HubSpotError: on transport failures and non-2xx responses
        """
        request_id = uuid.uuid4().hex[:8]
        logger.debug("hubspot_request", request_id=request_id, method=method, path=path, has_body=json is not None)

        try:
            response = await self._get_client().request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error("hubspot_timeout", request_id=request_id, path=path)
            raise HubSpotError(f"HubSpot request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logger.error("hubspot_transport_error", request_id=request_id, path=path, error=str(e))
            raise HubSpotError(f"HubSpot request failed: {e}") from e

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        try:
            data = response.json()
        except ValueError:
            data = {"body": response.text[:500]}

        logger.warning(
            "hubspot_error_response",
            request_id=request_id,
            status=response.status_code,
            path=path,
            data=redact_pii(data),
        )
        message = data.get("message") if isinstance(data, dict) else None
        raise HubSpotError(
            f"HubSpot API error: {response.status_code} {message or response.reason_phrase}",
            status=response.status_code,
            data=redact_pii(data),
        )

    # Contacts

    async def search_contact_by_email(self, email: str, properties: list[str]) -> Optional[dict[str, Any]]:
        data = await self.request(
            "POST",
            "/crm/v3/objects/contacts/search",
            json={
                "filterGroups": [{"filters": [{"propertyName": "email", "operator": "EQ", "value": email}]}],
                "properties": properties,
                "limit": 1,
            },
        )
        results = (data or {}).get("results") or []
        return results[0] if results else None

    async def _create(self, path: str, properties: dict[str, Any]) -> dict[str, Any]:
        created = await self.request("POST", path, json={"properties": properties})
        if not isinstance(created, dict) or not created.get("id"):
            raise HubSpotError(f"HubSpot create returned no object id: POST {path}")
        return created

    async def create_contact(self, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._create("/crm/v3/objects/contacts", properties)

    async def update_contact(self, contact_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/crm/v3/objects/contacts/{contact_id}", json={"properties": properties})

    # Companies

    async def _search_company(self, property_name: str, value: str) -> Optional[dict[str, Any]]:
        data = await self.request(
            "POST",
            "/crm/v3/objects/companies/search",
            json={
                "filterGroups": [{"filters": [{"propertyName": property_name, "operator": "EQ", "value": value}]}],
                "properties": ["name", "domain", "website", "wsa_role", "wsa_year"],
                "limit": 1,
            },
        )
        results = (data or {}).get("results") or []
        return results[0] if results else None

    async def search_company(self, domain: Optional[str], name: str) -> Optional[dict[str, Any]]:
        """Find a company by domain first, then by exact name."""
        if domain:
            company = await self._search_company("domain", domain)
            if company:
                return company
        return await self._search_company("name", name)

    async def create_company(self, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._create("/crm/v3/objects/companies", properties)

    async def update_company(self, company_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PATCH", f"/crm/v3/objects/companies/{company_id}", json={"properties": properties})

    async def get_account_details(self) -> dict[str, Any]:
        """Portal details; used as a connectivity check."""
        return await self.request("GET", "/account-info/v3/details")


_hubspot_client: Optional[HubSpotClient] = None


def get_hubspot_client() -> Optional[HubSpotClient]:
    """Process-wide client, or None when HUBSPOT_ACCESS_TOKEN is not set."""
    global _hubspot_client
    if not settings.HUBSPOT_ACCESS_TOKEN:
        return None
    if _hubspot_client is None:
        _hubspot_client = HubSpotClient(settings.HUBSPOT_ACCESS_TOKEN)
    return _hubspot_client


async def close_hubspot_client() -> None:
    global _hubspot_client
    if _hubspot_client is not None:
        await _hubspot_client.close()
        _hubspot_client = None

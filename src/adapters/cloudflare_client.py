"""Cloudflare v4 API client (DNS subset).

Implements `core.interfaces.dns_provider.DNSProvider` with:
- GET   /zones                                   (all pages)
- GET   /zones/{zone_id}/dns_records             (first page only)
- PATCH /zones/{zone_id}/dns_records/{record_id} (content only)

Every response uses the v4 envelope `{success, errors, result, result_info}`.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import DNSRecord, RecordPage, ResultInfo, Zone
from core.errors import CredentialsError, ProviderError

ZONES_PER_PAGE = 50


class CloudflareAPIError(ProviderError):
    """A Cloudflare call failed (transport, HTTP status or `success: false`)."""

    def __init__(self, message: str, *, status_code: int | None = None, codes: list[int] | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.codes = codes or []


def _format_errors(errors: object) -> tuple[str, list[int]]:
    if not isinstance(errors, list):
        return "", []
    parts: list[str] = []
    codes: list[int] = []
    for err in errors:
        if not isinstance(err, dict):
            continue
        code = err.get("code")
        if isinstance(code, int):
            codes.append(code)
        parts.append(f"{code}: {err.get('message', '')}")
    return "; ".join(parts), codes


class CloudflareClient:
    """Bearer-token client over `httpx.AsyncClient`."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        token = settings.cloudflare_api_token.strip()
        if not token:
            raise CredentialsError("invalid credentials: API token must not be empty")

        self._client = build_async_client(
            settings,
            base_url=settings.cloudflare_api_url.rstrip("/"),
            extra_headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "CloudflareClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise CloudflareAPIError(f"{method} {path}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise CloudflareAPIError(
                f"{method} {path}: HTTP {response.status_code} with a non-JSON body",
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise CloudflareAPIError(
                f"{method} {path}: unexpected response shape",
                status_code=response.status_code,
            )

        if response.is_error or not payload.get("success", False):
            detail, codes = _format_errors(payload.get("errors"))
            raise CloudflareAPIError(
                f"{method} {path}: HTTP {response.status_code} {detail}".rstrip(),
                status_code=response.status_code,
                codes=codes,
            )
        return payload

    async def list_zones(self) -> list[Zone]:
        zones: list[Zone] = []
        page = 1
        while True:
            payload = await self._request("GET", "/zones", params={"page": page, "per_page": ZONES_PER_PAGE})
            try:
                zones.extend(Zone.model_validate(item) for item in payload.get("result") or [])
                info = ResultInfo.model_validate(payload.get("result_info") or {})
            except ValidationError as exc:
                raise CloudflareAPIError(f"GET /zones: invalid payload: {exc}") from exc
            if page >= info.total_pages:
                return zones
            page += 1

    async def list_dns_records(self, zone_id: str) -> RecordPage:
        path = f"/zones/{zone_id}/dns_records"
        payload = await self._request("GET", path)
        try:
            return RecordPage(
                records=[DNSRecord.model_validate(item) for item in payload.get("result") or []],
                result_info=ResultInfo.model_validate(payload.get("result_info") or {}),
            )
        except ValidationError as exc:
            raise CloudflareAPIError(f"GET {path}: invalid payload: {exc}") from exc

    async def update_dns_record(self, zone_id: str, record_id: str, content: str) -> DNSRecord:
        path = f"/zones/{zone_id}/dns_records/{record_id}"
        payload = await self._request("PATCH", path, json={"content": content})
        try:
            return DNSRecord.model_validate(payload.get("result") or {})
        except ValidationError as exc:
            raise CloudflareAPIError(f"PATCH {path}: invalid payload: {exc}") from exc

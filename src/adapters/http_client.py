"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and address-family pinning for every
  outbound request (echo endpoints and the Cloudflare API).
- Eases testing: a `httpx.MockTransport` can be passed in place of the
  network transport.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.domain.address_family import AddressFamily


def build_transport(family: AddressFamily) -> httpx.AsyncHTTPTransport:
    """Transport whose connections can only use `family`.

    Binding the local side to the family's wildcard address makes the
    resolver pick only that family's remote addresses.
    """

    return httpx.AsyncHTTPTransport(local_address=family.local_address)


def build_async_client(
    settings: AppSettings,
    *,
    base_url: str = "",
    family: AddressFamily | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the application's defaults.

    Why a builder:
    - Centralizes timeouts/headers so every adapter behaves the same.
    - `family` pins the connection to IPv4 or IPv6; an explicit `transport`
      wins over it (tests).
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    if transport is None and family is not None:
        transport = build_transport(family)
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )

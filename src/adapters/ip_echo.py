"""IP echo endpoints (ifconfig.me, ipecho.net, ...).

Implementation:
- GET the endpoint once over an IPv4-pinned connection, once over an
  IPv6-pinned one.
- The whole body is the address: no parsing, no trimming, no status check.

Notes:
- Any transport or read error on either family fails the whole endpoint.
"""

from __future__ import annotations

from typing import Callable

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.address_family import AddressFamily
from core.domain.models import ResolvedAddresses
from core.errors import EchoFetchError

TransportFactory = Callable[[AddressFamily], httpx.AsyncBaseTransport]


class IPEchoClient:
    """Implements `core.interfaces.address_source.AddressSource` over httpx."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._settings = settings
        self._transport_factory = transport_factory

    async def fetch_content(self, url: str, family: AddressFamily) -> str:
        transport = self._transport_factory(family) if self._transport_factory else None
        try:
            async with build_async_client(self._settings, family=family, transport=transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise EchoFetchError(url, family, str(exc) or exc.__class__.__name__) from exc
        return response.text

    async def fetch_addresses(self, url: str) -> ResolvedAddresses:
        ipv4 = await self.fetch_content(url, AddressFamily.IPV4)
        ipv6 = await self.fetch_content(url, AddressFamily.IPV6)
        return ResolvedAddresses(ipv4=ipv4, ipv6=ipv6)

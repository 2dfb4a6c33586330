"""Public address source contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ResolvedAddresses


@runtime_checkable
class AddressSource(Protocol):
    """Fetches both public addresses from one echo endpoint.

    Raises `core.errors.EchoFetchError` when either family fails.
    """

    async def fetch_addresses(self, url: str) -> ResolvedAddresses:
        ...

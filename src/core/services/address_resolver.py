"""Public address resolution.

Two echo endpoints are queried one after the other. The primary endpoint
is always queried first and its failure is only logged; the secondary
endpoint is then always queried and its answer is the one returned.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ResolvedAddresses
from core.errors import EchoFetchError, ResolutionError
from core.interfaces.address_source import AddressSource
from core.logging_setup import get_logger


class AddressResolver:
    def __init__(
        self,
        source: AddressSource,
        *,
        primary_url: str,
        secondary_url: str,
        logger: Any = None,
    ) -> None:
        self._source = source
        self._primary_url = primary_url
        self._secondary_url = secondary_url
        self._log = logger or get_logger(__name__)

    async def resolve(self) -> ResolvedAddresses:
        """Return the secondary endpoint's addresses.

        Raises `ResolutionError` when the secondary endpoint fails, whatever
        the primary endpoint returned.
        """

        try:
            primary = await self._source.fetch_addresses(self._primary_url)
        except EchoFetchError as exc:
            self._log.error("echo endpoint failed", url=exc.url, family=exc.family.value, error=exc.reason)
        else:
            # Superseded by the secondary answer below.
            self._log.debug("primary echo endpoint answered", url=self._primary_url, ipv4=primary.ipv4, ipv6=primary.ipv6)

        try:
            return await self._source.fetch_addresses(self._secondary_url)
        except EchoFetchError as exc:
            self._log.error("echo endpoint failed", url=exc.url, family=exc.family.value, error=exc.reason)
            raise ResolutionError("unable to fetch ip") from exc

"""DNS provider contract.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Lets the reconciler run against Cloudflare or a test fake without
  coupling the Core to a concrete client.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DNSRecord, RecordPage, Zone


@runtime_checkable
class DNSProvider(Protocol):
    """Minimal contract for a DNS provider.

    Design rules:
    - Every call is async because it performs I/O (HTTP).
    - Failures are raised as `core.errors.ProviderError`.
    """

    async def list_zones(self) -> list[Zone]:
        """Return every zone visible to the credential."""

        ...

    async def list_dns_records(self, zone_id: str) -> RecordPage:
        """Return the first page of records of `zone_id`."""

        ...

    async def update_dns_record(self, zone_id: str, record_id: str, content: str) -> DNSRecord:
        """Set the content of an existing record and return it as stored."""

        ...

    async def aclose(self) -> None:
        ...

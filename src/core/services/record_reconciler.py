"""Reconciliation of A/AAAA records with the resolved addresses.

Failure handling differs per provider call:
- zone listing fails      -> the cycle ends silently
- record listing fails    -> `FatalError`
- a record update fails   -> error log, the other records are still processed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.domain.address_family import RecordType
from core.domain.models import DNSRecord, ResolvedAddresses
from core.errors import FatalError, ProviderError
from core.interfaces.dns_provider import DNSProvider
from core.logging_setup import get_logger


@dataclass
class ReconcileSummary:
    """Outcome of one reconciliation pass (record ids per outcome)."""

    zone_id: str | None = None
    updated: list[str] = field(default_factory=list)
    up_to_date: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    ignored: int = 0

    @property
    def zone_found(self) -> bool:
        return self.zone_id is not None


async def _sync_record(
    provider: DNSProvider,
    zone_id: str,
    record: DNSRecord,
    addresses: ResolvedAddresses,
    summary: ReconcileSummary,
    log: Any,
) -> None:
    record_type = RecordType.parse(record.type)
    if record_type is None:
        summary.ignored += 1
        return

    target = addresses.for_family(record_type.family)
    key = record_type.family.value

    if record.content == target:
        log.info(f"{record_type.value} record is up to date", **{key: target})
        summary.up_to_date.append(record.id)
        return

    try:
        await provider.update_dns_record(zone_id, record.id, target)
    except ProviderError as exc:
        log.error(f"Could not update {record_type.value} record", record_id=record.id, error=str(exc))
        summary.failed.append(record.id)
    else:
        log.info(f"Updated {record_type.value} record", record_id=record.id, **{key: target})
        summary.updated.append(record.id)


async def reconcile(
    provider: DNSProvider,
    addresses: ResolvedAddresses,
    zone_name: str,
    *,
    logger: Any = None,
) -> ReconcileSummary:
    log = logger or get_logger(__name__)
    summary = ReconcileSummary()

    try:
        zones = await provider.list_zones()
    except ProviderError:
        return summary

    for zone in zones:
        if zone.name != zone_name:
            continue
        log.debug("zone", zone=zone.name)
        summary.zone_id = zone.id

        try:
            page = await provider.list_dns_records(zone.id)
        except ProviderError as exc:
            raise FatalError(f"unable to list DNS records of zone {zone.name}: {exc}") from exc

        if page.has_more_pages:
            log.warning("There's more pages, it might not work properly", total_pages=page.result_info.total_pages)

        for record in page.records:
            await _sync_record(provider, zone.id, record, addresses, summary, log)

    return summary

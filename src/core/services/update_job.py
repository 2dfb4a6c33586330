"""One reconciliation cycle: resolve the public addresses, then sync records.

The scheduler calls an `UpdateJob` with no arguments; everything it needs
(settings, resolver, provider factory) is bound at construction time, which
keeps the cycle reusable from the CLI (`once`), the scheduler, and tests.
"""

from __future__ import annotations

from typing import Any, Callable

from adapters.cloudflare_client import CloudflareClient
from adapters.ip_echo import IPEchoClient
from core.config import AppSettings
from core.errors import CredentialsError, FatalError, ResolutionError
from core.interfaces.dns_provider import DNSProvider
from core.logging_setup import get_logger
from core.services.address_resolver import AddressResolver
from core.services.record_reconciler import ReconcileSummary, reconcile

ProviderFactory = Callable[[AppSettings], DNSProvider]


class UpdateJob:
    def __init__(
        self,
        settings: AppSettings,
        *,
        resolver: AddressResolver,
        provider_factory: ProviderFactory,
        logger: Any = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._provider_factory = provider_factory
        self._log = logger or get_logger(__name__)

    async def __call__(self) -> ReconcileSummary:
        try:
            addresses = await self._resolver.resolve()
        except ResolutionError as exc:
            raise FatalError(str(exc)) from exc

        self._log.debug("resolved addresses", ipv4=addresses.ipv4, ipv6=addresses.ipv6)

        try:
            provider = self._provider_factory(self._settings)
        except CredentialsError as exc:
            raise FatalError(str(exc)) from exc

        try:
            return await reconcile(provider, addresses, self._settings.zone_name, logger=self._log)
        finally:
            await provider.aclose()


def build_resolver(settings: AppSettings, *, logger: Any = None) -> AddressResolver:
    return AddressResolver(
        IPEchoClient(settings),
        primary_url=settings.primary_echo_url,
        secondary_url=settings.secondary_echo_url,
        logger=logger,
    )


def build_update_job(settings: AppSettings, *, logger: Any = None) -> UpdateJob:
    """Wire the job to the real echo endpoints and the Cloudflare API."""

    log = logger or get_logger("cfddns")
    return UpdateJob(
        settings,
        resolver=build_resolver(settings, logger=log),
        provider_factory=CloudflareClient,
        logger=log,
    )

from __future__ import annotations

from typing import Any

import pytest
import structlog

from core.config import AppSettings
from core.domain.models import DNSRecord, RecordPage, ResolvedAddresses, ResultInfo, Zone
from core.errors import EchoFetchError, ProviderError


def make_settings(**overrides: Any) -> AppSettings:
    values: dict[str, Any] = {
        "log_level": "debug",
        "interval": "5m",
        "zone_name": "example.com",
        "cloudflare_api_token": "test-token",
        "cloudflare_api_url": "https://api.test/client/v4",
        "primary_echo_url": "https://primary.test",
        "secondary_echo_url": "https://secondary.test/plain",
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


class FakeProvider:
    """In-memory DNSProvider recording every update call."""

    def __init__(
        self,
        zones: list[dict[str, str]] | None = None,
        records: list[dict[str, str]] | None = None,
        *,
        total_pages: int = 1,
        fail_zones: bool = False,
        fail_records: bool = False,
        fail_updates: set[str] | None = None,
    ) -> None:
        self.zones = [Zone.model_validate(z) for z in zones or []]
        self.records = [DNSRecord.model_validate(r) for r in records or []]
        self.total_pages = total_pages
        self.fail_zones = fail_zones
        self.fail_records = fail_records
        self.fail_updates = fail_updates or set()
        self.updates: list[tuple[str, str, str]] = []
        self.listed_zone_ids: list[str] = []
        self.closed = False

    async def list_zones(self) -> list[Zone]:
        if self.fail_zones:
            raise ProviderError("zones unavailable")
        return list(self.zones)

    async def list_dns_records(self, zone_id: str) -> RecordPage:
        self.listed_zone_ids.append(zone_id)
        if self.fail_records:
            raise ProviderError("records unavailable")
        return RecordPage(
            records=list(self.records),
            result_info=ResultInfo(total_pages=self.total_pages, count=len(self.records)),
        )

    async def update_dns_record(self, zone_id: str, record_id: str, content: str) -> DNSRecord:
        self.updates.append((zone_id, record_id, content))
        if record_id in self.fail_updates:
            raise ProviderError(f"update of {record_id} rejected")
        current = next(r for r in self.records if r.id == record_id)
        return current.model_copy(update={"content": content})

    async def aclose(self) -> None:
        self.closed = True


class FakeSource:
    """AddressSource answering per URL; an Exception value makes that URL fail."""

    def __init__(self, answers: dict[str, ResolvedAddresses | EchoFetchError]) -> None:
        self.answers = answers
        self.calls: list[str] = []

    async def fetch_addresses(self, url: str) -> ResolvedAddresses:
        self.calls.append(url)
        answer = self.answers[url]
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture
def example_provider() -> FakeProvider:
    return FakeProvider(
        zones=[{"name": "example.com", "id": "z1"}],
        records=[
            {"id": "r1", "type": "A", "content": "1.1.1.1"},
            {"id": "r2", "type": "AAAA", "content": "::1"},
        ],
    )


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()

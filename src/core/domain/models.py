"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Provider payloads are validated once at the edge and reach the services
  as typed objects.
- Extra provider fields are ignored so API additions never break parsing.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.address_family import AddressFamily


class ResolvedAddresses(BaseModel):
    """Public addresses of the caller, as returned by an echo endpoint.

    Values are kept verbatim: no format validation, no trimming.
    """

    ipv4: str = Field(
        ...,
        description="Body returned over the IPv4-pinned connection.",
    )
    ipv6: str = Field(
        ...,
        description="Body returned over the IPv6-pinned connection.",
    )

    def for_family(self, family: AddressFamily) -> str:
        return self.ipv6 if family is AddressFamily.IPV6 else self.ipv4


class Zone(BaseModel):
    """A DNS zone as listed by the provider."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Provider zone identifier.")
    name: str = Field(..., description="Zone (domain) name, e.g. 'example.com'.")


class DNSRecord(BaseModel):
    """A DNS record of a zone.

    `type` stays a plain string: the provider returns many record types and
    only A/AAAA are handled.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Provider record identifier.")
    type: str = Field(..., description="Record type (A, AAAA, CNAME, TXT, ...).")
    content: str = Field(default="", description="Record content (an IP address for A/AAAA).")
    name: str | None = Field(default=None, description="Fully qualified record name.")


class ResultInfo(BaseModel):
    """Pagination block (`result_info`) of a provider listing."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=0)
    per_page: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)
    total_pages: int = Field(default=1, ge=0)


class RecordPage(BaseModel):
    """One page of a DNS record listing."""

    records: list[DNSRecord] = Field(default_factory=list)
    result_info: ResultInfo = Field(default_factory=ResultInfo)

    @property
    def has_more_pages(self) -> bool:
        return self.result_info.total_pages > 1

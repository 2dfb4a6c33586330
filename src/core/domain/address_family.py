"""Address family and record type enums for cfddns.

This module centralizes the IPv4/IPv6 pairing used across the
application: which local address pins a socket to a family, and which DNS
record type carries that family's address. Keeping it in the domain layer
lets adapters and services share it without circular imports.
"""

from __future__ import annotations

from enum import Enum


class AddressFamily(str, Enum):
    """Socket family used to reach an echo endpoint."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def local_address(self) -> str:
        """Wildcard bind address that forces outbound connections onto this family."""

        return "::" if self is AddressFamily.IPV6 else "0.0.0.0"

    @property
    def record_type(self) -> "RecordType":
        return RecordType.AAAA if self is AddressFamily.IPV6 else RecordType.A

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "IPv6" if self is AddressFamily.IPV6 else "IPv4"


class RecordType(str, Enum):
    """DNS record types managed by the updater."""

    A = "A"
    AAAA = "AAAA"

    @classmethod
    def parse(cls, value: str) -> "RecordType | None":
        """Return the handled type for `value`, or None for any other record type."""

        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def family(self) -> AddressFamily:
        return AddressFamily.IPV6 if self is RecordType.AAAA else AddressFamily.IPV4

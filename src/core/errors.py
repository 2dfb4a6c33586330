"""Error kinds of the updater.

Each failure the update cycle can meet has its own type so that every call
site can decide explicitly whether it is fatal, logged, or silent.
"""

from __future__ import annotations

from core.domain.address_family import AddressFamily


class DDNSError(Exception):
    """Base class for all updater errors."""


class EchoFetchError(DDNSError):
    """An echo endpoint could not be fetched over one address family."""

    def __init__(self, url: str, family: AddressFamily, reason: str) -> None:
        super().__init__(f"{family.label()} fetch of {url} failed: {reason}")
        self.url = url
        self.family = family
        self.reason = reason


class ResolutionError(DDNSError):
    """No public address could be determined."""


class ProviderError(DDNSError):
    """A DNS provider call failed."""


class CredentialsError(ProviderError):
    """Provider credentials are missing or unusable."""


class IntervalError(DDNSError, ValueError):
    """The scheduler interval expression is invalid."""


class FatalError(DDNSError):
    """Failure that must terminate the process."""

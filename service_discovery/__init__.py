"""Service discovery facade over an mDNS daemon."""

from .discovery import (
    DiscoveryBackend,
    DiscoveryUnavailableError,
    InitializationError,
    MdnsBackend,
    ServiceDiscovery,
    StubBackend,
)

__version__ = "0.1.0"

__all__ = [
    "DiscoveryBackend",
    "DiscoveryUnavailableError",
    "InitializationError",
    "MdnsBackend",
    "ServiceDiscovery",
    "StubBackend",
]

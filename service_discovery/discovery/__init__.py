"""mDNS/Zeroconf service discovery facade."""

from .base import DiscoveryBackend, ServiceDiscovery
from .errors import DiscoveryUnavailableError, InitializationError
from .mdns import MdnsBackend
from .stub import StubBackend

__all__ = [
    "DiscoveryBackend",
    "DiscoveryUnavailableError",
    "InitializationError",
    "MdnsBackend",
    "ServiceDiscovery",
    "StubBackend",
]

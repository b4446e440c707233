"""mDNS/Zeroconf discovery backend.

Binds to a zeroconf daemon for the lifetime of the backend and keeps track of
the service names it advertises.
"""

import logging
import threading
from typing import TYPE_CHECKING

from zeroconf import Error as ZeroconfError
from zeroconf import InterfaceChoice, IPVersion, ServiceStateChange, Zeroconf
from zeroconf import ServiceBrowser as ZeroconfServiceBrowser

from .base import DiscoveryBackend
from .errors import InitializationError

if TYPE_CHECKING:
    from service_discovery.config import DiscoveryConfig

logger = logging.getLogger(__name__)

# DNS-SD meta-query, answered with every service type on the link
ALL_SERVICES_TYPE = "_services._dns-sd._udp.local."

IP_VERSIONS = {
    "v4": IPVersion.V4Only,
    "v6": IPVersion.V6Only,
    "all": IPVersion.All,
}


def qualify_service_type(service_type: str) -> str:
    """Turn '_http._tcp' into the fully qualified '_http._tcp.local.'."""
    name = service_type.rstrip(".")
    if not name.endswith(".local"):
        name = f"{name}.local"
    return f"{name}."


class MdnsBackend(DiscoveryBackend):
    """Discovery backend bound to a live zeroconf daemon."""

    def __init__(
        self,
        service_types: list[str] | None = None,
        interfaces: list[str] | None = None,
        ip_version: str = "v4",
    ):
        """Start the daemon and begin browsing.

        Args:
            service_types: mDNS service types to browse for. Defaults to the
                DNS-SD meta-query, which lists every advertised service type.
            interfaces: IP addresses of the interfaces to listen on. None
                means all interfaces.
            ip_version: "v4", "v6" or "all".

        Raises:
            InitializationError: If the daemon or the browser cannot be started.
        """
        if interfaces is not None and not interfaces:
            raise InitializationError("No network interface configured for mDNS")
        if ip_version not in IP_VERSIONS:
            raise InitializationError(f"Unknown IP version: {ip_version!r}")

        self.service_types = [
            qualify_service_type(t) for t in (service_types or [ALL_SERVICES_TYPE])
        ]
        self._discovered: dict[str, None] = {}
        self._lock = threading.Lock()
        self._closed = False

        try:
            self._zeroconf = Zeroconf(
                interfaces=interfaces if interfaces is not None else InterfaceChoice.All,
                ip_version=IP_VERSIONS[ip_version],
            )
        except (OSError, RuntimeError, TypeError, ValueError, ZeroconfError) as e:
            raise InitializationError(f"Could not start mDNS daemon: {e}") from e

        try:
            self._browser = ZeroconfServiceBrowser(
                self._zeroconf,
                self.service_types,
                handlers=[self._on_service_state_change],
            )
        except (OSError, RuntimeError, TypeError, ValueError, ZeroconfError) as e:
            self._zeroconf.close()
            raise InitializationError(f"Could not start mDNS browser: {e}") from e

        logger.info(f"Browsing for {', '.join(self.service_types)}")

    @classmethod
    def from_config(cls, config: "DiscoveryConfig | None" = None) -> "MdnsBackend":
        """Create a backend from discovery settings."""
        if config is None:
            from service_discovery.config import DiscoveryConfig

            config = DiscoveryConfig()

        return cls(
            service_types=config.service_types,
            interfaces=config.interfaces,
            ip_version=config.ip_version,
        )

    def _on_service_state_change(
        self,
        zeroconf: Zeroconf,
        service_type: str,
        name: str,
        state_change: ServiceStateChange,
    ) -> None:
        """Handle service state changes (add/remove/update)."""
        with self._lock:
            if state_change is ServiceStateChange.Removed:
                if name in self._discovered:
                    del self._discovered[name]
                    logger.debug(f"Service removed: {name}")
            elif name not in self._discovered:
                self._discovered[name] = None
                logger.debug(f"Service discovered: {name} ({service_type})")

    def browse(self) -> list[str]:
        """Get the names of the services the daemon currently knows about.

        Returns:
            Service names in the order they were first seen. Empty if nothing
            has been discovered yet or the backend is closed.
        """
        if self._closed:
            logger.warning("browse() called on a closed mDNS backend")
            return []

        with self._lock:
            return list(self._discovered)

    def close(self) -> None:
        """Stop browsing and shut down the daemon."""
        if self._closed:
            return
        self._closed = True

        try:
            self._browser.cancel()
        finally:
            self._zeroconf.close()

        with self._lock:
            self._discovered.clear()
        logger.info("mDNS daemon stopped")

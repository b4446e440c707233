"""Base classes for the service discovery facade."""

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

from .errors import DiscoveryUnavailableError, InitializationError

if TYPE_CHECKING:
    from service_discovery.config import DiscoveryConfig

logger = logging.getLogger(__name__)


class DiscoveryBackend(ABC):
    """Abstract base for all discovery mechanisms.

    A backend never fails while browsing. If it cannot tell which services
    are visible it reports an empty list, the same as when nothing has been
    discovered.
    """

    @abstractmethod
    def browse(self) -> list[str]:
        """Get the names of the services currently known to the backend.

        Returns:
            List of service names, possibly empty.
        """
        pass

    def close(self) -> None:
        """Release any resources held by the backend."""

    def __enter__(self) -> "DiscoveryBackend":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ServiceDiscovery:
    """Backend-agnostic discovery facade.

    Owns exactly one backend, chosen at construction. Use new() for the live
    mDNS backend and null() or the plain constructor to substitute another
    backend, e.g. in tests.
    """

    def __init__(self, backend: DiscoveryBackend):
        """Initialize the facade.

        Args:
            backend: The backend to own. It is closed together with the facade.
        """
        self._backend = backend

    @classmethod
    def new(cls, config: "DiscoveryConfig | None" = None) -> "ServiceDiscovery":
        """Create a facade bound to a live mDNS daemon.

        Args:
            config: Discovery settings. Defaults are used if omitted.

        Returns:
            A ServiceDiscovery owning an MdnsBackend.

        Raises:
            DiscoveryUnavailableError: If the mDNS daemon could not be started.
        """
        from .mdns import MdnsBackend

        try:
            backend = MdnsBackend.from_config(config)
        except InitializationError as e:
            logger.error(f"Service discovery unavailable: {e}")
            raise DiscoveryUnavailableError("service discovery unavailable") from e

        return cls(backend)

    @classmethod
    def null(cls, names: Iterable[str] = ()) -> "ServiceDiscovery":
        """Create a facade over a StubBackend reporting a fixed list of names."""
        from .stub import StubBackend

        return cls(StubBackend(names))

    @property
    def backend(self) -> DiscoveryBackend:
        """The backend this facade delegates to."""
        return self._backend

    def browse(self) -> list[str]:
        """Get the names of the currently visible services.

        Returns:
            Whatever the backend returns, unchanged.
        """
        return self._backend.browse()

    def wait_for_services(
        self, timeout: float = 10.0, poll_interval: float = 0.5
    ) -> list[str]:
        """Poll browse() until at least one service is visible.

        Args:
            timeout: Maximum time to wait in seconds.
            poll_interval: Delay between polls in seconds.

        Returns:
            The first non-empty result, or the last (empty) result on timeout.
        """
        deadline = time.monotonic() + timeout
        while True:
            services = self.browse()
            if services or time.monotonic() >= deadline:
                break
            time.sleep(poll_interval)

        if not services:
            logger.warning(f"No services discovered after {timeout}s timeout")
        return services

    def close(self) -> None:
        """Release the owned backend."""
        self._backend.close()

    def __enter__(self) -> "ServiceDiscovery":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

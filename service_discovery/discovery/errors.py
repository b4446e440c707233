"""Errors raised while setting up service discovery."""


class InitializationError(Exception):
    """The discovery mechanism could not be started."""


class DiscoveryUnavailableError(InitializationError):
    """Service discovery is not available on this host.

    Raised by ServiceDiscovery.new() in place of backend specific errors. The
    original error is chained as __cause__.
    """

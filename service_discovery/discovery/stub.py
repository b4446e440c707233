"""Network-free discovery backend."""

from typing import Iterable

from .base import DiscoveryBackend


class StubBackend(DiscoveryBackend):
    """Backend that always reports a fixed list of service names."""

    def __init__(self, names: Iterable[str] = ()):
        self._names = list(names)

    def browse(self) -> list[str]:
        return list(self._names)

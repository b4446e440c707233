"""Configuration loading for service discovery."""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class DiscoveryConfig:
    """Configuration for mDNS/Zeroconf service discovery."""

    service_types: list[str] = field(
        default_factory=lambda: ["_services._dns-sd._udp.local."]
    )
    interfaces: list[str] | None = None  # None listens on all interfaces
    ip_version: str = "v4"  # "v4", "v6" or "all"
    settle_seconds: float = 3.0  # How long the CLI waits for advertisements


@dataclass
class Config:
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict for display."""
        return asdict(self)


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with SERVICE_DISCOVERY_ prefix."""
    return os.environ.get(f"SERVICE_DISCOVERY_{key}", default)


def _split_list(value: str) -> list[str]:
    """Split a comma-separated environment value."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config."""
    if service_types := _get_env("SERVICE_TYPES"):
        config.discovery.service_types = _split_list(service_types)
    if interfaces := _get_env("INTERFACES"):
        config.discovery.interfaces = _split_list(interfaces)
    if ip_version := _get_env("IP_VERSION"):
        config.discovery.ip_version = ip_version.lower()
    if settle := _get_env("SETTLE_SECONDS"):
        config.discovery.settle_seconds = float(settle)

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML config file. If None, uses default config.

    Returns:
        Loaded Config object.
    """
    config = Config()

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}

            if "discovery" in data:
                disc_data = data["discovery"] or {}
                service_types = disc_data.get(
                    "service_types", config.discovery.service_types
                )
                if isinstance(service_types, str):
                    service_types = [service_types]
                interfaces = disc_data.get("interfaces", config.discovery.interfaces)
                if isinstance(interfaces, str):
                    interfaces = [interfaces]

                config.discovery = DiscoveryConfig(
                    service_types=service_types,
                    interfaces=interfaces,
                    ip_version=str(
                        disc_data.get("ip_version", config.discovery.ip_version)
                    ).lower(),
                    settle_seconds=float(
                        disc_data.get("settle_seconds", config.discovery.settle_seconds)
                    ),
                )

    return _apply_env_overrides(config)

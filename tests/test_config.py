"""Tests for configuration loading."""

import pytest

from service_discovery.config import Config, DiscoveryConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove discovery environment overrides."""
    for key in ("SERVICE_TYPES", "INTERFACES", "IP_VERSION", "SETTLE_SECONDS"):
        monkeypatch.delenv(f"SERVICE_DISCOVERY_{key}", raising=False)


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test default configuration without a file."""
        config = load_config()

        assert config.discovery.service_types == ["_services._dns-sd._udp.local."]
        assert config.discovery.interfaces is None
        assert config.discovery.ip_version == "v4"
        assert config.discovery.settle_seconds == 3.0

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test that a missing config file is not an error."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.discovery == DiscoveryConfig()

    def test_yaml_file(self, tmp_path):
        """Test loading discovery settings from YAML."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "discovery:\n"
            "  service_types:\n"
            "    - _ipp._tcp\n"
            "    - _http._tcp\n"
            "  interfaces: [192.168.1.10]\n"
            "  ip_version: ALL\n"
            "  settle_seconds: 1\n"
        )

        config = load_config(path)

        assert config.discovery.service_types == ["_ipp._tcp", "_http._tcp"]
        assert config.discovery.interfaces == ["192.168.1.10"]
        assert config.discovery.ip_version == "all"
        assert config.discovery.settle_seconds == 1.0

    def test_single_service_type_string(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("discovery:\n  service_types: _ipp._tcp\n")

        assert load_config(str(path)).discovery.service_types == ["_ipp._tcp"]

    def test_single_interface_string(self, tmp_path):
        """Test that a scalar interface address becomes a one-item list."""
        path = tmp_path / "config.yaml"
        path.write_text("discovery:\n  interfaces: 127.0.0.1\n")

        assert load_config(path).discovery.interfaces == ["127.0.0.1"]

    def test_partial_and_empty_sections(self, tmp_path):
        """Test that unset keys keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("discovery:\n")
        assert load_config(path).discovery == DiscoveryConfig()

        path.write_text("")
        assert load_config(path).discovery == DiscoveryConfig()

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test that environment variables override the file."""
        path = tmp_path / "config.yaml"
        path.write_text("discovery:\n  service_types: [_ipp._tcp]\n")
        monkeypatch.setenv("SERVICE_DISCOVERY_SERVICE_TYPES", "_http._tcp, _ssh._tcp")
        monkeypatch.setenv("SERVICE_DISCOVERY_INTERFACES", "10.0.0.2")
        monkeypatch.setenv("SERVICE_DISCOVERY_IP_VERSION", "V6")
        monkeypatch.setenv("SERVICE_DISCOVERY_SETTLE_SECONDS", "0.5")

        config = load_config(path)

        assert config.discovery.service_types == ["_http._tcp", "_ssh._tcp"]
        assert config.discovery.interfaces == ["10.0.0.2"]
        assert config.discovery.ip_version == "v6"
        assert config.discovery.settle_seconds == 0.5

    def test_to_dict(self):
        assert Config().to_dict() == {
            "discovery": {
                "service_types": ["_services._dns-sd._udp.local."],
                "interfaces": None,
                "ip_version": "v4",
                "settle_seconds": 3.0,
            }
        }

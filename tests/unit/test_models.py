import pytest

from vault_provider.config import VaultSettings, get_settings
from vault_provider.exceptions import ConfigurationError
from vault_provider.models import (
    AppRoleConfig,
    CertificateConfig,
    ProviderConfig,
    load_config,
)
from vault_provider.provider import PROVIDER_SCHEMA
from vault_provider.resources.approle import AppRoleResource
from vault_provider.resources.data import ResourceData


def provider_bag(**values) -> ResourceData:
    return ResourceData(PROVIDER_SCHEMA, values)


class TestProviderConfig:
    """Test cases for ProviderConfig.from_bag."""

    def test_block_values_win(self):
        """Test that values on the block take precedence over the environment."""
        settings = VaultSettings(address="https://env:8200", token="s.env")
        config = ProviderConfig.from_bag(
            provider_bag(address="https://block:8200", token="s.block"), settings
        )

        assert config.address == "https://block:8200"
        assert config.token.get_secret_value() == "s.block"

    def test_environment_fills_empty_fields(self):
        settings = VaultSettings(
            address="https://env:8200",
            token="s.env",
            ca_cert_file="/ca.pem",
            skip_tls_verify=True,
            max_lease_ttl_seconds=600,
        )
        config = ProviderConfig.from_bag(provider_bag(), settings)

        assert config.address == "https://env:8200"
        assert config.token.get_secret_value() == "s.env"
        assert config.ca_cert_file == "/ca.pem"
        assert config.skip_tls_verify is True
        assert config.max_lease_ttl_seconds == 600

    def test_max_ttl_on_block_wins(self):
        settings = VaultSettings(address="https://env:8200", max_lease_ttl_seconds=600)
        config = ProviderConfig.from_bag(provider_bag(max_lease_ttl_seconds=300), settings)
        assert config.max_lease_ttl_seconds == 300

    def test_max_ttl_default(self):
        config = ProviderConfig.from_bag(provider_bag(), VaultSettings(address="https://env:8200"))
        assert config.max_lease_ttl_seconds == 1200

    def test_explicit_false_and_zero_win_over_environment(self, monkeypatch):
        """Test that set-but-falsy block values are not replaced by env defaults."""
        monkeypatch.setenv("VAULT_SKIP_VERIFY", "true")
        monkeypatch.setenv("TERRAFORM_VAULT_MAX_TTL", "600")
        bag = provider_bag(
            address="https://block:8200", skip_tls_verify=False, max_lease_ttl_seconds=0
        )

        config = ProviderConfig.from_bag(bag, get_settings())

        assert config.skip_tls_verify is False
        assert config.max_lease_ttl_seconds == 0

    def test_unset_bool_and_int_fall_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("VAULT_SKIP_VERIFY", "true")
        monkeypatch.setenv("TERRAFORM_VAULT_MAX_TTL", "600")

        config = ProviderConfig.from_bag(
            provider_bag(address="https://block:8200"), get_settings()
        )

        assert config.skip_tls_verify is True
        assert config.max_lease_ttl_seconds == 600

    def test_client_auth_files_default_from_environment(self):
        settings = VaultSettings(
            address="https://env:8200",
            client_cert="/env/client.pem",
            client_key="/env/client.key",
        )
        config = ProviderConfig.from_bag(
            provider_bag(client_auth=[{"cert_file": "/block/client.pem"}]), settings
        )

        assert len(config.client_auth) == 1
        assert config.client_auth[0].cert_file == "/block/client.pem"
        assert config.client_auth[0].key_file == "/env/client.key"

    def test_missing_address_raises(self):
        with pytest.raises(ConfigurationError, match="address is required"):
            ProviderConfig.from_bag(provider_bag(), VaultSettings())

    def test_secrets_are_not_in_repr(self):
        config = ProviderConfig.from_bag(
            provider_bag(
                address="https://block:8200",
                token="s.block",
                personal_access_token="ghp_secret",
            ),
            VaultSettings(),
        )

        assert "s.block" not in repr(config)
        assert "ghp_secret" not in repr(config)


class TestResourceConfigs:
    """Test cases for resource input models."""

    def test_load_config_error(self):
        """Test that validation failures become configuration errors."""
        with pytest.raises(ConfigurationError, match="Invalid AppRoleConfig"):
            load_config(AppRoleConfig, ResourceData(AppRoleResource.schema))

    def test_load_config_reads_declared_fields(self):
        bag = ResourceData(AppRoleResource.schema, {"repository": "my-repo"})
        assert load_config(AppRoleConfig, bag).repository == "my-repo"

    def test_issue_request_omits_empty_fields(self):
        config = CertificateConfig(common_name="svc.acme.io", ttl="8760h")
        assert config.issue_request() == {"common_name": "svc.acme.io", "ttl": "8760h"}

    def test_issue_request_with_all_fields(self):
        config = CertificateConfig(
            common_name="svc.acme.io",
            alt_names="a.acme.io",
            ip_sans="10.0.0.1",
            ttl="1h",
        )
        assert config.issue_request() == {
            "common_name": "svc.acme.io",
            "alt_names": "a.acme.io",
            "ip_sans": "10.0.0.1",
            "ttl": "1h",
        }

    def test_default_mount(self):
        assert CertificateConfig(common_name="svc.acme.io").path == "vault_intermediate"

from vault_provider.config import VaultSettings, get_settings


class TestVaultSettings:
    """Test cases for environment defaults."""

    def test_defaults(self):
        """Test the values used when nothing is set."""
        settings = get_settings()

        assert settings.address == ""
        assert settings.token == ""
        assert settings.skip_tls_verify is False
        assert settings.max_lease_ttl_seconds == 1200

    def test_reads_vault_environment(self, monkeypatch):
        """Test that the standard Vault variables are read."""
        monkeypatch.setenv("VAULT_ADDR", "https://vault.env:8200")
        monkeypatch.setenv("VAULT_TOKEN", "s.env")
        monkeypatch.setenv("VAULT_CACERT", "/etc/vault/ca.pem")
        monkeypatch.setenv("VAULT_CAPATH", "/etc/vault/ca.d")
        monkeypatch.setenv("VAULT_CLIENT_CERT", "/etc/vault/client.pem")
        monkeypatch.setenv("VAULT_CLIENT_KEY", "/etc/vault/client.key")
        monkeypatch.setenv("VAULT_SKIP_VERIFY", "true")
        monkeypatch.setenv("TERRAFORM_VAULT_MAX_TTL", "600")

        settings = get_settings()

        assert settings.address == "https://vault.env:8200"
        assert settings.token == "s.env"
        assert settings.ca_cert_file == "/etc/vault/ca.pem"
        assert settings.ca_cert_dir == "/etc/vault/ca.d"
        assert settings.client_cert == "/etc/vault/client.pem"
        assert settings.client_key == "/etc/vault/client.key"
        assert settings.skip_tls_verify is True
        assert settings.max_lease_ttl_seconds == 600

    def test_empty_variable_is_ignored(self, monkeypatch):
        """Test that an exported but empty variable keeps the default."""
        monkeypatch.setenv("TERRAFORM_VAULT_MAX_TTL", "")
        assert get_settings().max_lease_ttl_seconds == 1200

    def test_settings_are_not_cached(self, monkeypatch):
        """Test that each call sees the current environment."""
        monkeypatch.setenv("VAULT_ADDR", "https://one:8200")
        first = get_settings()
        monkeypatch.setenv("VAULT_ADDR", "https://two:8200")

        assert first.address == "https://one:8200"
        assert get_settings().address == "https://two:8200"

    def test_explicit_values(self):
        """Test that settings can be built by field name."""
        settings = VaultSettings(address="https://vault.test:8200", token="s.x")
        assert settings.address == "https://vault.test:8200"
        assert settings.token == "s.x"

import httpx
import pytest

from vault_provider.clients.ssl_utils import TLSConfig
from vault_provider.clients.vault import (
    VaultClient,
    VaultSecret,
    api_path,
    build_http_client,
)
from vault_provider.exceptions import BackendRequestError, ConfigurationError
from vault_provider.test_utils.mock_vault import (
    MOCK_VAULT_ADDRESS,
    MockVault,
    vault_response,
)


@pytest.fixture
def vault_client(mock_vault: MockVault):
    http_client = httpx.Client(base_url=MOCK_VAULT_ADDRESS, transport=mock_vault.transport)
    client = VaultClient(http_client, "s.test-token")
    yield client
    client.close()


class TestVaultSecret:
    """Test cases for the response envelope model."""

    def test_null_data_becomes_empty(self):
        """Test that "data": null decodes to an empty mapping."""
        secret = VaultSecret.model_validate(vault_response(None))
        assert secret.data == {}

    def test_auth_block_is_decoded(self):
        """Test that the login auth block is decoded."""
        secret = VaultSecret.model_validate(
            vault_response(auth={"client_token": "tok-xyz", "policies": ["default"]})
        )
        assert secret.auth is not None
        assert secret.auth.client_token == "tok-xyz"


class TestVaultClient:
    """Test cases for VaultClient."""

    def test_api_path(self):
        """Test that logical paths are rooted under /v1."""
        assert api_path("secret/app") == "/v1/secret/app"
        assert api_path("/secret/app") == "/v1/secret/app"

    def test_address_strips_trailing_slash(self, vault_client):
        """Test that the address has no trailing slash."""
        assert vault_client.address == MOCK_VAULT_ADDRESS

    def test_read_success(self, vault_client, mock_vault):
        """Test that a read returns the decoded secret and sends the token."""
        mock_vault.on(
            "GET",
            "/v1/secret/app",
            json=vault_response({"user": "app"}, lease_id="lease-1", lease_duration=60),
        )

        secret = vault_client.read("secret/app")

        assert secret is not None
        assert secret.data == {"user": "app"}
        assert secret.lease_id == "lease-1"
        assert secret.lease_duration == 60
        request = mock_vault.requests[0]
        assert request.method == "GET"
        assert request.headers["X-Vault-Token"] == "s.test-token"

    def test_read_missing_returns_none(self, vault_client, mock_vault):
        """Test that a 404 read means there is no secret."""
        assert vault_client.read("secret/missing") is None

    def test_read_no_content_returns_none(self, vault_client, mock_vault):
        """Test that a 204 read means there is no secret."""
        mock_vault.on("GET", "/v1/secret/empty", status_code=204)
        assert vault_client.read("secret/empty") is None

    def test_read_error_status_raises(self, vault_client, mock_vault):
        """Test that a non-success status raises with Vault's errors."""
        mock_vault.on(
            "GET", "/v1/secret/app", status_code=403, json={"errors": ["permission denied"]}
        )

        with pytest.raises(BackendRequestError, match="permission denied") as exc_info:
            vault_client.read("secret/app")

        assert exc_info.value.status_code == 403
        assert exc_info.value.errors == ["permission denied"]
        assert exc_info.value.operation == "read"
        assert exc_info.value.path == "secret/app"

    def test_read_network_error_raises(self, vault_client, mock_vault):
        """Test that a network failure raises without a status code."""
        mock_vault.on("GET", "/v1/secret/app", error="connection refused")

        with pytest.raises(BackendRequestError, match="connection refused") as exc_info:
            vault_client.read("secret/app")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_write_sends_json_body(self, vault_client, mock_vault):
        """Test that a write PUTs the JSON body."""
        mock_vault.on("PUT", "/v1/pki/issue/acme", json=vault_response({"serial_number": "01"}))

        secret = vault_client.write("pki/issue/acme", {"common_name": "svc.acme.io"})

        assert secret is not None
        assert secret.data["serial_number"] == "01"
        request = mock_vault.requests[0]
        assert request.method == "PUT"
        assert request.body == {"common_name": "svc.acme.io"}

    def test_write_no_content_returns_none(self, vault_client, mock_vault):
        """Test that a 204 write returns None."""
        mock_vault.on("PUT", "/v1/auth/approle/role/x/secret-id/destroy", status_code=204)
        assert vault_client.write("auth/approle/role/x/secret-id/destroy", {}) is None

    def test_write_not_found_raises(self, vault_client, mock_vault):
        """Test that a 404 on write is an error, unlike on read."""
        with pytest.raises(BackendRequestError) as exc_info:
            vault_client.write("pki/issue/acme", {})
        assert exc_info.value.status_code == 404

    def test_undecodable_body_raises(self, vault_client, mock_vault):
        """Test that a non-JSON success body raises."""
        mock_vault.on("GET", "/v1/secret/app", json="not an object")

        with pytest.raises(BackendRequestError, match="Unexpected Vault response"):
            vault_client.read("secret/app")

    def test_token_is_not_in_repr(self, vault_client):
        """Test that the session token is held as a secret."""
        assert "s.test-token" not in repr(vault_client.token)
        assert vault_client.token.get_secret_value() == "s.test-token"


class TestBuildHttpClient:
    """Test cases for build_http_client function."""

    def test_client_is_rooted_at_address(self):
        """Test that requests are made relative to the Vault address."""
        client = build_http_client("https://vault.test:8200/", TLSConfig())
        try:
            assert str(client.base_url) == "https://vault.test:8200/"
        finally:
            client.close()

    def test_client_uses_timeout(self):
        """Test that the backend timeout is applied."""
        client = build_http_client("https://vault.test:8200", TLSConfig(), timeout=5)
        try:
            assert client.timeout.read == 5
        finally:
            client.close()

    def test_invalid_address_raises(self):
        """Test that an unparseable address is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid Vault address"):
            build_http_client("https://vault.test:notaport", TLSConfig())

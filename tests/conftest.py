"""Global test configuration and fixtures."""

from typing import Iterator

import httpx
import pytest

from vault_provider.clients.vault import VaultClient
from vault_provider.session import Session, TenancyContext
from vault_provider.test_utils.mock_vault import MOCK_VAULT_ADDRESS, MockVault

VAULT_ENV_VARS = (
    "VAULT_ADDR",
    "VAULT_TOKEN",
    "VAULT_CACERT",
    "VAULT_CAPATH",
    "VAULT_CLIENT_CERT",
    "VAULT_CLIENT_KEY",
    "VAULT_SKIP_VERIFY",
    "TERRAFORM_VAULT_MAX_TTL",
)


@pytest.fixture(autouse=True)
def clean_vault_env(monkeypatch):
    """Keep the developer's Vault environment out of every test."""
    for name in VAULT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_vault() -> MockVault:
    return MockVault()


@pytest.fixture
def session(mock_vault: MockVault) -> Iterator[Session]:
    """Session authenticated with a static token against mock_vault."""
    http_client = httpx.Client(base_url=MOCK_VAULT_ADDRESS, transport=mock_vault.transport)
    session = Session(
        client=VaultClient(http_client, "s.test-token"),
        tenancy=TenancyContext(organization="acme", namespace_domain="acme.io"),
        max_lease_ttl_seconds=1200,
    )
    yield session
    session.close()

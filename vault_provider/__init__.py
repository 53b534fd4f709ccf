"""Vault credential provider.

Issues, records and revokes short-lived Vault credentials for a declarative
provisioning tool:

- AppRole RoleID/SecretID pairs per GitHub repository
- PKI certificates per organization
- read-only snapshots of arbitrary secrets

Quick Start:
    >>> from vault_provider import Provider
    >>>
    >>> provider = Provider()
    >>> session = provider.configure(
    ...     provider.new_config({"address": "https://vault.test:8200", "token": "s.abc"})
    ... )
    >>> secret = provider.new_data_source_data("immutability_secret", {"path": "secret/app"})
    >>> provider.read_data_source("immutability_secret", secret, session)
    >>> secret.get("data")
"""

from vault_provider.exceptions import (
    AuthenticationError,
    BackendRequestError,
    ConfigurationError,
    CredentialLookupError,
    SecretNotFoundError,
    VaultProviderError,
)
from vault_provider.provider import Provider, configure
from vault_provider.session import Session, TenancyContext

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "BackendRequestError",
    "ConfigurationError",
    "CredentialLookupError",
    "Provider",
    "SecretNotFoundError",
    "Session",
    "TenancyContext",
    "VaultProviderError",
    "configure",
]

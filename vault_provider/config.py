"""Environment defaults for the provider configuration using Pydantic."""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vault_provider.constants import DEFAULT_MAX_LEASE_TTL_SECONDS


class VaultSettings(BaseSettings):
    """Environment fallbacks for provider configuration.

    Values explicitly set on the provider block always win; these settings
    only fill fields the block leaves empty.

    Environment Variables:
        VAULT_ADDR: URL of the root of the target Vault server.
        VAULT_TOKEN: Token used to authenticate to Vault.
        VAULT_CACERT: CA certificate file used to validate the server.
        VAULT_CAPATH: Directory of CA certificate files.
        VAULT_CLIENT_CERT: Client certificate for mutual TLS.
        VAULT_CLIENT_KEY: Private key for the client certificate.
        VAULT_SKIP_VERIFY: Disable server certificate verification.
        TERRAFORM_VAULT_MAX_TTL: Maximum TTL for secret leases, in seconds.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    address: str = Field("", validation_alias="VAULT_ADDR")
    token: str = Field("", validation_alias="VAULT_TOKEN")
    ca_cert_file: str = Field("", validation_alias="VAULT_CACERT")
    ca_cert_dir: str = Field("", validation_alias="VAULT_CAPATH")
    client_cert: str = Field("", validation_alias="VAULT_CLIENT_CERT")
    client_key: str = Field("", validation_alias="VAULT_CLIENT_KEY")
    skip_tls_verify: bool = Field(False, validation_alias="VAULT_SKIP_VERIFY")
    max_lease_ttl_seconds: int = Field(
        DEFAULT_MAX_LEASE_TTL_SECONDS, validation_alias="TERRAFORM_VAULT_MAX_TTL"
    )


def get_settings(**kwargs: Any) -> VaultSettings:
    """Read settings from the current environment.

    Not cached: each Configure sees the environment as it is at that moment.

    Args:
        **kwargs: Explicit overrides, mostly useful in tests.
    """
    return VaultSettings(**kwargs)

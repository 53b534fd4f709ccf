"""The authenticated session shared by all lifecycle calls of one run."""

from dataclasses import dataclass
from typing import Any

from vault_provider.clients.vault import VaultClient


@dataclass(frozen=True)
class TenancyContext:
    """Organization and namespace every tenant-scoped path is built from."""

    organization: str
    namespace_domain: str


@dataclass(frozen=True)
class Session:
    """Result of Configure: an authenticated client plus tenancy.

    A Session is created once per process, never mutated afterwards, and
    may be read by concurrent lifecycle calls without locking. The caller
    owns the session and releases its connection pool with close(), or by
    using it as a context manager.

    Attributes:
        client: Token-authenticated Vault client.
        tenancy: Organization and namespace for path derivation.
        max_lease_ttl_seconds: Advisory lease ceiling from the configuration.
    """

    client: VaultClient
    tenancy: TenancyContext
    max_lease_ttl_seconds: int

    @property
    def address(self) -> str:
        return self.client.address

    @property
    def session_token(self) -> str:
        return self.client.token.get_secret_value()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

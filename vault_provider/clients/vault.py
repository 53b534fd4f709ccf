"""Synchronous Vault HTTP client built on httpx.

VaultClient wraps an httpx.Client configured by build_http_client and
exposes the two logical operations the credential resources need: read and
write. Every call presents the session token and carries its own timeout;
nothing is retried here.
"""

import ssl
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from vault_provider.clients.ssl_utils import TLSConfig, create_ssl_context
from vault_provider.constants import (
    VAULT_API_PREFIX,
    VAULT_CLIENT_TIMEOUT,
    VAULT_TOKEN_HEADER,
)
from vault_provider.exceptions import BackendRequestError, ConfigurationError
from vault_provider.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class VaultAuth(BaseModel):
    """The auth block of a Vault response (present on login calls)."""

    model_config = ConfigDict(extra="ignore")

    client_token: str = ""
    accessor: str = ""
    policies: Optional[List[str]] = None
    lease_duration: int = 0
    renewable: bool = False


class VaultSecret(BaseModel):
    """Decoded Vault response envelope.

    Attributes:
        request_id: Identifier Vault assigned to the request.
        lease_id: Lease identifier for dynamic secrets, empty otherwise.
        lease_duration: Lease duration in seconds.
        renewable: Whether the lease can be extended through renewal.
        data: The secret payload.
        auth: Authentication block, set by login endpoints.
        warnings: Non-fatal warnings reported by Vault.
    """

    model_config = ConfigDict(extra="ignore")

    request_id: str = ""
    lease_id: str = ""
    lease_duration: int = 0
    renewable: bool = False
    data: Dict[str, Any] = Field(default_factory=dict)
    auth: Optional[VaultAuth] = None
    warnings: Optional[List[str]] = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        # Vault sends "data": null on auth and revoke responses
        return {} if value is None else value


def build_http_client(
    address: str,
    tls: TLSConfig,
    timeout: float = VAULT_CLIENT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the httpx client shared by login and backend calls.

    Args:
        address: URL of the root of the Vault server.
        tls: TLS settings; see create_ssl_context.
        timeout: Default timeout for backend calls, in seconds.
        transport: Optional transport override (e.g. httpx.MockTransport).

    Returns:
        httpx.Client: Client rooted at address.

    Raises:
        ConfigurationError: If the TLS configuration cannot be loaded or
            address is not a valid URL.
    """
    verify: Union[bool, ssl.SSLContext] = create_ssl_context(tls)
    try:
        return httpx.Client(
            base_url=address.rstrip("/"),
            verify=verify,
            timeout=timeout,
            transport=transport,
        )
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid Vault address {address!r}: {e}") from e


def api_path(path: str) -> str:
    """Return the request path for a logical Vault path."""
    return f"/{VAULT_API_PREFIX}/{path.lstrip('/')}"


def _response_errors(response: httpx.Response) -> List[str]:
    try:
        body = response.json()
    except ValueError:
        return [response.text] if response.text else []
    if isinstance(body, dict):
        return [str(e) for e in body.get("errors") or []]
    return []


class VaultClient:
    """Token-authenticated client for the Vault logical API.

    Instances are immutable after construction and safe to share across
    threads; the underlying httpx.Client pools connections.

    Example:
        >>> http_client = build_http_client("https://vault.test:8200", TLSConfig())
        >>> client = VaultClient(http_client, token="s.abc")
        >>> secret = client.read("secret/app/config")
        >>> secret.data if secret else None
    """

    def __init__(self, http_client: httpx.Client, token: str) -> None:
        self._http = http_client
        self._token = SecretStr(token)

    @property
    def address(self) -> str:
        """URL of the root of the Vault server, without a trailing slash."""
        return str(self._http.base_url).rstrip("/")

    @property
    def http_client(self) -> httpx.Client:
        return self._http

    @property
    def token(self) -> SecretStr:
        return self._token

    def _headers(self) -> Dict[str, str]:
        return {VAULT_TOKEN_HEADER: self._token.get_secret_value()}

    def _request(
        self,
        method: str,
        operation: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[VaultSecret]:
        logger.debug(f"Vault {operation} {path}")
        try:
            response = self._http.request(
                method, api_path(path), headers=self._headers(), json=json
            )
        except httpx.RequestError as e:
            raise BackendRequestError(
                f"Error during Vault {operation} of {path}: {e}",
                operation=operation,
                path=path,
            ) from e

        if response.status_code == 204:
            return None
        if response.status_code == 404 and operation == "read":
            logger.debug(f"Nothing found at {path}")
            return None
        if not response.is_success:
            errors = _response_errors(response)
            detail = "; ".join(errors) if errors else response.reason_phrase
            raise BackendRequestError(
                f"Error during Vault {operation} of {path}: "
                f"HTTP {response.status_code}: {detail}",
                operation=operation,
                path=path,
                status_code=response.status_code,
                errors=errors,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise BackendRequestError(
                f"Error decoding Vault response for {operation} of {path}: {e}",
                operation=operation,
                path=path,
                status_code=response.status_code,
            ) from e
        if body is None:
            return None
        if not isinstance(body, dict):
            raise BackendRequestError(
                f"Unexpected Vault response for {operation} of {path}",
                operation=operation,
                path=path,
                status_code=response.status_code,
            )
        return VaultSecret.model_validate(body)

    def read(self, path: str) -> Optional[VaultSecret]:
        """Read a secret.

        Args:
            path: Logical path, e.g. "secret/app/config".

        Returns:
            Optional[VaultSecret]: The decoded response, or None when Vault
                has nothing at that path.

        Raises:
            BackendRequestError: On network failure or a non-success status.
        """
        return self._request("GET", "read", path)

    def write(self, path: str, data: Dict[str, Any]) -> Optional[VaultSecret]:
        """Write data to a path.

        Args:
            path: Logical path, e.g. "pki/issue/acme".
            data: JSON body of the request.

        Returns:
            Optional[VaultSecret]: The decoded response, or None when Vault
                answers with no content.

        Raises:
            BackendRequestError: On network failure or a non-success status.
        """
        return self._request("PUT", "write", path, json=data)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if not self._http.is_closed:
            self._http.close()

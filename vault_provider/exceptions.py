"""Custom exceptions for provider operations.

These exceptions provide specific error handling for the different failure
modes of configuring a session and driving credential lifecycles. None of
them is retried or downgraded inside the provider; the orchestrator decides
what to do with them.
"""

from typing import List, Optional


class VaultProviderError(Exception):
    """Base exception for provider operations.

    All provider exceptions inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(VaultProviderError):
    """Raised when transport or authentication configuration is invalid.

    This can occur when:
    - More than one client_auth block is supplied
    - Only one half of a client certificate/key pair is supplied
    - A CA certificate or client key file cannot be read or parsed
    - No authentication token could be obtained

    Example:
        >>> raise ConfigurationError("client auth block may appear only once")
    """

    pass


class AuthenticationError(VaultProviderError):
    """Raised when the federated GitHub login handshake fails.

    Attributes:
        status_code: HTTP status returned by the login endpoint, if any.

    Example:
        >>> raise AuthenticationError(
        ...     "Vault authentication to GitHub failed with status 403",
        ...     status_code=403,
        ... )
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CredentialLookupError(VaultProviderError):
    """Raised when a successful-looking response lacks an expected field.

    Example:
        >>> raise CredentialLookupError("role_id not found at auth/approle/.../role-id")
    """

    pass


class BackendRequestError(VaultProviderError):
    """Raised when a backend read, write or revoke call fails.

    Covers both network failures (no status code) and non-success HTTP
    statuses reported by Vault.

    Attributes:
        operation: The logical operation that failed ("read" or "write").
        path: Backend path the call was addressed to.
        status_code: HTTP status code, or None for network failures.
        errors: Error messages reported by Vault in the response body.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        path: str,
        status_code: Optional[int] = None,
        errors: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.status_code = status_code
        self.errors = errors or []


class SecretNotFoundError(VaultProviderError):
    """Raised when a backend read returns no secret.

    Example:
        >>> raise SecretNotFoundError("No secret found at secret/app/config")
    """

    pass

"""Session token acquisition for Vault.

Two paths produce a session token:

- a static token supplied by the caller, used verbatim;
- a GitHub personal access token exchanged for a Vault token through the
  GitHub auth method mounted at auth/github/<namespace>/<organization>.

The GitHub path wins whenever a personal access token is present.
"""

from typing import Optional

import httpx
from pydantic import ValidationError

from vault_provider.clients.vault import VaultSecret, api_path
from vault_provider.constants import GITHUB_AUTH_PROVIDER, GITHUB_LOGIN_TIMEOUT
from vault_provider.exceptions import AuthenticationError, ConfigurationError
from vault_provider.observability.logger_adaptor import get_logger
from vault_provider.resources.paths import login_path

logger = get_logger(__name__)


def github_login(
    http_client: httpx.Client,
    personal_access_token: str,
    organization: str,
    namespace_domain: str,
    timeout: float = GITHUB_LOGIN_TIMEOUT,
) -> str:
    """Exchange a GitHub personal access token for a Vault token.

    Args:
        http_client: Client rooted at the Vault address, with TLS configured.
        personal_access_token: GitHub token presented to Vault.
        organization: GitHub organization the auth mount belongs to.
        namespace_domain: Namespace domain the auth mount belongs to.
        timeout: Timeout for the login call, in seconds.

    Returns:
        str: The Vault client token.

    Raises:
        ConfigurationError: If the organization or namespace is missing.
        AuthenticationError: On network failure, a non-200 status, or a
            response without a client token.

    Example:
        >>> token = github_login(client, "ghp_...", "acme", "acme.io")
    """
    if not personal_access_token or not organization or not namespace_domain:
        raise ConfigurationError(
            "Missing personal_access_token or github_org or namespace_domain"
        )

    url = api_path(login_path(GITHUB_AUTH_PROVIDER, namespace_domain, organization))
    logger.debug(f"GitHub login URL {http_client.base_url}{url.lstrip('/')}")

    try:
        response = http_client.post(
            url, json={"token": personal_access_token}, timeout=timeout
        )
    except httpx.RequestError as e:
        raise AuthenticationError(f"Vault authentication to GitHub failed: {e}") from e

    if response.status_code != 200:
        raise AuthenticationError(
            f"Vault authentication to GitHub failed with status {response.status_code}",
            status_code=response.status_code,
        )

    try:
        payload = VaultSecret.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise AuthenticationError(
            f"Vault authentication to GitHub returned an unreadable response: {e}",
            status_code=response.status_code,
        ) from e

    if payload.auth is None or not payload.auth.client_token:
        raise AuthenticationError(
            "Vault authentication to GitHub returned no client token",
            status_code=response.status_code,
        )
    return payload.auth.client_token


def resolve_session_token(
    http_client: httpx.Client,
    token: Optional[str] = None,
    personal_access_token: Optional[str] = None,
    organization: str = "",
    namespace_domain: str = "",
) -> str:
    """Pick the session token for this run.

    Args:
        http_client: Client rooted at the Vault address.
        token: Static Vault token, used verbatim when no GitHub token is set.
        personal_access_token: GitHub token; when set, login is attempted and
            its result is used even if a static token was also supplied.
        organization: GitHub organization.
        namespace_domain: Namespace domain.

    Returns:
        str: A non-empty session token.

    Raises:
        ConfigurationError: If no token could be obtained.
        AuthenticationError: If the GitHub login fails.
    """
    session_token = token or ""
    if personal_access_token:
        logger.debug("Using GitHub login")
        try:
            session_token = github_login(
                http_client, personal_access_token, organization, namespace_domain
            )
        except AuthenticationError:
            logger.error("GitHub login failed")
            raise

    if not session_token:
        raise ConfigurationError("no authentication token supplied")
    return session_token

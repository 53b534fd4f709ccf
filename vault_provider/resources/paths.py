"""Vault path conventions.

Every backend path the provider touches is derived here from the tenancy
(namespace domain and GitHub organization) and the resource's own fields.
These are plain string functions with no I/O; empty segments are kept as-is.
"""

from vault_provider.constants import APPROLE_AUTH_PROVIDER, VAULT_API_PREFIX


def login_path(provider: str, namespace_domain: str, organization: str) -> str:
    """Login endpoint of an auth method mounted per tenant.

    Example:
        >>> login_path("github", "acme.io", "acme")
        'auth/github/acme.io/acme/login'
    """
    return f"auth/{provider}/{namespace_domain}/{organization}/login"


def login_url(address: str, path: str) -> str:
    """Absolute URL a client application authenticates against."""
    return f"{address.rstrip('/')}/{VAULT_API_PREFIX}/{path}"


def approle_role_path(namespace_domain: str, organization: str, repository: str) -> str:
    """Path of the AppRole role belonging to one repository.

    Example:
        >>> approle_role_path("acme.io", "acme", "my-repo")
        'auth/approle/acme.io/acme/role/my-repo'
    """
    return (
        f"auth/{APPROLE_AUTH_PROVIDER}/{namespace_domain}/{organization}"
        f"/role/{repository}"
    )


def role_id_path(role_path: str) -> str:
    return f"{role_path}/role-id"


def secret_id_path(role_path: str) -> str:
    return f"{role_path}/secret-id"


def secret_id_destroy_path(role_path: str) -> str:
    return f"{role_path}/secret-id/destroy"


def approle_login_path(namespace_domain: str, organization: str) -> str:
    return login_path(APPROLE_AUTH_PROVIDER, namespace_domain, organization)


def certificate_issue_path(mount: str, organization: str) -> str:
    """PKI issue endpoint; the organization doubles as the PKI role name.

    Example:
        >>> certificate_issue_path("pki_int", "acme")
        'pki_int/issue/acme'
    """
    return f"{mount}/issue/{organization}"


def certificate_revoke_path(mount: str) -> str:
    return f"{mount}/revoke"

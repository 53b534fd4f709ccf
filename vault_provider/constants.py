import os

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Vault connection
VAULT_API_PREFIX = "v1"
VAULT_TOKEN_HEADER = "X-Vault-Token"
VAULT_CLIENT_TIMEOUT = float(os.getenv("VAULT_CLIENT_TIMEOUT", "60"))

# GitHub federated login
GITHUB_AUTH_PROVIDER = "github"
GITHUB_LOGIN_TIMEOUT = 10.0

# AppRole
APPROLE_AUTH_PROVIDER = "approle"

# PKI
DEFAULT_PKI_MOUNT = "vault_intermediate"

# Default lease ceiling: long enough for one orchestrator run to complete,
# short enough that leases are revoked soon after it finishes.
DEFAULT_MAX_LEASE_TTL_SECONDS = 1200

# Supported CA certificate file extensions
CERT_FILE_EXTENSIONS = (".pem", ".crt", ".cer", ".ca-bundle")

# Resource type names exposed to the orchestrator
APPROLE_RESOURCE = "immutability_approle"
CERTIFICATE_RESOURCE = "immutability_ssl"
GENERIC_SECRET_DATA_SOURCE = "immutability_secret"

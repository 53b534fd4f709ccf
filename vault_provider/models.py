"""Typed configuration for the provider block and each resource kind.

Attribute bags are validated into these models once, at the boundary, so
the lifecycle code only handles concrete values.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from vault_provider.config import VaultSettings
from vault_provider.constants import DEFAULT_MAX_LEASE_TTL_SECONDS, DEFAULT_PKI_MOUNT
from vault_provider.exceptions import ConfigurationError

if TYPE_CHECKING:
    from vault_provider.resources.data import AttributeBag

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_config(model_cls: Type[ModelT], bag: "AttributeBag") -> ModelT:
    """Validate the bag attributes named by model_cls into a model instance.

    Raises:
        ConfigurationError: If a value is missing or has the wrong shape.
    """
    values = {name: bag.get(name) for name in model_cls.model_fields}
    try:
        return model_cls.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {model_cls.__name__}: {e.error_count()} error(s): "
            + "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
        ) from e



def _env_default(bag: "AttributeBag", name: str, fallback: Any) -> Any:
    """Value of name on the block, or fallback when the block leaves it unset.

    An explicit False or 0 is kept; only unset or empty-string values fall
    back to the environment.
    """
    if bag.is_set(name) and bag.get(name) != "":
        return bag.get(name)
    return fallback


class ClientAuthBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cert_file: str = ""
    key_file: str = ""


class ProviderConfig(BaseModel):
    """Provider block after environment defaults are applied.

    Attributes:
        address: URL of the root of the target Vault server.
        token: Static Vault token.
        personal_access_token: GitHub token exchanged for a Vault token.
        github_org: GitHub organization; scopes login, AppRole and PKI paths.
        namespace_domain: Namespace domain; scopes login and AppRole paths.
        ca_cert_file: CA certificate file for server validation.
        ca_cert_dir: Directory of CA certificate files.
        client_auth: Mutual-TLS blocks; at most one is allowed.
        skip_tls_verify: Disable server certificate verification.
        max_lease_ttl_seconds: Advisory maximum TTL for leases.
    """

    model_config = ConfigDict(extra="ignore")

    address: str = Field(min_length=1)
    token: SecretStr = SecretStr("")
    personal_access_token: SecretStr = SecretStr("")
    github_org: str = ""
    namespace_domain: str = ""
    ca_cert_file: str = ""
    ca_cert_dir: str = ""
    client_auth: List[ClientAuthBlock] = Field(default_factory=list)
    skip_tls_verify: bool = False
    max_lease_ttl_seconds: int = DEFAULT_MAX_LEASE_TTL_SECONDS

    @classmethod
    def from_bag(cls, bag: "AttributeBag", settings: VaultSettings) -> "ProviderConfig":
        """Read the provider block, filling empty fields from settings."""
        client_auth: List[Dict[str, Any]] = []
        for block in bag.get("client_auth") or []:
            client_auth.append(
                {
                    "cert_file": block.get("cert_file") or settings.client_cert,
                    "key_file": block.get("key_file") or settings.client_key,
                }
            )

        values: Dict[str, Any] = {
            "address": _env_default(bag, "address", settings.address),
            "token": _env_default(bag, "token", settings.token),
            "personal_access_token": bag.get("personal_access_token"),
            "github_org": bag.get("github_org"),
            "namespace_domain": bag.get("namespace_domain"),
            "ca_cert_file": _env_default(bag, "ca_cert_file", settings.ca_cert_file),
            "ca_cert_dir": _env_default(bag, "ca_cert_dir", settings.ca_cert_dir),
            "client_auth": client_auth,
            "skip_tls_verify": _env_default(
                bag, "skip_tls_verify", settings.skip_tls_verify
            ),
            "max_lease_ttl_seconds": _env_default(
                bag, "max_lease_ttl_seconds", settings.max_lease_ttl_seconds
            ),
        }
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            if any(err["loc"] == ("address",) for err in e.errors()):
                raise ConfigurationError(
                    "address is required: set it on the provider or via VAULT_ADDR"
                ) from e
            raise ConfigurationError(f"Invalid provider configuration: {e}") from e


class AppRoleConfig(BaseModel):
    repository: str = Field(min_length=1)


class CertificateConfig(BaseModel):
    """Inputs of a certificate issuance.

    alt_names and ip_sans are comma-delimited lists passed through to Vault.
    """

    common_name: str = Field(min_length=1)
    path: str = Field(default=DEFAULT_PKI_MOUNT, min_length=1)
    alt_names: str = ""
    ip_sans: str = ""
    ttl: str = ""

    def issue_request(self) -> Dict[str, str]:
        """Body of the issue call; empty optional fields are left out."""
        body = {"common_name": self.common_name}
        for name in ("alt_names", "ip_sans", "ttl"):
            value: Optional[str] = getattr(self, name)
            if value:
                body[name] = value
        return body


class GenericSecretConfig(BaseModel):
    path: str = Field(min_length=1)

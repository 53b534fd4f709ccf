"""Provider entry point: Configure plus resource lifecycle dispatch.

The orchestrator calls configure() once per run to obtain a Session, then
create/read/delete for each declared resource and read_data_source for each
data source, passing the attribute bag of that instance. The Session holds
the connection pool and is closed by the caller.

Example:
    >>> provider = Provider()
    >>> session = provider.configure(
    ...     provider.new_config(
    ...         {
    ...             "address": "https://vault.test:8200",
    ...             "personal_access_token": "ghp_...",
    ...             "github_org": "acme",
    ...             "namespace_domain": "acme.io",
    ...         }
    ...     )
    ... )
    >>> cert = provider.new_resource_data("immutability_ssl", {"common_name": "svc.acme.io"})
    >>> with session:
    ...     provider.create("immutability_ssl", cert, session)
"""

from typing import Any, Dict, List, Optional

import httpx

from vault_provider.clients.auth import resolve_session_token
from vault_provider.clients.ssl_utils import TLSConfig, resolve_client_auth
from vault_provider.clients.vault import VaultClient, build_http_client
from vault_provider.config import VaultSettings, get_settings
from vault_provider.models import ProviderConfig
from vault_provider.observability.logger_adaptor import get_logger
from vault_provider.resources.approle import AppRoleResource
from vault_provider.resources.base import BaseDataSource, BaseResource
from vault_provider.resources.certificate import CertificateResource
from vault_provider.resources.data import AttributeBag, ResourceData
from vault_provider.resources.generic_secret import GenericSecretDataSource
from vault_provider.resources.schema import FieldSpec, FieldType
from vault_provider.session import Session, TenancyContext

logger = get_logger(__name__)

PROVIDER_SCHEMA: List[FieldSpec] = [
    FieldSpec(
        name="address",
        description="URL of the root of the target Vault server.",
        required=True,
    ),
    FieldSpec(
        name="token",
        description="Token to use to authenticate to Vault.",
        sensitive=True,
    ),
    FieldSpec(
        name="personal_access_token",
        description="GitHub Token to use to authenticate to Vault.",
        sensitive=True,
    ),
    FieldSpec(
        name="github_org",
        description="GitHub Org to use to authenticate to Vault.",
    ),
    FieldSpec(name="namespace_domain", description="Namespace", force_new=True),
    FieldSpec(
        name="ca_cert_file",
        description="Path to a CA certificate file to validate the server's certificate.",
    ),
    FieldSpec(
        name="ca_cert_dir",
        description=(
            "Path to directory containing CA certificate files to validate "
            "the server's certificate."
        ),
    ),
    FieldSpec(
        name="client_auth",
        field_type=FieldType.LIST,
        description="Client authentication credentials (cert_file, key_file).",
    ),
    FieldSpec(
        name="skip_tls_verify",
        field_type=FieldType.BOOL,
        description=(
            "Set this to true only if the target Vault server is an insecure "
            "development instance."
        ),
    ),
    FieldSpec(
        name="max_lease_ttl_seconds",
        field_type=FieldType.INT,
        description="Maximum TTL for secret leases requested by this provider",
    ),
]


def configure(
    bag: AttributeBag,
    settings: Optional[VaultSettings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Session:
    """Build the authenticated Session for this run.

    Args:
        bag: The provider block.
        settings: Environment defaults; read from the environment if omitted.
        transport: Optional httpx transport override.

    Returns:
        Session: Immutable session shared by all lifecycle calls.

    Raises:
        ConfigurationError: Invalid TLS or authentication configuration.
        AuthenticationError: The GitHub login failed.
    """
    settings = settings if settings is not None else get_settings()
    config = ProviderConfig.from_bag(bag, settings)

    client_auth = resolve_client_auth([block.model_dump() for block in config.client_auth])
    client_cert, client_key = client_auth if client_auth else ("", "")
    tls = TLSConfig(
        ca_cert_file=config.ca_cert_file,
        ca_cert_dir=config.ca_cert_dir,
        client_cert=client_cert,
        client_key=client_key,
        insecure=config.skip_tls_verify,
    )
    http_client = build_http_client(config.address, tls, transport=transport)

    try:
        token = resolve_session_token(
            http_client,
            token=config.token.get_secret_value(),
            personal_access_token=config.personal_access_token.get_secret_value(),
            organization=config.github_org,
            namespace_domain=config.namespace_domain,
        )
    except Exception:
        http_client.close()
        raise

    logger.info(f"Configured Vault session for {config.address}")
    return Session(
        client=VaultClient(http_client, token),
        tenancy=TenancyContext(
            organization=config.github_org,
            namespace_domain=config.namespace_domain,
        ),
        max_lease_ttl_seconds=config.max_lease_ttl_seconds,
    )


class Provider:
    """Registry of resource kinds plus the lifecycle contract.

    Attributes:
        resources: Resource kinds by type name.
        data_sources: Data source kinds by type name.
    """

    schema: List[FieldSpec] = PROVIDER_SCHEMA

    def __init__(
        self,
        settings: Optional[VaultSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self.resources: Dict[str, BaseResource] = {
            resource.type_name: resource
            for resource in (AppRoleResource(), CertificateResource())
        }
        self.data_sources: Dict[str, BaseDataSource] = {
            source.type_name: source for source in (GenericSecretDataSource(),)
        }

    def _resource(self, type_name: str) -> BaseResource:
        try:
            return self.resources[type_name]
        except KeyError:
            raise KeyError(f"Unknown resource type '{type_name}'") from None

    def _data_source(self, type_name: str) -> BaseDataSource:
        try:
            return self.data_sources[type_name]
        except KeyError:
            raise KeyError(f"Unknown data source type '{type_name}'") from None

    def new_config(self, values: Optional[Dict[str, Any]] = None) -> ResourceData:
        """Create the attribute bag of the provider block."""
        return ResourceData(self.schema, values)

    def new_resource_data(
        self,
        type_name: str,
        values: Optional[Dict[str, Any]] = None,
        resource_id: str = "",
    ) -> ResourceData:
        return self._resource(type_name).new_data(values, resource_id)

    def new_data_source_data(
        self, type_name: str, values: Optional[Dict[str, Any]] = None
    ) -> ResourceData:
        return self._data_source(type_name).new_data(values)

    def configure(self, bag: AttributeBag) -> Session:
        """Build the Session; the caller closes it when the run ends."""
        return configure(bag, settings=self._settings, transport=self._transport)

    def create(self, type_name: str, bag: AttributeBag, session: Session) -> None:
        self._resource(type_name).create(bag, session)

    def read(self, type_name: str, bag: AttributeBag, session: Session) -> None:
        self._resource(type_name).read(bag, session)

    def delete(self, type_name: str, bag: AttributeBag, session: Session) -> None:
        self._resource(type_name).delete(bag, session)

    def read_data_source(
        self, type_name: str, bag: AttributeBag, session: Session
    ) -> None:
        self._data_source(type_name).read(bag, session)

"""AppRole credentials scoped to one GitHub repository.

Create reads the role's RoleID and generates a fresh SecretID. The SecretID
is returned by Vault exactly once, so Read never tries to fetch it again.
Delete destroys the recorded SecretID.
"""

from typing import List

from vault_provider.constants import APPROLE_RESOURCE
from vault_provider.exceptions import BackendRequestError, CredentialLookupError
from vault_provider.models import AppRoleConfig
from vault_provider.observability.logger_adaptor import get_logger
from vault_provider.resources.base import BaseResource
from vault_provider.resources.data import AttributeBag
from vault_provider.resources.paths import (
    approle_login_path,
    approle_role_path,
    login_url,
    role_id_path,
    secret_id_destroy_path,
    secret_id_path,
)
from vault_provider.resources.schema import FieldSpec, FieldType
from vault_provider.session import Session

logger = get_logger(__name__)


class AppRoleResource(BaseResource):
    """AppRole RoleID/SecretID pair for a repository.

    Example:
        >>> resource = AppRoleResource()
        >>> data = resource.new_data({"repository": "my-repo"})
        >>> resource.create(data, session)
        >>> data.id
        'auth/approle/acme.io/acme/role/my-repo'
    """

    type_name = APPROLE_RESOURCE
    config_model = AppRoleConfig

    schema: List[FieldSpec] = [
        FieldSpec(
            name="repository",
            description="Name of GitHub repository",
            required=True,
            force_new=True,
        ),
        FieldSpec(
            name="secret_id",
            description="The AppRole Secret ID",
            computed=True,
            sensitive=True,
        ),
        FieldSpec(
            name="role_id",
            description="AppRole Role ID",
            computed=True,
        ),
        FieldSpec(
            name="auth_path",
            field_type=FieldType.STRING,
            description="AppRole Login path",
            computed=True,
        ),
    ]

    def create(self, bag: AttributeBag, session: Session) -> None:
        config: AppRoleConfig = self.load_config(bag)
        tenancy = session.tenancy
        role_path = approle_role_path(
            tenancy.namespace_domain, tenancy.organization, config.repository
        )

        logger.debug(f"Reading RoleID for {role_path}")
        role = session.client.read(role_id_path(role_path))
        if role is None:
            raise CredentialLookupError(
                f"Error reading RoleID from Vault: nothing found at {role_id_path(role_path)}"
            )
        role_id = role.data.get("role_id")
        if not isinstance(role_id, str) or not role_id:
            raise CredentialLookupError(f"RoleID not found for {role_path}")
        logger.debug(f"Got RoleID for {role_path}")

        secret = session.client.write(secret_id_path(role_path), {})
        if secret is None:
            raise CredentialLookupError(
                f"Error generating SecretID from Vault: empty response from "
                f"{secret_id_path(role_path)}"
            )
        secret_id = secret.data.get("secret_id")
        if not isinstance(secret_id, str) or not secret_id:
            raise CredentialLookupError(f"SecretID not found for {role_path}")
        logger.info(f"Generated SecretID for {role_path}")

        bag.set_id(role_path)
        bag.set("role_id", role_id)
        bag.set("secret_id", secret_id)
        bag.set(
            "auth_path",
            login_url(
                session.address,
                approle_login_path(tenancy.namespace_domain, tenancy.organization),
            ),
        )

    def delete(self, bag: AttributeBag, session: Session) -> None:
        role_path = bag.id
        if not role_path:
            raise CredentialLookupError("Cannot revoke secret_id: no role path recorded")
        destroy_path = secret_id_destroy_path(role_path)

        logger.debug(f"Revoking secret_id at {role_path}")
        try:
            session.client.write(destroy_path, {"secret_id": bag.get("secret_id")})
        except BackendRequestError as e:
            logger.error(f"Failed to revoke secret_id at {role_path}")
            raise BackendRequestError(
                f"Error revoking secret_id: {e}",
                operation="revoke",
                path=destroy_path,
                status_code=e.status_code,
                errors=e.errors,
            ) from e
        logger.info(f"Revoked secret_id at {role_path}")

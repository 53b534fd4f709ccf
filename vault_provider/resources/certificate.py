"""X.509 certificates issued by a Vault PKI mount.

The organization is the PKI role certificates are issued under. The private
key is only returned by the issue call, so Read is a no-op; Delete revokes
the certificate by serial number.
"""

from typing import List

from vault_provider.constants import CERTIFICATE_RESOURCE, DEFAULT_PKI_MOUNT
from vault_provider.exceptions import BackendRequestError, CredentialLookupError
from vault_provider.models import CertificateConfig
from vault_provider.observability.logger_adaptor import get_logger
from vault_provider.resources.base import BaseResource
from vault_provider.resources.data import AttributeBag
from vault_provider.resources.paths import (
    certificate_issue_path,
    certificate_revoke_path,
)
from vault_provider.resources.schema import FieldSpec, FieldType
from vault_provider.session import Session

logger = get_logger(__name__)

ISSUED_FIELDS = (
    "certificate",
    "private_key",
    "issuing_ca",
    "private_key_type",
    "serial_number",
)


class CertificateResource(BaseResource):
    type_name = CERTIFICATE_RESOURCE
    config_model = CertificateConfig

    schema: List[FieldSpec] = [
        FieldSpec(
            name="common_name",
            description="Common name of certificate",
            required=True,
            force_new=True,
        ),
        FieldSpec(
            name="path",
            description="Path to the Certificate Authority",
            force_new=True,
            default=DEFAULT_PKI_MOUNT,
        ),
        FieldSpec(
            name="alt_names",
            description="Subject Alt Names, comma delimited",
            force_new=True,
        ),
        FieldSpec(
            name="ip_sans",
            description="IP Subject Alt Names, comma delimited",
            force_new=True,
        ),
        FieldSpec(name="ttl", description="TTL for certificate", force_new=True),
        FieldSpec(name="certificate", description="The certificate", computed=True),
        FieldSpec(
            name="private_key",
            description="The private key",
            computed=True,
            sensitive=True,
        ),
        FieldSpec(name="issuing_ca", description="The issuing CA", computed=True),
        FieldSpec(
            name="private_key_type",
            description="The private key type",
            computed=True,
        ),
        FieldSpec(
            name="serial_number",
            description="The serial number",
            computed=True,
        ),
        FieldSpec(
            name="revocation_time",
            field_type=FieldType.INT,
            description="The revocation time",
            computed=True,
        ),
    ]

    def create(self, bag: AttributeBag, session: Session) -> None:
        config: CertificateConfig = self.load_config(bag)
        issue_path = certificate_issue_path(config.path, session.tenancy.organization)

        logger.debug(f"Issuing {config.common_name} certificate at {issue_path}")
        try:
            secret = session.client.write(issue_path, config.issue_request())
        except BackendRequestError as e:
            raise BackendRequestError(
                f"Error issuing {config.common_name} certificate: {e}",
                operation="issue",
                path=issue_path,
                status_code=e.status_code,
                errors=e.errors,
            ) from e

        if secret is None:
            raise CredentialLookupError(
                f"Vault returned no certificate for {config.common_name} at {issue_path}"
            )
        serial_number = secret.data.get("serial_number")
        if not isinstance(serial_number, str) or not serial_number:
            raise CredentialLookupError(
                f"serial_number not found in certificate issued at {issue_path}"
            )
        logger.info(f"Issued {config.common_name} certificate {serial_number}")

        bag.set_id(serial_number)
        for name in ISSUED_FIELDS:
            value = secret.data.get(name)
            bag.set(name, value if isinstance(value, str) else "")

    def delete(self, bag: AttributeBag, session: Session) -> None:
        serial_number = bag.id
        if not serial_number:
            raise CredentialLookupError("Cannot revoke certificate: no serial number recorded")
        revoke_path = certificate_revoke_path(bag.get("path"))

        logger.debug(f"Revoking {serial_number} certificate")
        try:
            secret = session.client.write(revoke_path, {"serial_number": serial_number})
        except BackendRequestError as e:
            logger.error(f"Failed to revoke {serial_number} certificate")
            raise BackendRequestError(
                f"Error revoking {serial_number} certificate: {e}",
                operation="revoke",
                path=revoke_path,
                status_code=e.status_code,
                errors=e.errors,
            ) from e

        revocation_time = secret.data.get("revocation_time") if secret else None
        if isinstance(revocation_time, int) and not isinstance(revocation_time, bool):
            bag.set("revocation_time", revocation_time)
        logger.info(f"Revoked {serial_number} certificate")

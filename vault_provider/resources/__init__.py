"""Credential resources and data sources managed by the provider.

- AppRoleResource: RoleID/SecretID pairs per repository
- CertificateResource: PKI certificates issued per organization
- GenericSecretDataSource: read-only view of any secret path
"""

from vault_provider.resources.approle import AppRoleResource
from vault_provider.resources.base import BaseDataSource, BaseResource
from vault_provider.resources.certificate import CertificateResource
from vault_provider.resources.data import AttributeBag, ResourceData
from vault_provider.resources.generic_secret import GenericSecretDataSource
from vault_provider.resources.schema import FieldSpec, FieldType

__all__ = [
    "AppRoleResource",
    "AttributeBag",
    "BaseDataSource",
    "BaseResource",
    "CertificateResource",
    "FieldSpec",
    "FieldType",
    "GenericSecretDataSource",
    "ResourceData",
]

"""Base interfaces for resources and data sources.

A data source only implements read(). A resource adds create() and
delete(); its read() defaults to a no-op because the resources this
provider manages hold write-once material that Vault will not return again.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from vault_provider.models import load_config
from vault_provider.resources.data import AttributeBag, ResourceData
from vault_provider.resources.schema import FieldSpec
from vault_provider.session import Session


class BaseDataSource(ABC):
    """Abstract base class for read-only views of Vault state.

    Subclasses declare their attributes in schema and the pydantic model
    their inputs are validated into in config_model.
    """

    type_name: str = ""
    schema: List[FieldSpec] = []
    config_model: Optional[Type[BaseModel]] = None

    def load_config(self, bag: AttributeBag) -> Any:
        """Validate this kind's inputs from bag into config_model."""
        if self.config_model is None:
            raise NotImplementedError(f"{type(self).__name__} has no config_model")
        return load_config(self.config_model, bag)

    def new_data(
        self, values: Optional[Dict[str, Any]] = None, resource_id: str = ""
    ) -> ResourceData:
        """Create an attribute bag for this kind."""
        return ResourceData(self.schema, values, resource_id)

    @abstractmethod
    def read(self, bag: AttributeBag, session: Session) -> None:
        """Refresh bag from Vault."""
        raise NotImplementedError


class BaseResource(BaseDataSource):
    """Abstract base class for resources with a create/read/delete lifecycle."""

    @abstractmethod
    def create(self, bag: AttributeBag, session: Session) -> None:
        """Create the credential and record it in bag.

        Implementations must not write to bag until every backend call
        has succeeded.
        """
        raise NotImplementedError

    def read(self, bag: AttributeBag, session: Session) -> None:
        """Local state is authoritative; nothing is re-read from Vault."""
        return None

    @abstractmethod
    def delete(self, bag: AttributeBag, session: Session) -> None:
        """Revoke the credential recorded in bag.

        Failures must propagate: a failed revocation leaves a live
        credential in Vault.
        """
        raise NotImplementedError

"""Read-only view of an arbitrary Vault secret."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

import orjson

from vault_provider.constants import GENERIC_SECRET_DATA_SOURCE
from vault_provider.exceptions import SecretNotFoundError
from vault_provider.models import GenericSecretConfig
from vault_provider.observability.logger_adaptor import get_logger
from vault_provider.resources.base import BaseDataSource
from vault_provider.resources.data import AttributeBag
from vault_provider.resources.schema import FieldSpec, FieldType
from vault_provider.session import Session

logger = get_logger(__name__)


def canonical_json(value: Any) -> str:
    """Compact JSON with sorted object keys.

    orjson only encodes 64-bit integers; a decoded payload holding a larger
    one is encoded with the json module instead, which keeps it exact.
    """
    try:
        return orjson.dumps(value, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    except orjson.JSONEncodeError:
        return json.dumps(
            value, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )


def flatten_secret_data(data: Dict[str, Any]) -> Dict[str, str]:
    """Project a secret payload into a map of strings.

    String values are copied as-is; every other value (numbers, booleans,
    null, nested objects and arrays) is replaced by its JSON encoding so it
    can be decoded again by whoever consumes the map.

    Example:
        >>> flatten_secret_data({"user": "app", "port": 5432, "tags": ["a"]})
        {'user': 'app', 'port': '5432', 'tags': '["a"]'}
    """
    return {
        key: value if isinstance(value, str) else canonical_json(value)
        for key, value in data.items()
    }


def lease_start_time() -> str:
    """Current UTC time in RFC 3339, using the local clock."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class GenericSecretDataSource(BaseDataSource):
    type_name = GENERIC_SECRET_DATA_SOURCE
    config_model = GenericSecretConfig

    schema: List[FieldSpec] = [
        FieldSpec(
            name="path",
            description="Full path from which a secret will be read.",
            required=True,
        ),
        FieldSpec(
            name="data_json",
            description="JSON-encoded secret data read from Vault.",
            computed=True,
            sensitive=True,
        ),
        FieldSpec(
            name="data",
            field_type=FieldType.MAP,
            description="Map of strings read from Vault.",
            computed=True,
            sensitive=True,
        ),
        FieldSpec(
            name="lease_id",
            description="Lease identifier assigned by vault.",
            computed=True,
        ),
        FieldSpec(
            name="lease_duration",
            field_type=FieldType.INT,
            description="Lease duration in seconds relative to the time in lease_start_time.",
            computed=True,
        ),
        FieldSpec(
            name="lease_start_time",
            description=(
                "Time at which the lease was read, using the clock of the "
                "system where the provider was running"
            ),
            computed=True,
        ),
        FieldSpec(
            name="lease_renewable",
            field_type=FieldType.BOOL,
            description="True if the duration of this lease can be extended through renewal.",
            computed=True,
        ),
    ]

    def read(self, bag: AttributeBag, session: Session) -> None:
        config: GenericSecretConfig = self.load_config(bag)

        logger.debug(f"Reading {config.path} from Vault")
        secret = session.client.read(config.path)
        if secret is None:
            raise SecretNotFoundError(f"No secret found at {config.path}")

        bag.set_id(secret.request_id)
        bag.set("data_json", canonical_json(secret.data))
        bag.set("data", flatten_secret_data(secret.data))
        bag.set("lease_id", secret.lease_id)
        bag.set("lease_duration", secret.lease_duration)
        bag.set("lease_start_time", lease_start_time())
        bag.set("lease_renewable", secret.renewable)

"""Field declarations for provider and resource attribute bags.

Each resource kind declares its attributes as a list of FieldSpec. The
orchestrator uses the declarations to validate configuration and to know
which attributes are computed; ResourceData uses them to type-check reads
and writes.

Example:
    >>> FieldSpec(
    ...     name="secret_id",
    ...     field_type=FieldType.STRING,
    ...     computed=True,
    ...     sensitive=True,
    ...     description="The AppRole Secret ID",
    ... )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class FieldType(Enum):
    """Supported attribute types."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    MAP = "map"
    LIST = "list"


_ZERO_VALUES: Dict[FieldType, Any] = {
    FieldType.STRING: "",
    FieldType.INT: 0,
    FieldType.BOOL: False,
}


@dataclass
class FieldSpec:
    """Declaration of one attribute.

    Attributes:
        name: Attribute name as seen by the orchestrator.
        field_type: Type of the attribute value.
        description: Help text shown to the end user.
        required: The caller must set this attribute.
        computed: The provider sets this attribute.
        force_new: Changing the attribute replaces the resource.
        sensitive: The value is secret material and must never be shown.
        default: Value returned when the attribute is unset.
    """

    name: str
    field_type: Union[FieldType, str] = FieldType.STRING
    description: str = ""
    required: bool = False
    computed: bool = False
    force_new: bool = False
    sensitive: bool = False
    default: Optional[Any] = None

    def __post_init__(self) -> None:
        if isinstance(self.field_type, str):
            self.field_type = FieldType(self.field_type)

    def zero_value(self) -> Any:
        """Value an unset attribute reads as."""
        if self.default is not None:
            return self.default
        if self.field_type == FieldType.MAP:
            return {}
        if self.field_type == FieldType.LIST:
            return []
        return _ZERO_VALUES[self.field_type]

    def accepts(self, value: Any) -> bool:
        """Check that value matches the declared type."""
        if value is None:
            return True
        if self.field_type == FieldType.STRING:
            return isinstance(value, str)
        if self.field_type == FieldType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.field_type == FieldType.BOOL:
            return isinstance(value, bool)
        if self.field_type == FieldType.MAP:
            return isinstance(value, dict)
        return isinstance(value, list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "name": self.name,
            "type": self.field_type.value,
            "required": self.required,
            "computed": self.computed,
            "force_new": self.force_new,
            "sensitive": self.sensitive,
        }
        if self.description:
            result["description"] = self.description
        if self.default is not None:
            result["default"] = self.default
        return result


def schema_to_dict(schema: List[FieldSpec]) -> Dict[str, Dict[str, Any]]:
    """Serialize a schema keyed by attribute name."""
    return {spec.name: spec.to_dict() for spec in schema}

"""Attribute bags exchanged with the orchestrator.

AttributeBag is the contract the lifecycle callbacks consume: typed get/set
over a fixed schema plus a single identity. ResourceData is the in-memory
implementation used by the provider's own entry points and by tests.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from vault_provider.resources.schema import FieldSpec

REDACTED = "[REDACTED]"


@runtime_checkable
class AttributeBag(Protocol):
    """What the lifecycle callbacks need from the orchestrator's state."""

    @property
    def id(self) -> str: ...

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def set_id(self, resource_id: str) -> None: ...

    def is_set(self, name: str) -> bool: ...


class ResourceData:
    """Attribute values of one resource instance, checked against its schema.

    Unset attributes read as their declared default or their type's zero
    value. Sensitive attributes are redacted from repr() so that logging a
    ResourceData never prints secret material.

    Example:
        >>> data = ResourceData(AppRoleResource.schema, {"repository": "my-repo"})
        >>> data.get("secret_id")
        ''
        >>> data.set("secret_id", "sid-1")
        >>> data
        <ResourceData id='' repository='my-repo' secret_id='[REDACTED]'>
    """

    def __init__(
        self,
        schema: List[FieldSpec],
        values: Optional[Dict[str, Any]] = None,
        resource_id: str = "",
    ) -> None:
        self._schema: Dict[str, FieldSpec] = {spec.name: spec for spec in schema}
        self._values: Dict[str, Any] = {}
        self._id = resource_id
        for name, value in (values or {}).items():
            self.set(name, value)

    def _spec(self, name: str) -> FieldSpec:
        try:
            return self._schema[name]
        except KeyError:
            raise KeyError(f"Unknown attribute '{name}'") from None

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        self._id = resource_id

    def get(self, name: str) -> Any:
        spec = self._spec(name)
        value = self._values.get(name)
        if value is None:
            return spec.zero_value()
        return value

    def set(self, name: str, value: Any) -> None:
        spec = self._spec(name)
        if not spec.accepts(value):
            raise TypeError(
                f"Attribute '{name}' expects {spec.field_type.value}, "
                f"got {type(value).__name__}"
            )
        self._values[name] = value

    def is_set(self, name: str) -> bool:
        self._spec(name)
        return self._values.get(name) is not None

    def state(self) -> Dict[str, Any]:
        """All attribute values, including unset ones at their zero value."""
        return {name: self.get(name) for name in self._schema}

    def __repr__(self) -> str:
        parts = [f"id={self._id!r}"]
        for name, value in self._values.items():
            shown = REDACTED if self._schema[name].sensitive else value
            parts.append(f"{name}={shown!r}")
        return f"<ResourceData {' '.join(parts)}>"

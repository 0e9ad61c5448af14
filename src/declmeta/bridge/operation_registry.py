from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from declmeta.utils.errors import InputValidationError, OperationNotFoundError
from declmeta.utils.kinds import MatchMode

OperationHandler = Callable[..., dict[str, Any]]


class ParamKind(str, Enum):
    """JSON shapes a bridge parameter may take."""

    STRING = "string"
    TARGET = "target"
    BOOLEAN = "boolean"
    MATCH_MODE = "match_mode"


@dataclass(frozen=True)
class ParamSpec:
    """Declared parameter of a bridge operation.

    Attributes:
        name (str): Key looked up in the request `params` object.
        kind (ParamKind): Accepted JSON shape, and the Python value it becomes.
        required (bool): Whether a missing or null value is rejected.
    """

    name: str
    kind: ParamKind = ParamKind.STRING
    required: bool = False

    def coerce(self, value: Any) -> Any:
        """Convert a raw JSON value into the handler argument.

        Args:
            value (Any): Raw value from the request, `None` when absent.

        Returns:
            Any: Converted value. Optional parameters left out stay `None`.

        Raises:
            InputValidationError: If the value has the wrong shape.
        """
        if value is None:
            if self.required:
                raise InputValidationError(f"Missing required parameter: {self.name}")
            return None
        if self.kind is ParamKind.BOOLEAN:
            if isinstance(value, bool):
                return value
            raise InputValidationError(f"`{self.name}` must be a boolean.")
        if self.kind is ParamKind.TARGET and isinstance(value, list):
            if len(value) == 2 and all(_is_text(item) for item in value):
                return (value[0].strip(), value[1].strip())
            raise InputValidationError(
                f"`{self.name}` must be a dotted name or an [owner, method] pair."
            )
        if not _is_text(value):
            raise InputValidationError(f"`{self.name}` must be a non-empty string.")
        if self.kind is ParamKind.MATCH_MODE:
            try:
                return MatchMode(value.strip())
            except ValueError as exc:
                allowed = ", ".join(mode.value for mode in MatchMode)
                raise InputValidationError(
                    f"`{self.name}` must be one of: {allowed}."
                ) from exc
        return value.strip()


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class RegisteredOperation:
    """Descriptor for one registered bridge operation.

    Attributes:
        name (str): Operation key used for dispatch.
        handler (OperationHandler): Callable receiving the coerced parameters
            as keyword arguments.
        params (tuple[ParamSpec, ...]): Accepted parameters.
        description (str): Human-readable description.
    """

    name: str
    handler: OperationHandler
    params: tuple[ParamSpec, ...] = ()
    description: str = ""

    def bind(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Validate request parameters against the declared schema.

        Args:
            params (Mapping[str, Any]): Raw request parameters.

        Returns:
            dict[str, Any]: Keyword arguments for the handler.

        Raises:
            InputValidationError: On unknown keys or badly shaped values.
        """
        declared = {spec.name for spec in self.params}
        unknown = sorted(key for key in params if key not in declared)
        if unknown:
            raise InputValidationError(
                f"Unknown parameters for {self.name}: {', '.join(unknown)}"
            )
        return {spec.name: spec.coerce(params.get(spec.name)) for spec in self.params}

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "params": [
                {"name": spec.name, "kind": spec.kind.value, "required": spec.required}
                for spec in self.params
            ],
        }


class OperationRegistry:
    """Store, validate and execute named operation handlers."""

    def __init__(self) -> None:
        self._operations: dict[str, RegisteredOperation] = {}

    def register(
        self,
        name: str,
        handler: OperationHandler,
        *,
        params: tuple[ParamSpec, ...] = (),
        description: str = "",
    ) -> None:
        """Register a new operation handler.

        Args:
            name (str): Unique operation key.
            handler (OperationHandler): Callable taking the declared
                parameters as keyword arguments.
            params (tuple[ParamSpec, ...]): Parameter schema of the operation.
            description (str): Optional operation description for catalogs.
        """
        operation = name.strip()
        if not operation:
            raise ValueError("Operation name cannot be empty.")
        if operation in self._operations:
            raise ValueError(f"Operation already registered: {operation}")
        self._operations[operation] = RegisteredOperation(
            name=operation,
            handler=handler,
            params=params,
            description=description.strip(),
        )

    def execute(self, operation: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """Validate parameters and run a registered operation.

        Args:
            operation (str): Operation identifier.
            params (Mapping[str, Any]): Parameter mapping provided by the caller.

        Returns:
            dict[str, Any]: Output payload returned by the operation handler.

        Raises:
            OperationNotFoundError: If no operation is registered under the key.
            InputValidationError: If the parameters do not fit the schema.
        """
        descriptor = self._operations.get(operation.strip())
        if descriptor is None:
            raise OperationNotFoundError(f"Unknown operation: {operation}")
        return descriptor.handler(**descriptor.bind(params))

    def catalog(self) -> list[dict[str, Any]]:
        """Describe every registered operation.

        Returns:
            list[dict[str, Any]]: Name, description and parameter schema per
            operation, sorted by name.
        """
        return [self._operations[name].describe() for name in self.names()]

    def names(self) -> list[str]:
        """Return all registered operation names.

        Returns:
            list[str]: Sorted operation keys.
        """
        return sorted(self._operations.keys())

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from declmeta.reflection import (
    class_implements,
    class_interfaces,
    class_uses_deep,
    get_attributes,
    get_decorators,
    get_decorators_deep,
)
from declmeta.reflection.loader import qualified_name
from declmeta.reflection.registry import MetadataDescriptor
from declmeta.utils.kinds import MatchMode

from .operation_registry import OperationRegistry, ParamKind, ParamSpec

_TARGET = ParamSpec("target", ParamKind.TARGET, required=True)
_CLASS_TARGET = ParamSpec("target", required=True)
_AUTOLOAD = ParamSpec("autoload", ParamKind.BOOLEAN)
_METADATA_PARAMS = (
    _TARGET,
    ParamSpec("metadata_type"),
    ParamSpec("match_mode", ParamKind.MATCH_MODE),
    _AUTOLOAD,
)


def register_operations(registry: OperationRegistry) -> None:
    """Register reflection operation handlers on a registry.

    Args:
        registry (OperationRegistry): Operation registry instance to configure.
    """
    registry.register(
        "reflection.get_attributes",
        _op_get_attributes,
        params=_METADATA_PARAMS,
        description="List metadata descriptors attached to a target.",
    )
    registry.register(
        "reflection.get_decorators",
        _op_get_decorators,
        params=_METADATA_PARAMS,
        description="Instantiate metadata attached to a target.",
    )
    registry.register(
        "reflection.get_decorators_deep",
        _op_get_decorators_deep,
        params=_METADATA_PARAMS,
        description="Instantiate metadata attached to a class and its parents.",
    )
    registry.register(
        "reflection.class_uses_deep",
        _op_class_uses_deep,
        params=(_CLASS_TARGET, _AUTOLOAD),
        description="List traits used by a class, its parents and its traits.",
    )
    registry.register(
        "reflection.class_implements",
        _op_class_implements,
        params=(_CLASS_TARGET, ParamSpec("interface", required=True), _AUTOLOAD),
        description="Check whether a class implements an interface.",
    )


def _build_registry() -> OperationRegistry:
    registry = OperationRegistry()
    register_operations(registry)
    registry.register(
        "core.catalog",
        lambda: {"operations": registry.catalog()},
        description="Describe registered bridge operations and their parameters.",
    )
    return registry


def _op_get_attributes(
    target: Any,
    metadata_type: str | None,
    match_mode: MatchMode | None,
    autoload: bool | None,
) -> dict[str, Any]:
    descriptors = get_attributes(target, metadata_type, match_mode, autoload=autoload)
    return {"attributes": [_describe(descriptor) for descriptor in descriptors]}


def _op_get_decorators(
    target: Any,
    metadata_type: str | None,
    match_mode: MatchMode | None,
    autoload: bool | None,
) -> dict[str, Any]:
    decorators = get_decorators(target, metadata_type, match_mode, autoload=autoload)
    return {"decorators": [_serialize(value) for value in decorators]}


def _op_get_decorators_deep(
    target: Any,
    metadata_type: str | None,
    match_mode: MatchMode | None,
    autoload: bool | None,
) -> dict[str, Any]:
    decorators = get_decorators_deep(
        target, metadata_type, match_mode, autoload=autoload
    )
    return {"decorators": [_serialize(value) for value in decorators]}


def _op_class_uses_deep(target: str, autoload: bool | None) -> dict[str, Any]:
    traits = class_uses_deep(target, autoload)
    return {"traits": [qualified_name(used) for used in traits]}


def _op_class_implements(
    target: str, interface: str, autoload: bool | None
) -> dict[str, Any]:
    return {
        "implements": class_implements(target, interface, autoload),
        "interfaces": class_interfaces(target, autoload),
    }


def _describe(descriptor: MetadataDescriptor) -> dict[str, Any]:
    return {
        "name": descriptor.name,
        "arguments": [_serialize(value) for value in descriptor.arguments],
        "keywords": _serialize(descriptor.keywords),
        "target_kind": descriptor.target_kind.value,
        "is_repeated": descriptor.is_repeated,
    }


def _serialize(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {
            key: _serialize(item) for key, item in dataclasses.asdict(value).items()
        }
        return {"type": qualified_name(type(value)), **fields}
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _serialize(item) for key, item in value.items()}
    return repr(value)


_REGISTRY = _build_registry()


def execute_operation(operation: str, params: Mapping[str, Any]) -> dict[str, Any]:
    """Execute one registered operation with JSON-friendly output.

    Args:
        operation (str): Operation identifier.
        params (Mapping[str, Any]): Parameter mapping provided by the caller.

    Returns:
        dict[str, Any]: Operation result payload.
    """

    return _REGISTRY.execute(operation, params)

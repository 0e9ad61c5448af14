from __future__ import annotations

import inspect
from typing import Any

from beartype import beartype

from declmeta.utils.errors import InvalidTargetError
from declmeta.utils.kinds import TargetKind

from .classify import classify_target, is_valid_class
from .handles import (
    ClassHandle,
    FunctionHandle,
    MethodHandle,
    Reflector,
    direct_traits_of,
    parent_class_of,
)
from .loader import resolve_class, resolve_path
from .registry import MetadataRegistry, default_registry


def _as_class(target: Any, autoload: bool | None) -> type | None:
    if isinstance(target, ClassHandle):
        return target.klass
    if isinstance(target, type):
        return target
    if isinstance(target, str):
        return resolve_class(target, autoload)
    if isinstance(target, Reflector) or not is_valid_class(target, autoload):
        return None
    return type(target)


def _method_handle(
    target: Any, autoload: bool | None, registry: MetadataRegistry
) -> MethodHandle:
    if inspect.ismethod(target):
        bound_to = target.__self__
        owner = bound_to if isinstance(bound_to, type) else type(bound_to)
        return MethodHandle(owner, target.__name__, registry=registry)

    owner, name = target
    owner_class = _as_class(owner, autoload)
    if owner_class is None:
        raise InvalidTargetError(f"Invalid method owner: {owner!r}")
    return MethodHandle(owner_class, name, registry=registry)


@beartype
def get_reflector(
    target: Any,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
) -> Reflector:
    """Get a reflector for the target.

    Targets are matched in a fixed order: an existing `Reflector`, a class
    (class object, instance or dotted class name), a method (bound method or
    `(owner, name)` pair) and finally a function (function object or dotted
    name of a callable).

    Args:
        target (Any): The target to get a reflector for.
        autoload (bool | None): Import modules named by dotted paths on demand.
        registry (MetadataRegistry | None): Metadata registry bound to new
            handles. Defaults to `default_registry`.

    Returns:
        Reflector: Handle for the target. A `Reflector` input is returned as is.

    Raises:
        InvalidTargetError: If the target matches none of the shapes above.
    """

    kind = classify_target(target, autoload)
    bound = registry or default_registry

    if kind is TargetKind.REFLECTOR:
        return target
    if kind is TargetKind.CLASS:
        return ClassHandle(_as_class(target, autoload), registry=bound)
    if kind is TargetKind.METHOD:
        return _method_handle(target, autoload, bound)

    function = resolve_path(target, autoload) if isinstance(target, str) else target
    return FunctionHandle(function, registry=bound)


@beartype
def get_parent_class(target: Any, autoload: bool | None = None) -> type | None:
    """Return the parent class of a class, instance, class name or class handle.

    Returns `None` when the target has no parent or does not denote a class.
    """
    cls = _as_class(target, autoload)
    if cls is None:
        return None
    return parent_class_of(cls)


@beartype
def class_uses(target: Any, autoload: bool | None = None) -> list[type]:
    """Return the traits used directly by a class, without its ancestors.

    Raises:
        InvalidTargetError: If the target does not denote a class.
    """
    cls = _as_class(target, autoload)
    if cls is None:
        raise InvalidTargetError(f"Class not found: {target!r}")
    return direct_traits_of(cls)

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from beartype import beartype

from declmeta.utils.errors import InvalidTargetError
from declmeta.utils.kinds import TargetKind

from .handles import Reflector
from .loader import MISSING, resolve_class, resolve_path

logger = logging.getLogger(__name__)

# Values that never denote an object instance: scalars, strings and the
# container shapes used for method pairs.
_NON_INSTANCE_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    tuple,
    list,
    dict,
    set,
    frozenset,
)


def _is_object_instance(target: Any) -> bool:
    return not (
        isinstance(target, _NON_INSTANCE_TYPES)
        or inspect.ismodule(target)
        or inspect.isroutine(target)
    )


@beartype
def is_valid_class(target: Any, autoload: bool | None = None) -> bool:
    """Is the target a class, an object instance or the dotted name of a class.

    Args:
        target (Any): Value to check.
        autoload (bool | None): Import the module of a dotted name if needed.
            `None` uses the configured default.

    Returns:
        bool: Whether the target denotes a class.
    """
    if isinstance(target, type):
        return True
    if isinstance(target, str):
        return resolve_class(target, autoload) is not None
    return _is_object_instance(target)


def _method_owner(owner: Any, autoload: bool | None) -> type | None:
    if isinstance(owner, str):
        return resolve_class(owner, autoload)
    if isinstance(owner, type):
        return owner
    if _is_object_instance(owner):
        return type(owner)
    return None


@beartype
def is_valid_method(target: Any, autoload: bool | None = None) -> bool:
    """Is the target a bound method or an `(owner, name)` pair naming a method.

    `owner` may be a class, an instance or a dotted class name. A bound
    method must be reachable by name on the class it is bound to.
    """
    if inspect.ismethod(target):
        bound_to = target.__self__
        owner_class = bound_to if isinstance(bound_to, type) else type(bound_to)
        return (
            inspect.getattr_static(owner_class, target.__name__, MISSING)
            is not MISSING
        )
    if not isinstance(target, (tuple, list)) or len(target) != 2:
        return False

    owner, name = target
    if not isinstance(name, str):
        return False
    owner_class = _method_owner(owner, autoload)
    if owner_class is None:
        return False
    attribute = inspect.getattr_static(owner_class, name, MISSING)
    if isinstance(attribute, (staticmethod, classmethod)):
        return True
    return attribute is not MISSING and callable(attribute)


@beartype
def is_valid_function(target: Any, autoload: bool | None = None) -> bool:
    """Is the target a function, or a dotted name resolving to a callable.

    A name resolving to a class does not count, although classes are callable.
    """
    if inspect.isfunction(target) or inspect.isbuiltin(target):
        return True
    if not isinstance(target, str):
        return False
    resolved = resolve_path(target, autoload)
    return (
        resolved is not MISSING
        and callable(resolved)
        and not isinstance(resolved, type)
    )


@beartype
def is_callable(target: Any, autoload: bool | None = None) -> bool:
    """Is the target a valid method or function.

    Classes are not considered callable here, even though calling one builds
    an instance.
    """
    return is_valid_method(target, autoload) or is_valid_function(target, autoload)


_CLASSIFIERS: tuple[tuple[TargetKind, Callable[[Any, bool | None], bool]], ...] = (
    (TargetKind.REFLECTOR, lambda target, _: isinstance(target, Reflector)),
    (TargetKind.CLASS, is_valid_class),
    (TargetKind.METHOD, is_valid_method),
    (TargetKind.FUNCTION, is_valid_function),
)


@beartype
def classify_target(target: Any, autoload: bool | None = None) -> TargetKind:
    """Return the first kind the target matches, in fixed priority order.

    Raises:
        InvalidTargetError: If the target matches no kind.
    """
    for kind, predicate in _CLASSIFIERS:
        if predicate(target, autoload):
            logger.debug("Classified %r as %s", target, kind.value)
            return kind
    raise InvalidTargetError(f"Invalid target: {target!r}")

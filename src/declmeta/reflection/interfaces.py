from __future__ import annotations

from abc import ABCMeta
from typing import Any

from beartype import beartype

from .handles import interfaces_of
from .loader import qualified_name, resolve_class


def _resolve_thing(thing: Any, autoload: bool | None) -> type | None:
    if isinstance(thing, type):
        return thing
    if isinstance(thing, str):
        return resolve_class(thing, autoload)
    return type(thing)


@beartype
def class_interfaces(thing: Any, autoload: bool | None = None) -> list[str]:
    """List the fully qualified names of the abstract base classes of a class.

    Returns an empty list when the class cannot be resolved.
    """
    cls = _resolve_thing(thing, autoload)
    if cls is None:
        return []
    return [qualified_name(base) for base in interfaces_of(cls)]


@beartype
def class_implements(
    thing: Any,
    interface_name: str,
    autoload: bool | None = None,
) -> bool:
    """Check if a class implements an interface.

    `interface_name` may be the fully qualified name or the qualname of an
    abstract base class in the MRO. A dotted name that resolves to an ABC
    also matches virtual subclasses registered with `ABC.register`.

    Args:
        thing (Any): Class, instance or dotted class name to check.
        interface_name (str): The interface to check for.
        autoload (bool | None): Import modules named by dotted paths on demand.

    Returns:
        bool: `False` when the class cannot be resolved.
    """

    cls = _resolve_thing(thing, autoload)
    if cls is None:
        return False

    for base in interfaces_of(cls):
        if interface_name in {qualified_name(base), base.__qualname__}:
            return True

    if "." not in interface_name:
        return False
    interface = resolve_class(interface_name, autoload)
    return (
        isinstance(interface, ABCMeta)
        and interface is not cls
        and issubclass(cls, interface)
    )

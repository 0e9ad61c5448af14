from __future__ import annotations

import logging
from typing import Any

from beartype import beartype

from declmeta.utils.config import ReflectionSettings, load_settings
from declmeta.utils.errors import AncestorDepthError
from declmeta.utils.kinds import MatchMode

from .attributes import MetadataType, get_decorators
from .handles import ClassHandle
from .registry import MetadataRegistry
from .resolver import class_uses, get_parent_class

logger = logging.getLogger(__name__)


def _check_depth(depth: int, limit: int | None, target: Any) -> None:
    if limit is not None and depth > limit:
        raise AncestorDepthError(
            f"Ancestor walk from {target!r} exceeded {limit} levels."
        )


@beartype
def get_decorators_deep(
    target: Any,
    metadata_type: MetadataType = None,
    match_mode: MatchMode | None = None,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
    settings: ReflectionSettings | None = None,
) -> list[Any]:
    """Get decorators for a target class and all of its parent classes.

    Levels are collected leaf first: the target's own decorators, then its
    parent's, and so on up to the root. Nothing is deduplicated, so a
    metadata type attached at two levels yields two values. Method and
    function targets have no parent and only contribute their own level.

    Args:
        target (Any): Class, instance, class name or reflector to start from.
        metadata_type (type | str | None): Metadata class, or dotted name,
            to filter on.
        match_mode (MatchMode | None): Type matching mode. `None` uses the
            configured default.
        autoload (bool | None): Import modules named by dotted paths on demand.
        registry (MetadataRegistry | None): Registry to read from.
        settings (ReflectionSettings | None): Settings providing
            `max_ancestor_depth`. Defaults to `load_settings()`.

    Returns:
        list[Any]: Instantiated metadata, leaf level first.

    Raises:
        InstantiationError: If any metadata constructor raises.
        AncestorDepthError: If the walk exceeds `max_ancestor_depth`.
    """

    limit = (settings or load_settings()).max_ancestor_depth
    decorators: list[Any] = []
    origin = target
    depth = 0

    while target is not None:
        _check_depth(depth, limit, origin)
        decorators.extend(
            get_decorators(
                target,
                metadata_type,
                match_mode,
                autoload=autoload,
                registry=registry,
            )
        )
        target = (
            target.get_parent_class()
            if isinstance(target, ClassHandle)
            else get_parent_class(target, autoload)
        )
        depth += 1

    logger.debug(
        "Collected %d decorators across %d levels from %r",
        len(decorators),
        depth,
        origin,
    )
    return decorators


@beartype
def class_uses_deep(
    target: Any,
    autoload: bool | None = None,
    *,
    settings: ReflectionSettings | None = None,
) -> list[type]:
    """Get all the traits used by a class, its parent classes and its traits.

    Traits used by the traits found on the class chain are included too, one
    level deep. The result holds each trait once, in first-seen order.

    Args:
        target (Any): Class, instance, class name or class handle.
        autoload (bool | None): Import modules named by dotted paths on demand.
        settings (ReflectionSettings | None): Settings providing
            `max_ancestor_depth`. Defaults to `load_settings()`.

    Returns:
        list[type]: Unique traits.

    Raises:
        InvalidTargetError: If the target does not denote a class.
        AncestorDepthError: If the walk exceeds `max_ancestor_depth`.
    """

    limit = (settings or load_settings()).max_ancestor_depth
    traits: list[type] = []
    current = target
    depth = 0

    while True:
        _check_depth(depth, limit, target)
        traits = class_uses(current, autoload) + traits
        current = get_parent_class(current, autoload)
        depth += 1
        if current is None:
            break

    for used in list(traits):
        traits = class_uses(used, autoload) + traits

    return list(dict.fromkeys(traits))

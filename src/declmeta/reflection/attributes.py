from __future__ import annotations

from typing import Any

from beartype import beartype

from declmeta.utils.config import load_settings
from declmeta.utils.errors import InputValidationError
from declmeta.utils.kinds import MatchMode

from .loader import resolve_class
from .registry import MetadataDescriptor, MetadataRegistry
from .resolver import get_reflector

MetadataType = type | str | None


def resolve_match_mode(match_mode: MatchMode | None) -> MatchMode:
    if match_mode is None:
        return load_settings().match_mode
    return match_mode


def resolve_metadata_type(
    metadata_type: MetadataType, autoload: bool | None = None
) -> type | None:
    if not isinstance(metadata_type, str):
        return metadata_type
    resolved = resolve_class(metadata_type, autoload)
    if resolved is None:
        raise InputValidationError(f"Unknown metadata type: {metadata_type}")
    return resolved


@beartype
def get_attributes(
    target: Any,
    metadata_type: MetadataType = None,
    match_mode: MatchMode | None = None,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
) -> list[MetadataDescriptor]:
    """Get metadata descriptors attached to a target.

    Args:
        target (Any): Class, instance, method, function or reflector.
        metadata_type (type | str | None): Metadata class, or its dotted name,
            to filter on. `None` returns every descriptor.
        match_mode (MatchMode | None): `INSTANCE_OF` also accepts subclasses
            of `metadata_type`; `EXACT` does not. `None` uses the configured
            default.
        autoload (bool | None): Import modules named by dotted paths on demand.
        registry (MetadataRegistry | None): Registry to read from.

    Returns:
        list[MetadataDescriptor]: Descriptors in declaration order.
    """

    reflector = get_reflector(target, autoload=autoload, registry=registry)
    return reflector.get_attributes(
        resolve_metadata_type(metadata_type, autoload),
        resolve_match_mode(match_mode),
    )


@beartype
def get_decorators(
    target: Any,
    metadata_type: MetadataType = None,
    match_mode: MatchMode | None = None,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
) -> list[Any]:
    """Get instantiated metadata for a target.

    Every descriptor is instantiated before returning, so one failing
    constructor fails the whole call.

    Raises:
        InstantiationError: If a metadata constructor raises.
    """

    return [
        descriptor.new_instance()
        for descriptor in get_attributes(
            target,
            metadata_type,
            match_mode,
            autoload=autoload,
            registry=registry,
        )
    ]


@beartype
def get_attribute(
    target: Any,
    metadata_type: MetadataType = None,
    match_mode: MatchMode | None = None,
    index: int = 0,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
) -> MetadataDescriptor | None:
    """Get a **single** descriptor for a target, or `None` if `index` is out of range."""

    descriptors = get_attributes(
        target, metadata_type, match_mode, autoload=autoload, registry=registry
    )
    if 0 <= index < len(descriptors):
        return descriptors[index]
    return None


@beartype
def get_decorator(
    target: Any,
    metadata_type: MetadataType = None,
    match_mode: MatchMode | None = None,
    index: int = 0,
    *,
    autoload: bool | None = None,
    registry: MetadataRegistry | None = None,
) -> Any | None:
    """Get a **single** instantiated metadata value, or `None` if `index` is out of range."""

    descriptor = get_attribute(
        target,
        metadata_type,
        match_mode,
        index,
        autoload=autoload,
        registry=registry,
    )
    if descriptor is None:
        return None
    return descriptor.new_instance()

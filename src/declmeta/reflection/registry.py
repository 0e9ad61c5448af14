from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from beartype import beartype

from declmeta.utils.errors import InstantiationError
from declmeta.utils.kinds import MatchMode, TargetKind

logger = logging.getLogger(__name__)

_TRAIT_MARK = "__declmeta_trait__"

D = TypeVar("D")


@beartype
@dataclass(frozen=True)
class MetadataDescriptor:
    """Uninstantiated metadata record attached to one declaration.

    Attributes:
        metadata_type (type): Class invoked by `new_instance()`.
        arguments (tuple[Any, ...]): Positional constructor arguments.
        keywords (Mapping[str, Any]): Keyword constructor arguments.
        target_kind (TargetKind): Kind of declaration the record is attached to.
        is_repeated (bool): Whether the same metadata type is attached more
            than once to the declaration.
    """

    metadata_type: type
    arguments: tuple[Any, ...] = ()
    keywords: Mapping[str, Any] = field(default_factory=dict)
    target_kind: TargetKind = TargetKind.CLASS
    is_repeated: bool = False

    @property
    def name(self) -> str:
        """Fully qualified name of the metadata type."""
        return f"{self.metadata_type.__module__}.{self.metadata_type.__qualname__}"

    def matches(self, metadata_type: type | None, match_mode: MatchMode) -> bool:
        if metadata_type is None:
            return True
        if match_mode is MatchMode.EXACT:
            return self.metadata_type is metadata_type
        return issubclass(self.metadata_type, metadata_type)

    def new_instance(self) -> Any:
        """Build a fresh metadata value from the recorded arguments.

        Raises:
            InstantiationError: If the metadata constructor raises.
        """
        try:
            return self.metadata_type(*self.arguments, **self.keywords)
        except Exception as exc:
            raise InstantiationError(
                f"Failed to instantiate metadata `{self.name}`: {exc}"
            ) from exc


@dataclass(frozen=True)
class _Record:
    metadata_type: type
    arguments: tuple[Any, ...]
    keywords: Mapping[str, Any]


def declaration_key(declaration: Any) -> Any:
    """Return the identity under which metadata for `declaration` is stored.

    Static methods, class methods and bound methods share the key of the
    function they wrap.
    """
    if isinstance(declaration, (staticmethod, classmethod)):
        return declaration.__func__
    return getattr(declaration, "__func__", declaration)


class MetadataRegistry:
    """Store metadata records keyed by declaration identity.

    Records are kept in declaration order: for stacked decorators the
    top-most one comes first, matching the order they are written in.
    """

    def __init__(self) -> None:
        self._records: dict[Any, list[_Record]] = {}

    def attach(
        self,
        declaration: Any,
        metadata_type: type,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Attach one metadata record to a declaration.

        Python applies stacked decorators bottom-up, so each new record is
        inserted ahead of the records already attached.
        """
        if not isinstance(metadata_type, type):
            raise TypeError(
                f"Metadata type must be a class, got {type(metadata_type).__name__}."
            )
        key = declaration_key(declaration)
        records = self._records.setdefault(key, [])
        records.insert(
            0,
            _Record(
                metadata_type=metadata_type,
                arguments=tuple(args),
                keywords=MappingProxyType(dict(kwargs)),
            ),
        )
        logger.debug(
            "Attached %s to %r", metadata_type.__qualname__, key
        )

    def descriptors(
        self,
        declaration: Any,
        target_kind: TargetKind,
        metadata_type: type | None = None,
        match_mode: MatchMode = MatchMode.INSTANCE_OF,
    ) -> list[MetadataDescriptor]:
        """Return matching descriptors attached to `declaration` itself.

        Inherited declarations are not consulted; walking ancestors is the
        caller's job.
        """
        records = self._records.get(declaration_key(declaration), [])
        counts: dict[type, int] = {}
        for record in records:
            counts[record.metadata_type] = counts.get(record.metadata_type, 0) + 1

        found = []
        for record in records:
            descriptor = MetadataDescriptor(
                metadata_type=record.metadata_type,
                arguments=record.arguments,
                keywords=record.keywords,
                target_kind=target_kind,
                is_repeated=counts[record.metadata_type] > 1,
            )
            if descriptor.matches(metadata_type, match_mode):
                found.append(descriptor)
        return found

    def clear(self, declaration: Any | None = None) -> None:
        """Forget the records of one declaration, or of every declaration."""
        if declaration is None:
            self._records.clear()
        else:
            self._records.pop(declaration_key(declaration), None)


default_registry = MetadataRegistry()


@beartype
def annotate(
    metadata_type: type,
    *args: Any,
    registry: MetadataRegistry | None = None,
    **kwargs: Any,
) -> Callable[[D], D]:
    """Attach `metadata_type(*args, **kwargs)` metadata to a declaration.

    The decorator records the constructor arguments only; the metadata value
    is built each time it is requested.

    Example:
        ```python
        @annotate(Route, "/users", methods=("GET",))
        class UserView: ...
        ```
    """

    target_registry = registry or default_registry

    def decorator(declaration: D) -> D:
        target_registry.attach(declaration, metadata_type, *args, **kwargs)
        return declaration

    return decorator


@beartype
def trait(cls: type) -> type:
    """Mark a class as a trait: a mixin composed into classes through bases."""
    setattr(cls, _TRAIT_MARK, True)
    return cls


@beartype
def is_trait(cls: type) -> bool:
    """Return whether `cls` itself, not one of its bases, is marked as a trait."""
    return bool(vars(cls).get(_TRAIT_MARK, False))

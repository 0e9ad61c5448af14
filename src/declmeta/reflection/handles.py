from __future__ import annotations

import inspect
from abc import ABC, ABCMeta, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from beartype import beartype

from declmeta.utils.errors import InvalidTargetError
from declmeta.utils.kinds import MatchMode, TargetKind

from .loader import MISSING, qualified_name
from .registry import (
    MetadataDescriptor,
    MetadataRegistry,
    declaration_key,
    default_registry,
    is_trait,
)


@beartype
def parent_class_of(cls: type) -> type | None:
    """Return the parent class of `cls`: its first base that is not a trait.

    `object` is never reported as a parent.
    """
    for base in cls.__bases__:
        if base is not object and not is_trait(base):
            return base
    return None


@beartype
def direct_traits_of(cls: type) -> list[type]:
    """Return the traits listed directly among the bases of `cls`."""
    return [base for base in cls.__bases__ if is_trait(base)]


@beartype
def interfaces_of(cls: type) -> list[type]:
    """Return every abstract base class in the MRO of `cls`, except `cls`."""
    return [base for base in cls.__mro__[1:] if isinstance(base, ABCMeta)]


class Reflector(ABC):
    """Introspection handle bound to one class, method or function."""

    registry: MetadataRegistry

    @property
    @abstractmethod
    def kind(self) -> TargetKind:
        """Kind of declaration this handle reflects."""

    @property
    @abstractmethod
    def declaration(self) -> Any:
        """Object metadata is attached to."""

    @property
    def name(self) -> str:
        return qualified_name(self.declaration)

    def get_attributes(
        self,
        metadata_type: type | None = None,
        match_mode: MatchMode = MatchMode.INSTANCE_OF,
    ) -> list[MetadataDescriptor]:
        """Return descriptors attached to this declaration, in declaration order.

        Args:
            metadata_type (type | None): Filter on the metadata type. `None`
                returns every descriptor.
            match_mode (MatchMode): Subtype or exact type matching.

        Returns:
            list[MetadataDescriptor]: Matching descriptors.
        """
        return self.registry.descriptors(
            self.declaration, self.kind, metadata_type, match_mode
        )


@beartype
@dataclass(frozen=True)
class ClassHandle(Reflector):
    """Handle bound to a class."""

    klass: type
    registry: MetadataRegistry = field(
        default=default_registry, repr=False, compare=False
    )

    @property
    def kind(self) -> TargetKind:
        return TargetKind.CLASS

    @property
    def declaration(self) -> type:
        return self.klass

    def get_parent_class(self) -> ClassHandle | None:
        parent = parent_class_of(self.klass)
        if parent is None:
            return None
        return ClassHandle(parent, registry=self.registry)

    def get_traits(self) -> list[type]:
        return direct_traits_of(self.klass)

    def get_interface_names(self) -> list[str]:
        return [qualified_name(base) for base in interfaces_of(self.klass)]


@beartype
@dataclass(frozen=True)
class MethodHandle(Reflector):
    """Handle bound to a method looked up on `owner`, inherited ones included."""

    owner: type
    method_name: str
    registry: MetadataRegistry = field(
        default=default_registry, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if inspect.getattr_static(self.owner, self.method_name, MISSING) is MISSING:
            raise InvalidTargetError(
                f"{self.owner.__qualname__} has no method `{self.method_name}`."
            )

    @property
    def kind(self) -> TargetKind:
        return TargetKind.METHOD

    @property
    def declaration(self) -> Any:
        return declaration_key(inspect.getattr_static(self.owner, self.method_name))

    @property
    def declaring_class(self) -> type:
        """Class in the MRO of `owner` that defines the method."""
        for cls in self.owner.__mro__:
            if self.method_name in vars(cls):
                return cls
        return self.owner


@beartype
@dataclass(frozen=True)
class FunctionHandle(Reflector):
    """Handle bound to a free function or any other callable."""

    function: Callable[..., Any]
    registry: MetadataRegistry = field(
        default=default_registry, repr=False, compare=False
    )

    @property
    def kind(self) -> TargetKind:
        return TargetKind.FUNCTION

    @property
    def declaration(self) -> Any:
        return declaration_key(self.function)

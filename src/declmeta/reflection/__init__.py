from .attributes import get_attribute, get_attributes, get_decorator, get_decorators
from .classify import (
    classify_target,
    is_callable,
    is_valid_class,
    is_valid_function,
    is_valid_method,
)
from .handles import ClassHandle, FunctionHandle, MethodHandle, Reflector
from .hierarchy import class_uses_deep, get_decorators_deep
from .interfaces import class_implements, class_interfaces
from .registry import (
    MetadataDescriptor,
    MetadataRegistry,
    annotate,
    default_registry,
    is_trait,
    trait,
)
from .resolver import class_uses, get_parent_class, get_reflector

__all__ = [
    "ClassHandle",
    "FunctionHandle",
    "MetadataDescriptor",
    "MetadataRegistry",
    "MethodHandle",
    "Reflector",
    "annotate",
    "class_implements",
    "class_interfaces",
    "class_uses",
    "class_uses_deep",
    "classify_target",
    "default_registry",
    "get_attribute",
    "get_attributes",
    "get_decorator",
    "get_decorators",
    "get_decorators_deep",
    "get_parent_class",
    "get_reflector",
    "is_callable",
    "is_trait",
    "is_valid_class",
    "is_valid_function",
    "is_valid_method",
    "trait",
]

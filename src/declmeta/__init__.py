from declmeta.reflection import (
    ClassHandle,
    FunctionHandle,
    MetadataDescriptor,
    MetadataRegistry,
    MethodHandle,
    Reflector,
    annotate,
    class_implements,
    class_interfaces,
    class_uses,
    class_uses_deep,
    classify_target,
    default_registry,
    get_attribute,
    get_attributes,
    get_decorator,
    get_decorators,
    get_decorators_deep,
    get_parent_class,
    get_reflector,
    is_callable,
    is_trait,
    is_valid_class,
    is_valid_function,
    is_valid_method,
    trait,
)
from declmeta.utils.config import ReflectionSettings, load_settings
from declmeta.utils.errors import (
    AncestorDepthError,
    InputValidationError,
    InstantiationError,
    InvalidTargetError,
    ReflectionError,
)
from declmeta.utils.kinds import MatchMode, TargetKind

__all__ = [
    "AncestorDepthError",
    "ClassHandle",
    "FunctionHandle",
    "InputValidationError",
    "InstantiationError",
    "InvalidTargetError",
    "MatchMode",
    "MetadataDescriptor",
    "MetadataRegistry",
    "MethodHandle",
    "ReflectionError",
    "ReflectionSettings",
    "Reflector",
    "TargetKind",
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
    "load_settings",
    "trait",
]

from __future__ import annotations


class ReflectionError(Exception):
    """Base error for metadata resolution failures."""


class InvalidTargetError(ReflectionError):
    """Raised when a value cannot be resolved to a class, method or function."""


class InstantiationError(ReflectionError):
    """Raised when a metadata constructor fails while materializing a descriptor."""


class AncestorDepthError(ReflectionError):
    """Raised when an ancestor walk exceeds the configured depth limit."""


class InputValidationError(ReflectionError):
    """Raised when configuration or operation parameters fail validation."""


class OperationNotFoundError(ReflectionError):
    """Raised when a bridge operation key is not registered."""

from __future__ import annotations

from enum import Enum


class MatchMode(str, Enum):
    """How a metadata type filter is compared with attached metadata.

    Attributes:
        INSTANCE_OF: Accept the requested type and any subclass of it.
        EXACT: Accept the requested type only.
    """

    INSTANCE_OF = "instance_of"
    EXACT = "exact"


class TargetKind(str, Enum):
    """Closed set of shapes a reflection target can take, in match priority."""

    REFLECTOR = "reflector"
    CLASS = "class"
    METHOD = "method"
    FUNCTION = "function"

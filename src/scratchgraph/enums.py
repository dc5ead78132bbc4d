"""Enumerations for scratchgraph type-safe constants.

Wire codes used by the Scratch 3 project format. IntEnum members compare
equal to the raw integers found in project.json.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class InputShadow(IntEnum):
    """First element of a serialized block input.

    IntEnum allows direct comparison with the decoded JSON value:
    InputShadow.SAME_BLOCK_SHADOW == 1
    """

    SAME_BLOCK_SHADOW = 1
    """Input holds only its shadow (the typed default value)."""

    NO_SHADOW = 2
    """Input holds an expression and no shadow (boolean slots, substacks)."""

    DIFF_BLOCK_SHADOW = 3
    """Input holds an expression obscuring a shadow."""


class PrimitiveKind(IntEnum):
    """Compressed primitive codes inside block inputs."""

    MATH_NUM = 4
    POSITIVE_NUM = 5
    WHOLE_NUM = 6
    INTEGER_NUM = 7
    ANGLE_NUM = 8
    COLOR_PICKER = 9
    TEXT = 10
    BROADCAST = 11
    VARIABLE = 12
    LIST = 13


class EdgeRelation(StrEnum):
    """Name of a block graph relation.

    StrEnum provides automatic string conversion: str(EdgeRelation.NEXT) == "next"
    """

    PARAMETER = "parameter"
    """Block -> blocks it references as inputs or nested expressions."""

    READ_LIST = "read_list"
    """Block -> lists it reads as a concatenated string."""

    NEXT = "next"
    """Block -> sequential successor."""

    PARENT = "parent"
    """Block -> enclosing container."""


__all__ = [
    "EdgeRelation",
    "InputShadow",
    "PrimitiveKind",
]

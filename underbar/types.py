"""
underbar.types - Core type definitions for underbar

This module contains the small building blocks shared by the collection
operations and the decorators:
- _MISSING: Sentinel used to tell an omitted argument from an explicit None
- Predicates: is_string, is_function, is_boolean, is_number, is_undefined,
  is_defined, is_array, is_mapping
- identity: Returns its argument unchanged
- strict_equals: Equality that distinguishes types and compares objects by identity
- Shape / shape_of: Tags a value as an ordered sequence, a mapping or neither
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

# Sentinel for missing values
_MISSING = object()

PRIMITIVE_TYPES = (str, int, float, bool, bytes, complex, type(None))


class Shape(Enum):
    """The collection shapes understood by the iteration core."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


def shape_of(value: Any) -> Shape:
    """Classify a value as an ordered sequence, a mapping, or something else."""
    if isinstance(value, (list, tuple)):
        return Shape.SEQUENCE
    if isinstance(value, Mapping):
        return Shape.MAPPING
    return Shape.OTHER


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_function(value: Any) -> bool:
    return callable(value)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_undefined(value: Any) -> bool:
    return value is None or value is _MISSING


def is_defined(value: Any) -> bool:
    return not is_undefined(value)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def identity(value):
    """Return whatever value is passed in."""
    return value


def strict_equals(a: Any, b: Any) -> bool:
    """
    Compare two values without type coercion.

    Primitives are equal only when they share the exact same type and
    compare equal, so 1, 1.0 and True are all distinct and NaN is never
    equal to itself. Any other object is only equal to itself.
    """
    if isinstance(a, PRIMITIVE_TYPES) or isinstance(b, PRIMITIVE_TYPES):
        return type(a) is type(b) and a == b
    return a is b


__all__ = [
    "_MISSING",
    "PRIMITIVE_TYPES",
    "Shape",
    "shape_of",
    "is_string",
    "is_function",
    "is_boolean",
    "is_number",
    "is_undefined",
    "is_defined",
    "is_array",
    "is_mapping",
    "identity",
    "strict_equals",
]

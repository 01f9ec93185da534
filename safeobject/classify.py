"""
Value classification for the hoisting engine.

Every visited value is classified exactly once into a closed set of kinds. The checks are
ordered by priority and that order is part of the output contract:

    1. TOO_DEEP   depth exceeds the configured limit, value is not inspected
    2. ERROR      exception instances, at any depth
    3. ROOT_WRAP  non-enumerable values at the root (primitives, binary, arrays, dates, callables)
    4. DATE       date, datetime and time instances
    5. COMPLEX    non-plain objects below the root
    6. ARRAY      sequences and sets that are not text or binary
    7. MAPPING    everything else, enumerated key by key

Primitives and callables found below the root are classified too, so the engine can be
handed any value at any depth.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime as dt

from enum import Enum, unique
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueKind(str, Enum):
    """Closed set of value kinds, each served by one handler of the engine."""
    TOO_DEEP = "too_deep"
    ERROR = "error"
    ROOT_WRAP = "root_wrap"
    DATE = "date"
    COMPLEX = "complex"
    ARRAY = "array"
    MAPPING = "mapping"
    PRIMITIVE = "primitive"
    CALLABLE = "callable"


_PRIMITIVE_TYPES = (str, int, float, bool, type(None))
_BINARY_TYPES = (bytes, bytearray, memoryview)
_DATE_TYPES = (dt.date, dt.time)


# Methods --------------------------------------------------------------------------------------------------------------

def is_primitive(obj: Any) -> bool:
    """Return True for None, bool, int, float and str, subclasses included."""
    return issubclass(type(obj), _PRIMITIVE_TYPES)


def is_binary(obj: Any) -> bool:
    """Return True for bytes, bytearray and memoryview."""
    return issubclass(type(obj), _BINARY_TYPES)


def is_error(obj: Any) -> bool:
    """Return True if obj is an exception instance."""
    return issubclass(type(obj), BaseException)


def is_date(obj: Any) -> bool:
    """Return True for date, datetime and time instances."""
    return issubclass(type(obj), _DATE_TYPES)


def is_array(obj: Any) -> bool:
    """
    Return True for ordered sequences and sets that are not text or binary.

    Examples:
        >>> is_array([1, 2]), is_array(range(3)), is_array({1, 2})
        (True, True, True)
        >>> is_array("abc"), is_array(b"abc"), is_array({"a": 1})
        (False, False, False)
    """
    obj_type = type(obj)
    if issubclass(obj_type, _PRIMITIVE_TYPES + _BINARY_TYPES):
        return False
    return issubclass(obj_type, (abc.Sequence, abc.Set))


def is_mapping(obj: Any) -> bool:
    """Return True for plain data containers (dict and other Mapping implementations)."""
    return issubclass(type(obj), abc.Mapping)


def is_callable(obj: Any) -> bool:
    """Return True for functions, methods, classes and other callables."""
    return callable(obj)


def is_complex_object(obj: Any) -> bool:
    """
    Return True if obj is an object the engine does not descend into below the root.

    Plain mappings, arrays, primitives and callables are not complex; class instances, modules,
    binary blobs and numeric types such as Decimal are.
    """
    if is_primitive(obj) or is_callable(obj):
        return False
    return not (is_mapping(obj) or is_array(obj))


def is_root_wrapped(obj: Any) -> bool:
    """Return True if obj cannot be enumerated as the root container and must be wrapped."""
    return (is_primitive(obj) or
            is_binary(obj) or
            is_array(obj) or
            is_date(obj) or
            is_callable(obj))


def classify(obj: Any, depth: int, max_depth: int) -> ValueKind:
    """
    Classify obj visited at the given depth.

    Does not guard against exceptions raised by hostile metaclasses or ABC registries;
    the engine converts such failures into error records.

    Examples:
        >>> classify({"a": 1}, depth=0, max_depth=5)
        <ValueKind.MAPPING: 'mapping'>
        >>> classify([1, 2], depth=0, max_depth=5)
        <ValueKind.ROOT_WRAP: 'root_wrap'>
        >>> classify(object(), depth=1, max_depth=5)
        <ValueKind.COMPLEX: 'complex'>
        >>> classify({}, depth=6, max_depth=5)
        <ValueKind.TOO_DEEP: 'too_deep'>
    """
    if depth > max_depth:
        return ValueKind.TOO_DEEP
    if is_error(obj):
        return ValueKind.ERROR
    if depth == 0 and is_root_wrapped(obj):
        return ValueKind.ROOT_WRAP
    if is_date(obj):
        return ValueKind.DATE
    if is_primitive(obj):
        return ValueKind.PRIMITIVE
    if is_callable(obj):
        return ValueKind.CALLABLE
    if depth and is_complex_object(obj):
        return ValueKind.COMPLEX
    if is_array(obj):
        return ValueKind.ARRAY
    return ValueKind.MAPPING

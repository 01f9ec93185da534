"""
Guarded property access and error records.

A property source wraps one container and provides ordered key enumeration plus a guarded
get-by-key. Reading a key never raises: any exception thrown by a property, descriptor or
``__getitem__`` is converted into an error record at the point of access.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import itertools
import logging
import traceback
import types

from typing import Any, Callable, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, fmt_value

logger = logging.getLogger(__name__)

# Nested error records produced while reading the attributes of an error record.
# Deeper failures yield records without attributes, so self-raising properties terminate.
MAX_ERROR_NESTING = 2

# Class attributes never enumerated on objects
_HIDDEN_CLASS_ATTRS = frozenset({"_abc_impl"})


# Error Records --------------------------------------------------------------------------------------------------------

def error_record(err: BaseException, *, _nested: int = 0) -> dict[str, Any]:
    """
    Capture an exception as a plain mapping.

    The record holds `name`, `stack` and `message`, followed by every enumerable attribute
    of the exception read through guarded access. An attribute which raises yields a nested
    error record in its place.

    Args:
        err: The exception instance.

    Returns:
        dict with keys `name`, `stack`, `message` and the attribute names of err.

    Examples:
        >>> err = ValueError("Boom!")
        >>> err.foo = "bar"
        >>> record = error_record(err)
        >>> record["name"], record["message"], record["foo"]
        ('ValueError', 'Boom!', 'bar')
    """
    record = error_head(err)
    if _nested >= MAX_ERROR_NESTING:
        return record

    source = AttributeSource(err)
    try:
        keys = source.keys()
    except Exception as e:
        logger.debug("Cannot enumerate attributes of %s: %s", class_name(err), class_name(e))
        return record

    for key in keys:
        value = source.get(key, on_error=lambda e: error_record(e, _nested=_nested + 1))
        if callable(value):
            continue  # Methods of exception classes
        record[key] = value
    return record


def error_head(err: BaseException) -> dict[str, str]:
    """Return the `name`, `stack` and `message` of an exception, never raising."""
    return {
        "name": class_name(err),
        "stack": _format_stack(err),
        "message": _format_message(err),
    }


def _format_message(err: BaseException) -> str:
    try:
        return str(err)
    except Exception:
        return f"<unprintable {class_name(err)} object>"


def _format_stack(err: BaseException) -> str:
    try:
        return "".join(traceback.format_exception(type(err), err, err.__traceback__))
    except Exception:
        return f"{class_name(err)}: {_format_message(err)}\n"


# Guarded Access -------------------------------------------------------------------------------------------------------

def guarded_get(read: Callable[[Any], Any],
                key: Any,
                on_error: Callable[[Exception], Any] | None = None) -> Any:
    """
    Return read(key), converting any exception into an error record.

    Args:
        read: Accessor such as `obj.__getitem__` or a getattr closure.
        key: The key, index or attribute name.
        on_error: Converter for the caught exception, error_record() by default.

    Returns:
        The value read, or the converted exception.
    """
    try:
        return read(key)
    except Exception as err:
        logger.debug("Guarded read of %s failed: %s", fmt_value(key, max_repr=60), class_name(err))
        return (on_error or error_record)(err)


# Property Sources -----------------------------------------------------------------------------------------------------

class PropertySource:
    """
    Ordered key enumeration plus guarded get-by-key over a single container.

    Subclasses implement keys() and _read(); keys() may raise, get() never does.
    """

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def keys(self) -> Iterable[Any]:
        raise NotImplementedError

    def name(self, key: Any) -> Any:
        """Return the output key for key."""
        return key

    def get(self, key: Any, on_error: Callable[[Exception], Any] | None = None) -> Any:
        return guarded_get(self._read, key, on_error=on_error)

    def _read(self, key: Any) -> Any:
        raise NotImplementedError


class MappingSource(PropertySource):
    """Keys of a Mapping in iteration order, read with `obj[key]`."""

    def keys(self) -> list[Any]:
        return list(self.obj)

    def name(self, key: Any) -> str:
        """Return key as str, converting other key types with str()."""
        if issubclass(type(key), str):
            return key
        try:
            return str(key)
        except Exception:
            return f"<{class_name(key)} key at 0x{id(key):x}>"

    def _read(self, key: Any) -> Any:
        return self.obj[key]


class SequenceSource(PropertySource):
    """Indices of a Sequence up to the width limit, read with `obj[index]`."""

    def __init__(self, obj: abc.Sequence, limit: int | None = None) -> None:
        super().__init__(obj)
        self.limit = limit

    def keys(self) -> range:
        size = len(self.obj)
        if self.limit is not None:
            size = min(size, self.limit)
        return range(size)

    def _read(self, key: int) -> Any:
        return self.obj[key]


class SetSource(PropertySource):
    """Members of a Set in iteration order up to the width limit, indexed by position."""

    def __init__(self, obj: abc.Set, limit: int | None = None) -> None:
        super().__init__(obj)
        self.limit = limit
        self._members: list[Any] = []

    def keys(self) -> range:
        self._members = list(itertools.islice(self.obj, self.limit))
        return range(len(self._members))

    def _read(self, key: int) -> Any:
        return self._members[key]


class AttributeSource(PropertySource):
    """
    Attribute names of an arbitrary object, read with getattr().

    Enumerates instance attributes first, then the names defined in each non-builtin class of
    the MRO (class variables, properties, slots and methods). Dunder names are never listed,
    unset slots are skipped.
    """

    def keys(self) -> list[str]:
        names: list[str] = []
        seen: set[str] = set()

        def add(name: Any) -> None:
            if not issubclass(type(name), str) or name in seen:
                return
            if name.startswith("__") and name.endswith("__"):
                return
            seen.add(name)
            names.append(name)

        obj_type = type(self.obj)
        instance_dict = getattr(self.obj, "__dict__", None) if _has_instance_dict(obj_type) else None
        if issubclass(type(instance_dict), abc.Mapping):
            for name in list(instance_dict):
                add(name)

        for cls in obj_type.__mro__:
            if cls.__module__ == "builtins":
                continue
            for name, attr in list(vars(cls).items()):
                if name in _HIDDEN_CLASS_ATTRS:
                    continue
                if type(attr) is types.MemberDescriptorType and not _slot_is_set(attr, self.obj):
                    continue
                add(name)

        return names

    def _read(self, key: str) -> Any:
        return getattr(self.obj, key)


def _has_instance_dict(obj_type: type) -> bool:
    return any("__dict__" in vars(cls) for cls in obj_type.__mro__)


def _slot_is_set(descriptor: types.MemberDescriptorType, obj: Any) -> bool:
    try:
        descriptor.__get__(obj, type(obj))
    except AttributeError:
        return False
    return True


def source_for(obj: Any, limit: int | None = None) -> PropertySource:
    """
    Return the property source matching obj.

    Args:
        obj: Container to enumerate.
        limit: Width limit for sequences and sets, applied before any element is read.
    """
    obj_type = type(obj)
    if issubclass(obj_type, abc.Mapping):
        return MappingSource(obj)
    if issubclass(obj_type, abc.Sequence):
        return SequenceSource(obj, limit=limit)
    if issubclass(obj_type, abc.Set):
        return SetSource(obj, limit=limit)
    return AttributeSource(obj)

"""
SafeObject Hoisting Engine
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging

from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .access import AttributeSource, PropertySource, error_head, error_record, source_for
from .classify import ValueKind, classify, is_callable, is_primitive
from .options import HoistOptions
from .sentinels import COMPLEX_OBJECT, INVALID_DATE, JSON_OUTPUT_KEY, PREFIX, ROOT_KEY, TOO_DEEP
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class SafeObject:
    """
    Depth-bounded, never-raising converter of arbitrary objects into plain data.

    Produces a structural copy made of dicts, lists, strings, numbers, booleans and None,
    suitable for log records and JSON encoding. Every property read is guarded, so objects
    with throwing properties, hostile ``__getitem__`` or cyclic references are converted
    without ever raising to the caller.

    Processing Order (per visited value):
        1. Depth guard: depth > max_nesting_depth → "[too deeply nested]"
        2. Exceptions → error record (`name`, `stack`, `message` + attributes), at any depth
        3. Root values that are not enumerable (primitives, arrays, dates, binary) → {"data": value}
        4. Dates → ISO text, "Invalid Date" for NaT-style values
        5. Non-plain objects below the root → "[COMPLEX Object]"
        6. Sequences and sets → list of at most max_width elements
        7. Mappings and root objects → dict of at most max_width keys

    Mapping Rules:
        - Keys starting with "_" are skipped when ignore_prefixed_keys is set
        - A callable under hook_name is invoked and its result stored under "__json_output"
        - Callables are omitted from mappings and emitted as None in arrays
        - Skipped keys, the hook key and omitted callables do not count against max_width
        - Keys whose str() forms collide are emitted once, the first one wins
        - The hook result is stored as returned, without conversion, so hooks must return plain data
        - The root wrapper key is never treated as a hook

    The engine holds no state besides its immutable options, so one instance may serve
    many threads.

    Examples:
        >>> hoist = SafeObject(HoistOptions(max_width=5))
        >>> hoist(list(range(1, 11)))
        {'data': [1, 2, 3, 4, 5]}
        >>> data = {}
        >>> data["data"] = data
        >>> hoist(data)["data"]["data"]["data"]["data"]["data"]["data"]
        '[too deeply nested]'
    """

    def __init__(self, options: HoistOptions | None = None) -> None:
        if not isinstance(options, (HoistOptions, type(None))):
            raise TypeError(f"options must be a HoistOptions instance, but found {fmt_type(options)}")

        self.options = options or HoistOptions()
        self._handlers: dict[ValueKind, Callable[[Any, int], Any]] = {
            ValueKind.TOO_DEEP: self._hoist_too_deep,
            ValueKind.ERROR: self._hoist_error,
            ValueKind.ROOT_WRAP: self._hoist_root_wrap,
            ValueKind.DATE: self._hoist_date,
            ValueKind.COMPLEX: self._hoist_complex,
            ValueKind.ARRAY: self._hoist_array,
            ValueKind.MAPPING: self._hoist_mapping,
            ValueKind.PRIMITIVE: self._hoist_primitive,
            ValueKind.CALLABLE: self._hoist_callable,
        }

    def __call__(self, obj: Any) -> Any:
        return self.hoist(obj)

    def __repr__(self) -> str:
        return f"{class_name(self)}({self.options!r})"

    def hoist(self, obj: Any) -> dict[str, Any]:
        """
        Return a safe copy of obj.

        The result is always a dict. This method never raises an Exception.
        """
        try:
            return self._hoist(obj, 0)
        except Exception as err:
            # Last resort boundary, e.g. RecursionError from a pathological __eq__
            logger.warning("Hoisting %s failed: %s", fmt_type(obj), class_name(err, fully_qualified=True), exc_info=True)
            return self._sanitize_record(error_record(err), 0)

    # Dispatch -----------------------------------------

    def _hoist(self, obj: Any, depth: int) -> Any:
        try:
            kind = classify(obj, depth, self.options.max_nesting_depth)
        except Exception as err:
            logger.debug("Cannot classify %s: %s", fmt_type(obj), class_name(err))
            return self._sanitize_record(error_record(err), depth)
        return self._handlers[kind](obj, depth)

    def _hoist_child(self, value: Any, depth: int) -> Any:
        """Copy a primitive verbatim or visit value one level deeper."""
        if is_primitive(value):
            return value
        return self._hoist(value, depth + 1)

    # Handlers -----------------------------------------

    def _hoist_too_deep(self, obj: Any, depth: int) -> str:
        return TOO_DEEP

    def _hoist_complex(self, obj: Any, depth: int) -> str:
        return COMPLEX_OBJECT

    def _hoist_primitive(self, obj: Any, depth: int) -> Any:
        return obj

    def _hoist_callable(self, obj: Any, depth: int) -> None:
        return None

    def _hoist_error(self, obj: BaseException, depth: int) -> dict[str, Any]:
        rtn = error_head(obj)
        source = AttributeSource(obj)
        try:
            keys = source.keys()
        except Exception as err:
            logger.debug("Cannot enumerate attributes of %s: %s", fmt_type(obj), class_name(err))
            return rtn
        return self._enumerate(source, keys, rtn, depth)

    def _hoist_root_wrap(self, obj: Any, depth: int) -> dict[str, Any]:
        if is_callable(obj):
            return {}
        return {ROOT_KEY: self._hoist_child(obj, depth)}

    def _hoist_date(self, obj: Any, depth: int) -> Any:
        try:
            if obj != obj:
                return INVALID_DATE
            return obj.isoformat()
        except Exception as err:
            logger.debug("Cannot render %s: %s", fmt_type(obj), class_name(err))
            return self._sanitize_record(error_record(err), depth)

    def _hoist_array(self, obj: Any, depth: int) -> list[Any] | dict[str, Any]:
        source = source_for(obj, limit=self.options.max_width)
        try:
            keys = source.keys()
        except Exception as err:
            logger.debug("Cannot enumerate %s: %s", fmt_type(obj), class_name(err))
            return self._sanitize_record(error_record(err), depth)

        rtn = []
        for index in keys:
            value = source.get(index)
            rtn.append(None if is_callable(value) else self._hoist_child(value, depth))
        return rtn

    def _hoist_mapping(self, obj: Any, depth: int) -> dict[str, Any]:
        source = source_for(obj)
        try:
            keys = source.keys()
        except Exception as err:
            logger.debug("Cannot enumerate %s: %s", fmt_type(obj), class_name(err))
            return self._sanitize_record(error_record(err), depth)
        return self._enumerate(source, keys, {}, depth)

    # Property Enumeration -----------------------------

    def _enumerate(self, source: PropertySource, keys: Any, rtn: dict[str, Any], depth: int) -> dict[str, Any]:
        """Copy the keys of source into rtn applying width, underscore and hook rules."""
        opt = self.options
        emitted = 0
        seen: set[str] = set()

        for key in keys:
            if opt.max_width is not None and emitted >= opt.max_width:
                break

            name = source.name(key)
            if opt.ignore_prefixed_keys and name[:1] == PREFIX:
                continue
            if name in seen:
                continue  # Distinct keys with equal str() forms, first one wins

            value = source.get(key)
            if is_callable(value):
                if opt.emit_derived_output and name == opt.hook_name:
                    rtn[JSON_OUTPUT_KEY] = self._call_hook(value, depth)
                continue  # Functions are never copied

            rtn[name] = self._hoist_child(value, depth)
            seen.add(name)
            emitted += 1

        return rtn

    def _call_hook(self, hook: Callable[[], Any], depth: int) -> Any:
        """Return the hook result without visiting it, or the error record of its failure."""
        try:
            return hook()
        except Exception as err:
            logger.debug("Derived-output hook failed: %s", class_name(err))
            return self._sanitize_record(error_record(err), depth + 1)

    def _sanitize_record(self, record: dict[str, Any], depth: int) -> dict[str, Any]:
        """Make the attribute values of an error record safe, keeping all of its keys."""
        return {k: self._hoist_child(v, depth) for k, v in record.items() if not is_callable(v)}


# Methods --------------------------------------------------------------------------------------------------------------

def _merge_options(options: HoistOptions | None, **kwargs) -> HoistOptions:
    if not isinstance(options, (HoistOptions, type(None))):
        raise TypeError(f"options must be a HoistOptions instance, but found {fmt_type(options)}")
    return HoistOptions(**kwargs) if options is None else options.merge(**kwargs)


def safe_object(options: HoistOptions | None = None, **kwargs) -> Callable[[Any], dict[str, Any]]:
    """
    Construct a hoisting engine once and return its conversion function.

    Args:
        options: HoistOptions instance, defaults are used if None.
        **kwargs: HoistOptions fields overriding the corresponding options values.

    Returns:
        Callable taking any value and returning its safe copy; the callable never raises.

    Raises:
        TypeError: If options is not a HoistOptions instance, a field is unknown, or has a wrong type
        ValueError: If a limit is out of range

    Examples:
        >>> hoist = safe_object(max_width=5, ignore_prefixed_keys=True)
        >>> hoist({"_id": 1, "name": "x"})
        {'name': 'x'}
    """
    return SafeObject(_merge_options(options, **kwargs)).hoist


def hoist_data(obj: Any, *, options: HoistOptions | None = None, **kwargs) -> dict[str, Any]:
    """
    One-shot conversion of obj into its safe copy.

    Prefer safe_object() when converting many values with the same configuration.

    Args:
        obj: Any value.
        options: HoistOptions instance, defaults are used if None.
        **kwargs: HoistOptions fields overriding the corresponding options values.

    Raises:
        TypeError, ValueError: On invalid configuration only, never because of obj.

    Examples:
        >>> hoist_data(ValueError("Boom!"))["message"]
        'Boom!'
        >>> hoist_data(42)
        {'data': 42}
    """
    return SafeObject(_merge_options(options, **kwargs)).hoist(obj)

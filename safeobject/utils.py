"""
SafeObject Utilities shared across the package.

Contains naming and formatting helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself. Never consults
    the instance ``__class__`` attribute, so objects overriding it cannot break the lookup.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for non-builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(ValueError)
        'ValueError'
        >>> class_name(ValueError(), fully_qualified=True)
        'ValueError'
    """
    cls = obj if issubclass(type(obj), type) else type(obj)

    name = getattr(cls, "__name__", None) or "object"

    if not fully_qualified:
        return name

    module = getattr(cls, "__module__", None)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def fmt_type(obj: Any) -> str:
    """Format type information for exception messages, e.g. '<type: int>'."""
    return f"<type: {class_name(obj)}>"


def fmt_value(x: Any, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception and log messages.

    Broken ``__repr__`` methods are handled with a fallback token instead of raising.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hello w...>"
    """
    t = class_name(x)
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {class_name(e)})>"

    base_repr = base_repr.replace(">", "\\>")
    if max_repr > 0 and len(base_repr) > max_repr:
        base_repr = base_repr[:max_repr] + "..."
    return f"<{t}: {base_repr}>"

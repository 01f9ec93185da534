"""
SafeObject Hoisting Options
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace as dataclasses_replace
from typing import ClassVar

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import DEFAULT_HOOK_NAME
from .utils import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class HoistOptions:
    """
    Immutable configuration of the hoisting engine.

    Validated once at construction, so a misconfigured engine fails fast instead of
    failing in the middle of a traversal. Instances are read-only and may be shared
    between threads.

    Attributes:
        max_nesting_depth: Maximum recursion depth before the "[too deeply nested]" sentinel
                           is emitted (default: 5). Must be a positive int not greater than
                           MAX_NESTING_DEPTH_LIMIT.
        max_width: Maximum number of keys or elements emitted per container, None for no limit.
        emit_derived_output: Invoke the derived-output hook (e.g. `toJSON`) of visited
                             containers and store its result under "__json_output".
        ignore_prefixed_keys: Skip keys starting with an underscore.
        hook_name: Name of the derived-output hook looked up among the keys of a container.

    Examples:
        >>> opts = HoistOptions(max_width=20)
        >>> opts.merge(ignore_prefixed_keys=True).ignore_prefixed_keys
        True
        >>> HoistOptions(max_nesting_depth=0)
        Traceback (most recent call last):
        ...
        ValueError: HoistOptions.max_nesting_depth must be >0, but got <int: 0>
    """
    MAX_NESTING_DEPTH_LIMIT: ClassVar[int] = 128

    max_nesting_depth: int = 5
    max_width: int | None = None
    emit_derived_output: bool = True
    ignore_prefixed_keys: bool = False
    hook_name: str = DEFAULT_HOOK_NAME

    def __post_init__(self) -> None:
        """Validate field types and limits."""
        for name in ("max_nesting_depth", "max_width"):
            val = getattr(self, name)
            if val is None and name == "max_width":
                continue
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f"HoistOptions.{name} must be an int, got {fmt_type(val)}")
            if val <= 0:
                raise ValueError(f"HoistOptions.{name} must be >0, but got {fmt_value(val)}")

        if self.max_nesting_depth > self.MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(f"HoistOptions.max_nesting_depth must be <={self.MAX_NESTING_DEPTH_LIMIT}, "
                             f"but got {fmt_value(self.max_nesting_depth)}")

        for name in ("emit_derived_output", "ignore_prefixed_keys"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"HoistOptions.{name} must be a bool, got {fmt_type(val)}")

        if not isinstance(self.hook_name, str):
            raise TypeError(f"HoistOptions.hook_name must be a str, got {fmt_type(self.hook_name)}")
        if not self.hook_name:
            raise ValueError("HoistOptions.hook_name must be a non-empty str")

    # Class Methods ------------------------------------

    @classmethod
    def logging_options(cls) -> "HoistOptions":
        """
        Create a HoistOptions instance configured for log records.

        Returns:
            HoistOptions: Private keys dropped and container width capped at 100.
        """
        return cls(max_width=100, ignore_prefixed_keys=True)

    @classmethod
    def strict_options(cls) -> "HoistOptions":
        """
        Create a HoistOptions instance for untrusted input.

        Returns:
            HoistOptions: Shallow depth, narrow containers, and no hook invocation.
        """
        return cls(max_nesting_depth=3, max_width=50, emit_derived_output=False)

    # Methods ------------------------------------------

    def merge(self, **kwargs) -> "HoistOptions":
        """
        Return a validated copy with the given fields replaced.

        Raises:
            TypeError: If a field name is unknown or a value has a wrong type.
            ValueError: If a limit is out of range.
        """
        return dataclasses_replace(self, **kwargs)

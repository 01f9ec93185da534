"""
Reserved literals emitted by the hoisting engine.

These strings are part of the output contract shared with downstream log and JSON consumers,
so their exact text must not change.

Sentinels:
    TOO_DEEP: Substituted for any value found below the configured nesting depth
    COMPLEX_OBJECT: Substituted for non-plain objects found below the root level
    INVALID_DATE: Rendered text of a date-like value that does not denote a moment in time

Reserved keys:
    ROOT_KEY: Key under which a non-enumerable root value is wrapped
    JSON_OUTPUT_KEY: Key holding the captured result of a derived-output hook
    PREFIX: Leading character of keys dropped when underscore filtering is enabled
    DEFAULT_HOOK_NAME: Attribute or key name looked up as the derived-output hook
"""

from typing import Final

__all__ = [
    'TOO_DEEP',
    'COMPLEX_OBJECT',
    'INVALID_DATE',
    'ROOT_KEY',
    'JSON_OUTPUT_KEY',
    'PREFIX',
    'DEFAULT_HOOK_NAME',
]

# Sentinels ------------------------------------------------------------------------------------------------------------

TOO_DEEP: Final[str] = "[too deeply nested]"
COMPLEX_OBJECT: Final[str] = "[COMPLEX Object]"
INVALID_DATE: Final[str] = "Invalid Date"

# Reserved keys --------------------------------------------------------------------------------------------------------

ROOT_KEY: Final[str] = "data"
JSON_OUTPUT_KEY: Final[str] = "__json_output"
PREFIX: Final[str] = "_"
DEFAULT_HOOK_NAME: Final[str] = "toJSON"

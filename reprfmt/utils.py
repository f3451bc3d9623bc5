"""
Reprfmt utilities shared across the package.

Contains naming, escaping and key ordering helpers used by the engine and by the
default representers, kept here to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Iterable

# Constants ------------------------------------------------------------------------------------------------------------

REPR_TAG = "__repr_tag__"

_ESCAPES = {
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\v": "\\v",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_ESCAPE_RE = re.compile("[\0\n\r\v\t\b\f]")

_BYTE_ESCAPES = {
    0: "\\0",
    8: "\\b",
    9: "\\t",
    10: "\\n",
    11: "\\v",
    12: "\\f",
    13: "\\r",
    34: '\\"',
}

_NUMERIC_KEY_TYPES = (int, float, Decimal, Fraction)


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'

        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
    """
    cls = obj if isinstance(obj, type) else type(obj)

    if cls.__module__ == "builtins":
        qualified = fully_qualified_builtins
    else:
        qualified = fully_qualified

    if qualified:
        return cls.__module__ + "." + cls.__qualname__
    return cls.__name__


def class_of(obj: Any) -> type:
    """
    Get the class of an object as reported by its `__class__` attribute.

    Proxies report the class of their target this way. Falls back to `type(obj)`
    when `__class__` is not a type or cannot be read.
    """
    try:
        cls = obj.__class__
    except RecursionError:
        raise
    except Exception:
        return type(obj)
    return cls if isinstance(cls, type) else type(obj)


def object_name(obj: Any) -> str | None:
    """
    Get the display name of an object.

    An object's name is its class name, optionally followed by a tag in square
    brackets. The tag is read from the class attribute `__repr_tag__`, if any.

    Plain dict, list and object instances without a tag are considered anonymous,
    and None is returned for them.

    Examples:
        >>> object_name({})

        >>> object_name(set())
        'set'

        >>> class Queue(list):
        ...     __repr_tag__ = "jobs"
        >>> object_name(Queue())
        'Queue [jobs]'
    """
    cls = class_of(obj)
    tag = getattr(cls, REPR_TAG, None)

    if cls in (dict, list, object) and tag is None:
        return None

    if tag is None:
        return cls.__name__
    return f"{cls.__name__} [{tag}]"


def escape(text: str, terminator: str | None = None) -> str:
    """
    Escape control characters in a string.

    Characters `\\0 \\n \\r \\v \\t \\b \\f` are replaced with their two-character
    escape forms. When `terminator` is given, each of its occurrences is prefixed
    with a backslash.

    Examples:
        >>> escape("a\\nb")
        'a\\\\nb'

        >>> escape('say "hi"', '"')
        'say \\\\"hi\\\\"'
    """
    result = _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)
    if terminator:
        result = result.replace(terminator, "\\" + terminator)
    return result


def escape_bytes(data: bytes | bytearray | memoryview) -> str:
    """
    Render binary data as the inner part of a double-quoted byte literal.

    Printable ASCII is kept as is, common control bytes and the double quote use
    named escapes, everything else is written as `\\xNN`.
    """
    parts: list[str] = []
    for byte in bytes(data):
        if byte in _BYTE_ESCAPES:
            parts.append(_BYTE_ESCAPES[byte])
        elif 0x20 <= byte <= 0x7E:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02x}")
    return "".join(parts)


def is_identifier(name: Any) -> bool:
    """
    Check whether a field name can be written without quotes.

    Field names are written bare when they are valid Python identifiers.

    Examples:
        >>> is_identifier("valid_id")
        True
        >>> is_identifier("foo-bar")
        False
    """
    return isinstance(name, str) and name.isidentifier()


def key_sort_key(key: Any) -> tuple:
    """
    Sort key implementing the field order used by default representers.

    Numbers come first in ascending order, then strings in lexical order, then
    keys without a natural order (kept in their original order by a stable sort),
    and finally enum members ordered by their qualified member name.
    """
    if isinstance(key, Enum):
        return (3, 0, f"{type(key).__name__}.{key.name}")
    if isinstance(key, _NUMERIC_KEY_TYPES) and not isinstance(key, bool):
        if key != key:
            # NaN sorts after every other number
            return (0, 1, 0)
        return (0, 0, key)
    if isinstance(key, str):
        return (1, 0, key)
    return (2, 0, 0)


def sorted_keys(keys: Iterable[Any]) -> list[Any]:
    """Return keys sorted with `key_sort_key`."""
    return sorted(keys, key=key_sort_key)

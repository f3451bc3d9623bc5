"""
Default representers for built-in and standard library types.

Every representer receives the value and the active formatter, and writes the
value through the formatter API. They are registered when this module is
imported, which reprfmt.formatter does, and may be overridden per type with
reprfmt.registry.register().

Types without a representer are handled by Formatter.format_default, which calls
into the generic representers at the bottom of this module.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import dataclasses
import datetime
import logging
import re
import types
import uuid
import weakref
from array import array
from decimal import Decimal
from enum import Enum, IntEnum, IntFlag, StrEnum
from fractions import Fraction
from functools import partial
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .fragments import Styled, error_hint, hint
from .registry import represents
from .styles import Style
from .utils import class_name, class_of, escape, escape_bytes, key_sort_key, object_name, sorted_keys

if TYPE_CHECKING:
    from .formatter import Formatter, Struct

logger = logging.getLogger(__name__)

# Constants ------------------------------------------------------------------------------------------------------------

PATTERN_FLAGS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
    (re.ASCII, "a"),
)


# Numbers --------------------------------------------------------------------------------------------------------------


@represents(bool, int, float, complex)
def format_number(value: Any, fmt: "Formatter") -> None:
    """Write a number literal, as repr() of the built-in base type would."""
    if isinstance(value, Enum):
        format_enum(value, fmt)
        return

    for base in (bool, int, float, complex):
        if isinstance(value, base):
            fmt.write(Styled(Style.NUMBER, base.__repr__(value)))
            return


@represents(Decimal)
def format_decimal(value: Decimal, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.NUMBER, f"{class_name(value)}({value})"))


@represents(Fraction)
def format_fraction(value: Fraction, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.NUMBER, f"{class_name(value)}({value.numerator}/{value.denominator})"))


@represents(range)
def format_range(value: range, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.NUMBER, f"range({value.start}, {value.stop}, {value.step})"))


# Text and binary data -------------------------------------------------------------------------------------------------


@represents(str)
def format_string(value: str, fmt: "Formatter") -> None:
    """Write a double-quoted string with control characters and quotes escaped."""
    if isinstance(value, Enum):
        format_enum(value, fmt)
        return
    fmt.write(Styled(Style.STRING, '"' + escape(str.__str__(value), '"') + '"'))


@represents(bytes)
def format_bytes(value: bytes, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.STRING, 'b"' + escape_bytes(value) + '"'))


@represents(bytearray)
def format_bytearray(value: bytearray, fmt: "Formatter") -> None:
    fmt.write(object_name(value), " ", Styled(Style.STRING, 'b"' + escape_bytes(value) + '"'))


@represents(memoryview)
def format_memoryview(value: memoryview, fmt: "Formatter") -> None:
    """
    Write the size of a memory view, but not its contents.

    Examples:
        memoryview [ 5 bytes ]
        memoryview [ empty ]
    """
    try:
        size = value.nbytes
    except ValueError:
        # Released views forbid every operation
        fmt.write("memoryview [ ", hint("released"), " ]")
        return

    if size:
        fmt.write("memoryview [ ", hint(f"{size} bytes"), " ]")
    else:
        fmt.write("memoryview [ ", Styled(Style.UNDEFINED, "empty"), " ]")


@represents(type(Ellipsis), type(NotImplemented))
def format_singleton(value: Any, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.NULL, repr(value)))


# Containers -----------------------------------------------------------------------------------------------------------


@represents(dict)
def format_dict(value: dict, fmt: "Formatter") -> None:
    """Write a dict as a struct, with keys sorted by key_sort_key."""
    items = sorted(value.items(), key=lambda item: key_sort_key(item[0]))

    def fields(struct: "Struct") -> None:
        for key, item in items:
            struct.field(key, item)

    fmt.struct(value, fields)


@represents(collections.OrderedDict)
def format_mapping(value: Any, fmt: "Formatter") -> None:
    """Write a mapping as `Name { key => value }` pairs, in iteration order."""

    def entries(sub) -> None:
        for key, item in value.items():
            sub.entry(key, item)

    fmt.map(value, entries)


@represents(list, collections.deque, array)
def format_sequence(value: Any, fmt: "Formatter") -> None:
    """Write a sequence as a list, in iteration order."""

    def entries(sub) -> None:
        for item in value:
            sub.entry(item)

    fmt.list(value, entries)


@represents(tuple)
def format_tuple(value: tuple, fmt: "Formatter") -> None:
    """
    Write a tuple.

    Named tuples are written as structs with fields in declaration order, other
    tuples as `( a, b )`, with the name of tuple subclasses in front.
    """
    cls = class_of(value)
    fields = getattr(cls, "_fields", None)

    if isinstance(fields, tuple) and len(fields) == len(value):

        def named(struct: "Struct") -> None:
            for key, item in zip(fields, value):
                struct.field(key, item)

        fmt.struct(value, named)
        return

    def entries(sub) -> None:
        for item in value:
            sub.entry(item)

    fmt.tuple(None if cls is tuple else value, entries)


@represents(set, frozenset)
def format_set(value: Any, fmt: "Formatter") -> None:
    """Write a set with its elements sorted by key_sort_key."""
    items = sorted_keys(value)

    def entries(sub) -> None:
        for item in items:
            sub.entry(item)

    fmt.set(value, entries)


@represents(weakref.ref, weakref.WeakSet, weakref.WeakKeyDictionary, weakref.WeakValueDictionary)
def format_weak(value: Any, fmt: "Formatter") -> None:
    """Write the name of a weak reference or weak collection, which are opaque."""
    fmt.write(object_name(value) or class_name(value))


# Dates and times ------------------------------------------------------------------------------------------------------


@represents(datetime.date, datetime.time)
def format_date(value: datetime.date | datetime.time, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.DATE, f"{class_name(value)}({value.isoformat()})"))


@represents(datetime.timedelta)
def format_timedelta(value: datetime.timedelta, fmt: "Formatter") -> None:
    fmt.write(Styled(Style.DATE, f"{class_name(value)}({value})"))


# Symbols --------------------------------------------------------------------------------------------------------------


@represents(Enum, IntEnum, IntFlag, StrEnum)
def format_enum(value: Enum, fmt: "Formatter") -> None:
    """Write an enum member as `Class.NAME`, or `Class(value)` for unnamed flag combinations."""
    name = value.name
    if name is None:
        text = f"{type(value).__name__}({value.value!r})"
    else:
        text = f"{type(value).__name__}.{name}"
    fmt.write(Styled(Style.SYMBOL, text))


@represents(re.Pattern)
def format_pattern(value: re.Pattern, fmt: "Formatter") -> None:
    """
    Write a compiled pattern as a slash-delimited literal followed by flags.

    Examples:
        /ab+c/i
    """
    flags = "".join(letter for flag, letter in PATTERN_FLAGS if value.flags & flag)
    if isinstance(value.pattern, bytes):
        source = "b/" + escape_bytes(value.pattern).replace("/", "\\/") + "/"
    else:
        source = "/" + escape(value.pattern, "/") + "/"
    fmt.write(Styled(Style.REGEXP, source + flags))


@represents(PurePath, uuid.UUID)
def format_quoted(value: Any, fmt: "Formatter") -> None:
    """Write a value with a canonical string form as `Name("text")`."""
    fmt.write(class_name(value), "(", Styled(Style.STRING, '"' + escape(str(value), '"') + '"'), ")")


# Code objects ---------------------------------------------------------------------------------------------------------


@represents(BaseException)
def format_exception(value: BaseException, fmt: "Formatter") -> None:
    """Write an exception as `[Name: message]`, or `[Name]` without a message."""
    message = _safe_str(value)
    name = object_name(value) or class_name(value)
    if message:
        fmt.write(hint("[", name, ": ", message, "]"))
    else:
        fmt.write(hint("[", name, "]"))


@represents(
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
)
def format_routine(value: Any, fmt: "Formatter") -> None:
    name = getattr(value, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        fmt.write(hint("<function>"))
    else:
        fmt.write(hint(f"<function {name}>"))


@represents(type)
def format_class(value: type, fmt: "Formatter") -> None:
    fmt.write(hint(f"<class {value.__name__}>"))


@represents(types.ModuleType)
def format_module(value: types.ModuleType, fmt: "Formatter") -> None:
    fmt.write(hint(f"<module {value.__name__}>"))


@represents(types.GeneratorType, types.CoroutineType, types.AsyncGeneratorType)
def format_generator(value: Any, fmt: "Formatter") -> None:
    """Write the kind and name of a generator or coroutine, without running it."""
    fmt.write(hint(f"<{class_name(value)} {value.__name__}>"))


# Generic objects ------------------------------------------------------------------------------------------------------


def format_dataclass(value: Any, fmt: "Formatter") -> None:
    """Write a dataclass instance as a struct, with fields in declaration order."""
    names = [field.name for field in dataclasses.fields(value) if field.repr]
    fmt.struct(value, lambda struct: _write_attributes(struct, value, names))


def format_object(value: Any, fmt: "Formatter") -> None:
    """
    Write an arbitrary object as a struct of its attributes.

    Attributes are read from the instance `__dict__` and from `__slots__` of every
    class in the MRO, and sorted by key_sort_key. Unset slots are skipped. An
    attribute which cannot be read is written as an inline error hint, and the
    remaining attributes are written as usual.

    Objects without any attributes but with a `__repr__` of their own are written
    with it instead.
    """
    try:
        names, slots = _attribute_names(value)
    except RecursionError:
        raise
    except Exception as ex:
        logger.debug("Cannot list attributes of %s value: %r", type(value).__name__, ex)
        fmt.write(error_hint(ex, "when formatting"))
        return

    if not names and type(value).__repr__ is not object.__repr__:
        fmt.write(_safe_repr(value))
        return

    fmt.struct(value, lambda struct: _write_attributes(struct, value, names, optional=slots))


# Private Methods ------------------------------------------------------------------------------------------------------


def _attribute_names(obj: Any) -> tuple[list[Any], set[str]]:
    try:
        attrs = vars(obj)
    except TypeError:
        attrs = {}

    names = dict.fromkeys(attrs)
    slots = set()
    for base in type(obj).__mro__:
        declared = base.__dict__.get("__slots__", ())
        if isinstance(declared, str):
            declared = (declared,)
        for slot in declared:
            if slot in ("__dict__", "__weakref__"):
                continue
            name = _mangle(base, slot)
            if name not in names:
                names[name] = None
                slots.add(name)

    return sorted_keys(names), slots


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name


def _write_attributes(struct: "Struct", obj: Any, names: Iterable[Any], optional: Iterable[str] = ()) -> None:
    for name in names:
        try:
            attr = getattr(obj, name)
        except RecursionError:
            raise
        except Exception as ex:
            if isinstance(ex, AttributeError) and name in optional:
                continue
            logger.debug("Cannot access field %r of %s value: %r", name, type(obj).__name__, ex)
            struct.write_field(name, partial(struct.write, error_hint(ex, "when accessing field")))
            continue
        struct.field(name, attr)


def _safe_repr(obj: Any) -> str:
    """Defensive repr() call, handle broken __repr__ methods gracefully."""
    try:
        return repr(obj)
    except Exception as ex:
        return f"<{type(obj).__name__} object (repr failed: {type(ex).__name__})>"


def _safe_str(obj: Any) -> str:
    try:
        return str(obj)
    except Exception as ex:
        return f"<str() failed: {type(ex).__name__}>"

"""
Formatting engine.

The Formatter walks a value graph and writes fragments into a tree of buffers,
one nested buffer per structural scope. Nothing is laid out during the walk;
the layout of every scope is decided when the root buffer is flushed, once the
complexity of each subtree is known.

Values are dispatched in this order:

    1. None is written as a literal.
    2. Proxies write a `proxy ` hint and continue with their target, if known.
    3. Composite values, and proxies whose target is unknown, are checked for
       repeated identity (see reprfmt.references).
    4. A representer declared by the class (`__represent__`) or registered for
       it is invoked (see reprfmt.registry).
    5. Otherwise Formatter.format_default picks a structural shape.

Examples:
    >>> format({"a": 1, "foo-bar": [1, 2]})
    '{ a: 1, "foo-bar": [ 1, 2 ] }'

    >>> print(format({"a": [1], "b": [2], "c": [3]}, pretty=True))
    {
      a: [ 1 ],
      b: [ 2 ],
      c: [ 3 ]
    }
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import dataclasses
import datetime
import gc
import inspect
import logging
import re
import types
import uuid
import weakref
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from . import formatters
from .buffer import Buffer, FlushOptions
from .config import FormatOptions, get_options
from .fragments import Deferred, HardBreak, SoftBreak, Styled, error_hint, hint
from .references import ReferenceTracker
from .registry import get_representer
from .styles import Style
from .utils import is_identifier, object_name

logger = logging.getLogger(__name__)

# Constants ------------------------------------------------------------------------------------------------------------

ATOMIC_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    type(Ellipsis),
    type(NotImplemented),
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    Enum,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    types.ModuleType,
    range,
    re.Pattern,
    PurePath,
    uuid.UUID,
)

PROXY_TYPES = (weakref.ProxyType, weakref.CallableProxyType, types.MappingProxyType)

_FRAGMENT_TYPES = (str, HardBreak, SoftBreak, Styled, Deferred, Buffer, list, tuple)


# Classes --------------------------------------------------------------------------------------------------------------


class SubFormatter:
    """
    Base of structural sub-formatters.

    A sub-formatter writes one structural scope: an optional name, an open
    delimiter, items separated by commas and soft breaks, and a close delimiter.
    The formatter creates it, calls `begin`, hands it to the scope callback, and
    calls `finish` afterwards.

    Attributes:
        formatter: The formatter owning this scope.
        name: Name written before the open delimiter, or None.
        count: Number of items written so far.
    """

    open = "{"
    close = "}"

    def __init__(self, formatter: "Formatter", name: Any = None) -> None:
        self.formatter = formatter
        self.name = name if name is None or isinstance(name, str) else object_name(name)
        self.count = 0

    @property
    def has_elements(self) -> bool:
        """Whether at least one item was written."""
        return self.count > 0

    def write(self, *data: Any) -> None:
        """Write fragments into the current scope."""
        self.formatter.write(*data)

    def format(self, value: Any) -> None:
        """Format a value into the current scope."""
        self.formatter.format(value)

    def begin(self) -> None:
        if self.name:
            self.write(self.name, " ")
        self.write(self.open)

    def finish(self) -> None:
        if self.has_elements:
            self.write(SoftBreak(" ", self.formatter.depth))
        self.write(self.close)

    def elide(self) -> None:
        """Write a placeholder standing for the whole scope."""
        self.begin()
        self.write(hint("..."))
        self.write(self.close)

    def write_item(self, item: Any = None, *args: Any) -> None:
        """
        Write a single item of this scope.

        Writes a comma before every item but the first, and a soft break before
        every item. Then, if `item` is a callback it is called with `args`,
        otherwise `item` and `args` are written as fragments.
        """
        if self.has_elements:
            self.write(",")
        self.write(SoftBreak(" ", self.formatter.depth))
        self.count += 1

        if callable(item) and not isinstance(item, (Deferred, Buffer)):
            item(*args)
        elif item is not None:
            self.write(item, *args)


class Struct(SubFormatter):
    """Object-like scope: `Name { key: value, ... }`."""

    def field(self, key: Any, value: Any) -> None:
        """Write a `key: value` pair."""
        self.write_field(key, lambda: self.format(value))

    def write_field(self, key: Any, callback: Callable[[], None]) -> None:
        """
        Write a field whose value is written by a callback.

        The key is written bare when it is a valid identifier, and formatted like
        any other value otherwise.
        """

        def item() -> None:
            if is_identifier(key):
                self.write(key)
            else:
                self.format(key)
            self.write(": ")
            callback()

        self.write_item(item)


class List(SubFormatter):
    """Sequence scope: `Name [ value, ... ]`."""

    open = "["
    close = "]"

    def entry(self, value: Any) -> None:
        """Write a single element."""
        self.write_item(self.format, value)


class Tuple(List):
    """Tuple scope: `( value, ... )`, a single element keeps its trailing comma."""

    open = "("
    close = ")"

    def finish(self) -> None:
        if self.count == 1:
            self.write(",")
        super().finish()


class Set(SubFormatter):
    """Set scope: `Name { value, ... }`."""

    def entry(self, value: Any) -> None:
        """Write a single element."""
        self.write_item(self.format, value)


class Map(SubFormatter):
    """Mapping scope: `Name { key => value, ... }`."""

    def entry(self, key: Any, value: Any) -> None:
        """Write a `key => value` pair."""

        def item() -> None:
            self.format(key)
            self.write(" => ")
            self.format(value)

        self.write_item(item)


class Formatter:
    """
    Formatting session.

    A formatter owns the buffer being written, the current depth, and the identity
    map of the values visited so far. It is meant for a single top-level value;
    create a new one, or use the module function `format`, for each value.

    Args:
        options: A FormatOptions instance, a mapping of option names to values,
            or None to use the module defaults (see reprfmt.config).
        **overrides: Individual option values, applied last.

    Raises:
        TypeError: If an option name is not recognized, or an option has an
            invalid type.
        ValueError: If an option has an invalid value.

    Examples:
        >>> fmt = Formatter(pretty=True)
        >>> fmt.format([1, 2])
        >>> fmt.to_string()
        '[ 1, 2 ]'
    """

    Struct = Struct
    List = List
    Tuple = Tuple
    Set = Set
    Map = Map

    def __init__(self, options: FormatOptions | abc.Mapping[str, Any] | None = None, /, **overrides: Any) -> None:
        if isinstance(options, FormatOptions):
            opts = options.merge(**overrides) if overrides else options
        elif options is None or isinstance(options, abc.Mapping):
            opts = get_options().merge(options, **overrides)
        else:
            raise TypeError(f"options must be FormatOptions or a mapping, got {type(options).__name__}")

        self.options = opts
        self.result = Buffer()
        self.indent = opts.indent
        self.depth = opts.depth
        self.limit_depth = opts.limit_depth
        self.max_complexity = opts.effective_max_complexity
        self.style = opts.style
        self._references = ReferenceTracker()

    def __repr__(self) -> str:
        return f"<Formatter: depth={self.depth}, {len(self._references)} visited>"

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        """Flush the root buffer and return the formatted text."""
        options = FlushOptions(
            depth=self.options.depth,
            indent=self.indent,
            max_complexity=self.max_complexity,
            style=self.style,
        )
        return self.result.flush(options).text

    def write(self, *data: Any) -> None:
        """
        Write fragments into the current buffer.

        Raises:
            TypeError: If a fragment has an unsupported type.
        """
        for fragment in data:
            _check_fragment(fragment)
        self.result.extend(data)

    def format(self, value: Any) -> None:
        """Format a value into the current buffer."""
        if value is None:
            self.write(Styled(Style.NULL, "None"))
            return

        if self.is_proxy(value):
            self.write(hint("proxy "))
            target = self.inspect_proxy(value)
            if target is not None:
                self.format(target)
                return

        if self.is_proxy(value) or self.is_composite(value):
            ref, first_visit = self._references.visit(value)
            if not first_visit:
                self.write(ref.add_ref())
                return
            self.write(ref.source)

        try:
            cls = value.__class__
        except RecursionError:
            raise
        except Exception as ex:
            logger.debug("Cannot inspect %s value: %r", type(value).__name__, ex)
            self.write(error_hint(ex, "when formatting"))
            return
        if not isinstance(cls, type):
            cls = type(value)

        representer = get_representer(cls)
        if representer is not None:
            representer(value, self)
        else:
            self.format_default(value)

    def format_default(self, value: Any) -> None:
        """
        Format a value without a representer of its own.

        Dataclass instances and other objects are written as structs, mappings as
        maps, sets as sets, and other sequences as lists.
        """
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            formatters.format_dataclass(value, self)
        elif isinstance(value, abc.Mapping):
            formatters.format_mapping(value, self)
        elif isinstance(value, abc.Set):
            formatters.format_set(value, self)
        elif isinstance(value, abc.Sequence):
            formatters.format_sequence(value, self)
        elif inspect.isroutine(value):
            formatters.format_routine(value, self)
        else:
            formatters.format_object(value, self)

    def is_composite(self, value: Any) -> bool:
        """
        Whether a value has an identity worth tracking.

        Atomic values are never expanded into nested structures, so repeating them
        is harmless; everything else is tracked to detect cycles and shared
        references.
        """
        cls = type(value)
        if issubclass(cls, ATOMIC_TYPES):
            return False
        if cls in (tuple, frozenset) and not value:
            return False
        return True

    def is_proxy(self, value: Any) -> bool:
        """Whether a value is a proxy standing for another value."""
        return issubclass(type(value), PROXY_TYPES)

    def inspect_proxy(self, value: Any) -> Any:
        """
        Return the target of a proxy, or None if it cannot be obtained.

        Mapping proxies expose their target to the garbage collector. Weak proxies
        do not; they are formatted through the proxy itself and tracked by its own
        identity, which is shared by all proxies of a referent created without a
        callback.
        """
        if isinstance(value, types.MappingProxyType):
            referents = gc.get_referents(value)
            if len(referents) == 1:
                return referents[0]
        return None

    # Structural scopes ----------------------------------------------

    def struct(self, name: Any = None, callback: Callable[[Any], None] | None = None) -> None:
        """
        Write an object-like scope.

        Args:
            name: Name of the scope, or a value to derive the name from (see
                reprfmt.utils.object_name). May be omitted.
            callback: Called with the Struct sub-formatter to write fields.
        """
        self._scope(self.Struct, name, callback)

    def list(self, name: Any = None, callback: Callable[[Any], None] | None = None) -> None:
        """Write a sequence scope, see `struct`."""
        self._scope(self.List, name, callback)

    def tuple(self, name: Any = None, callback: Callable[[Any], None] | None = None) -> None:
        """Write a tuple scope, see `struct`."""
        self._scope(self.Tuple, name, callback)

    def set(self, name: Any = None, callback: Callable[[Any], None] | None = None) -> None:
        """Write a set scope, see `struct`."""
        self._scope(self.Set, name, callback)

    def map(self, name: Any = None, callback: Callable[[Any], None] | None = None) -> None:
        """Write a mapping scope, see `struct`."""
        self._scope(self.Map, name, callback)

    def _scope(self, factory, name, callback) -> None:
        if callback is None and callable(name):
            name, callback = None, name

        sub = factory(self, name)

        if self.limit_depth is not None and self.depth > self.limit_depth:
            logger.debug("Eliding %s scope at depth %d", factory.__name__, self.depth)
            sub.elide()
            return

        parent = self.result
        nested = self.result = Buffer()
        depth = self.depth
        self.depth += 1
        try:
            sub.begin()
            if callback is not None:
                callback(sub)
            self.depth = depth
            sub.finish()
        finally:
            self.depth = depth
            self.result = parent
        parent.push(nested)


# Methods --------------------------------------------------------------------------------------------------------------


def format(value: Any, options: FormatOptions | Formatter | abc.Mapping[str, Any] | None = None, /, **overrides: Any) -> str:
    """
    Format any value as a human-readable string.

    Args:
        value: The value to format.
        options: Options for a new formatter (see Formatter), or a Formatter
            instance to use as is.
        **overrides: Individual option values. Not allowed with a Formatter.

    Returns:
        The formatted text.

    Raises:
        TypeError: If an option name is not recognized, or options are combined
            with a Formatter instance.

    Examples:
        >>> format(42)
        '42'
        >>> format('a"b')
        '"a\\\\"b"'
        >>> a = []
        >>> a.append(a)
        >>> format(a)
        '#0 = [ #0# ]'
    """
    if isinstance(options, Formatter):
        if overrides:
            raise TypeError("Invalid options to Formatter: cannot override options of a Formatter instance")
        fmt = options
    else:
        fmt = Formatter(options, **overrides)

    fmt.format(value)
    return fmt.to_string()


# Private Methods ------------------------------------------------------------------------------------------------------


def _check_fragment(fragment: Any) -> None:
    if isinstance(fragment, _FRAGMENT_TYPES) or callable(fragment):
        if isinstance(fragment, (list, tuple)):
            for item in fragment:
                _check_fragment(item)
        return
    raise TypeError(f"unsupported fragment type: {type(fragment).__name__}")

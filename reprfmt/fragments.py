"""
Fragments are deferred units of formatted output.

A fragment is not committed text but a description of one or more possible
renderings, resolved only when the containing buffer is flushed:

    str         Literal text. Embedded line breaks become hard breaks at flush time.
    HardBreak   Always break here; forces the containing buffer into multi-line mode.
    SoftBreak   Rendered as `text` on a single line, or as a line break otherwise.
    Styled      Inner fragments wrapped in enter/exit markup of a style processor.
    Deferred    A zero-argument thunk producing fragments, invoked during flush.
    Buffer      A nested buffer, flushed independently (see reprfmt.buffer).

Lists and tuples of fragments may be used anywhere a single fragment is accepted,
and nest arbitrarily. A bare zero-argument callable is accepted as a Deferred.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

# Local ----------------------------------------------------------------------------------------------------------------
from .styles import Style

# Classes --------------------------------------------------------------------------------------------------------------

Fragment = Union[str, "HardBreak", "SoftBreak", "Styled", "Deferred", "Buffer", Callable[[], Any], list, tuple]


@dataclass(frozen=True, slots=True)
class HardBreak:
    """
    Always break here.

    Rendered as a single line feed followed by `indent` indentation units. Its
    presence forces the containing buffer, and all of its parents, into
    multi-line rendering.
    """

    indent: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError(f"indent must be an int, got {type(self.indent).__name__}")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """
    Optionally break here.

    Rendered as `text` when the containing buffer fits a single line, or as
    a line feed followed by `indent` indentation units otherwise.
    """

    text: str = " "
    indent: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"text must be a str, got {type(self.text).__name__}")
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError(f"indent must be an int, got {type(self.indent).__name__}")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")


@dataclass(frozen=True, slots=True)
class Styled:
    """
    Fragments rendered with a semantic style.

    The style processor maps `style` to a pair of enter/exit markup strings,
    which are written around whatever `value` resolves to.
    """

    style: Style | str
    value: Any


@dataclass(frozen=True, slots=True)
class Deferred:
    """
    Fragments which are not yet known.

    The thunk is called during flush, and whatever it returns is processed as
    a fragment; it may return further deferred fragments.
    """

    thunk: Callable[[], Any]

    def __call__(self) -> Any:
        return self.thunk()


# Methods --------------------------------------------------------------------------------------------------------------


def hint(*value: Any) -> Styled:
    """Shortcut for a fragment in the hint style."""
    return Styled(Style.HINT, list(value) if len(value) != 1 else value[0])


def error_hint(ex: BaseException, context: str) -> Styled:
    """
    Inline hint describing an absorbed error.

    Examples:
        >>> error_hint(KeyError("x"), "when accessing field").value
        ['KeyError', ' ', 'when accessing field', ": 'x'"]
    """
    message = str(ex)
    parts = [type(ex).__name__, " ", context]
    if message:
        parts.append(f": {message}")
    return Styled(Style.HINT, parts)


def iter_lines(text: str) -> Iterator[tuple[str, bool]]:
    """
    Split text on line feeds.

    Yields (line, has_break) pairs, where `line` excludes the line feed and
    `has_break` tells whether one followed it. Empty input yields nothing.

    Examples:
        >>> list(iter_lines("a\\nb"))
        [('a', True), ('b', False)]

        >>> list(iter_lines("a\\n"))
        [('a', True)]
    """
    start = 0
    while start < len(text):
        inx = text.find("\n", start)
        if inx == -1:
            yield text[start:], False
            return
        yield text[start:inx], True
        start = inx + 1

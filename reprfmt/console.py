"""
Console and logging integration.

Print or log a mix of literal strings and values. Strings are written as they
are; every other value is pretty-formatted with a style processor suitable for
the destination:

    >>> rprint("config:", {"debug": True})          # doctest: +SKIP
    config: { debug: True }

Colors are enabled for terminals, unless the NO_COLOR environment variable is set.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os
import sys
from typing import IO, Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatter import format
from .styles import CssStyle, StyleProcessor, ansi_style, no_style

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------


class ReprLogFormatter(logging.Formatter):
    """
    Logging formatter which formats non-string arguments of a record with reprfmt.

    Arguments are only replaced when the message is rendered, so records passed to
    other handlers are not affected. Numbers are left to the %-style message format.

    Examples:
        >>> handler = logging.StreamHandler()                    # doctest: +SKIP
        >>> handler.setFormatter(ReprLogFormatter("%(message)s", pretty=True))
        >>> logger.info("loaded %s", {"a": [1, 2]})              # doctest: +SKIP
        loaded { a: [ 1, 2 ] }
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, style: str = "%", **options: Any) -> None:
        super().__init__(fmt, datefmt, style)
        self.options = options

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.args, tuple) and record.args:
            record = logging.makeLogRecord(record.__dict__)
            record.args = tuple(self._wrap(arg) for arg in record.args)
        return super().format(record)

    def _wrap(self, arg: Any) -> Any:
        if arg is None or isinstance(arg, (str, int, float)):
            return arg
        return _Formatted(format(arg, **self.options))


class _Formatted:
    """Text standing for a formatted argument in %-style messages."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    def __str__(self) -> str:
        return self.text

    __repr__ = __str__


# Methods --------------------------------------------------------------------------------------------------------------


def auto_style(stream: IO | None = None) -> StyleProcessor:
    """
    Select a style processor for an output stream.

    Returns ansi_style for terminals and no_style for anything else, or when the
    NO_COLOR environment variable is set.
    """
    stream = sys.stdout if stream is None else stream
    if os.environ.get("NO_COLOR"):
        return no_style
    isatty = getattr(stream, "isatty", None)
    try:
        return ansi_style if isatty is not None and isatty() else no_style
    except ValueError:
        # Closed streams
        return no_style


def join_values(values: Iterable[Any], sep: str = " ", **options: Any) -> str:
    """
    Join literal strings and formatted values into a single text.

    Values are formatted with `pretty=True` unless options say otherwise.
    """
    options.setdefault("pretty", True)
    return sep.join(value if isinstance(value, str) else format(value, **options) for value in values)


def css_values(*values: Any, sep: str = " ", **options: Any) -> tuple[str, list[str]]:
    """
    Format for browser-like consoles supporting `%c` markup.

    Returns:
        The text with `%c` markers, and the CSS declarations matching them, in order.
    """
    style = CssStyle()
    text = join_values(values, sep=sep, style=style, **options)
    return text, style.styles


def rprint(*values: Any, sep: str = " ", end: str = "\n", file: IO | None = None, **options: Any) -> None:
    """
    Print literal strings and formatted values.

    Args:
        *values: Strings to print as they are, and values to format.
        sep: Separator written between values.
        end: Text written after the last value.
        file: Output stream, defaults to sys.stdout.
        **options: Formatting options (see reprfmt.config.FormatOptions). The style
            is selected with auto_style() unless given.
    """
    stream = sys.stdout if file is None else file
    options.setdefault("style", auto_style(stream))
    print(join_values(values, sep=sep, **options), end=end, file=stream)


def log_repr(*values: Any, log: logging.Logger | None = None, level: int = logging.INFO, **options: Any) -> None:
    """
    Log literal strings and formatted values as a single message.

    Nothing is formatted unless the logger is enabled for the level.

    Args:
        *values: Strings to log as they are, and values to format.
        log: Destination logger, defaults to the logger of this module.
        level: Logging level.
        **options: Formatting options. Styling is disabled unless given.
    """
    target = logger if log is None else log
    if not target.isEnabledFor(level):
        return
    options.setdefault("style", no_style)
    target.log(level, "%s", join_values(values, **options))

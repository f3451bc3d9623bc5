"""
Style processors for formatted output.

A style processor is a callable mapping a semantic style tag to a pair of
(enter, exit) markup strings, which the buffer writes around styled fragments.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique
from typing import Callable

# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Style(StrEnum):
    """Semantic style tags used by the default representers."""

    DATE = "date"
    HINT = "hint"
    NULL = "null"
    NUMBER = "number"
    REGEXP = "regexp"
    STRING = "string"
    SYMBOL = "symbol"
    UNDEFINED = "undefined"


StyleProcessor = Callable[[Style | str], tuple[str, str]]


class CssStyle:
    """
    Style processor for browser-like consoles.

    Every styled span is wrapped in `%c` markers, while the matching CSS
    declarations are collected, in order, in the `styles` side-channel list.
    The joined text and the styles are meant to be passed together to a console
    which understands the `%c` convention.

    Examples:
        >>> css = CssStyle()
        >>> css(Style.NUMBER)
        ('%c', '%c')
        >>> css.styles
        ['color: yellow', 'color: unset']
    """

    STYLES: dict[str, tuple[str, str]] = {
        Style.DATE: ("color: magenta", "color: unset"),
        Style.HINT: ("color: cyan", "color: unset"),
        Style.NULL: ("font-weight: bold", "font-weight: unset"),
        Style.NUMBER: ("color: yellow", "color: unset"),
        Style.REGEXP: ("color: red", "color: unset"),
        Style.STRING: ("color: green", "color: unset"),
        Style.SYMBOL: ("color: green", "color: unset"),
        Style.UNDEFINED: ("color: lightgray", "color: unset"),
    }

    def __init__(self) -> None:
        self.styles: list[str] = []

    def __call__(self, style: Style | str) -> tuple[str, str]:
        declarations = self.STYLES.get(style)
        if declarations is None:
            return "", ""
        self.styles.extend(declarations)
        return "%c", "%c"


# Constants ------------------------------------------------------------------------------------------------------------

ANSI_RESET = "\x1b[m"

ANSI_STYLES: dict[str, str] = {
    Style.DATE: "\x1b[35m",  # magenta
    Style.HINT: "\x1b[36m",  # cyan
    Style.NULL: "\x1b[1m",  # bold
    Style.NUMBER: "\x1b[33m",  # yellow
    Style.REGEXP: "\x1b[31m",  # red
    Style.STRING: "\x1b[32m",  # green
    Style.SYMBOL: "\x1b[32m",  # green
    Style.UNDEFINED: "\x1b[38;5;8m",  # light black
}


# Methods --------------------------------------------------------------------------------------------------------------


def no_style(style: Style | str) -> tuple[str, str]:
    """Style processor writing no markup at all."""
    return "", ""


def ansi_style(style: Style | str) -> tuple[str, str]:
    """Style processor for terminals, using ANSI escape sequences."""
    code = ANSI_STYLES.get(style)
    if code is None:
        return "", ""
    return code, ANSI_RESET

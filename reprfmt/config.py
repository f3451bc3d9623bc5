"""
Formatting options and module-wide defaults.

FormatOptions holds every option recognized by the formatter. Module defaults
are used whenever a value is formatted without explicit options, and may be
changed with configure():

    >>> configure(preset="pretty", indent="    ")          # doctest: +SKIP
    >>> get_options().pretty                                # doctest: +SKIP
    True
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .styles import StyleProcessor, no_style

# Classes --------------------------------------------------------------------------------------------------------------

Preset = Literal["default", "compact", "pretty", "debug"]


@dataclass(frozen=True)
class FormatOptions:
    """
    Options recognized by the formatter.

    Attributes:
        pretty: When False (default) the value is formatted in a concise manner
            in a single line. When True the value is formatted over multiple lines
            whenever it gets too complex, with indentation, to aid in reading.
        indent: String used for a single level of indentation.
        depth: Starting depth. Counts towards limit_depth, and as a base
            indentation level.
        limit_depth: When set, structures opened deeper than this are elided
            from output. None means unbounded.
        max_complexity: Complexity at which a structure is formatted over multiple
            lines. Complexity of a structure is 1 plus the complexities of the
            structures nested in it. Defaults to 3 when pretty is set; ignored
            (unbounded) otherwise.
        style: Style processor, mapping style tags to (enter, exit) markup. None
            is the same as no_style.

    Raises:
        TypeError: If an option has an invalid type.
        ValueError: If an option has an invalid value.

    Examples:
        >>> FormatOptions.pretty_options().merge(indent="\\t").indent
        '\\t'
    """

    pretty: bool = False
    indent: str = "  "
    depth: int = 0
    limit_depth: int | None = None
    max_complexity: int | None = None
    style: StyleProcessor | None = field(default=no_style, compare=False)

    def __post_init__(self) -> None:
        """Validate option types and values."""
        if self.style is None:
            object.__setattr__(self, "style", no_style)
        if not isinstance(self.pretty, bool):
            raise TypeError(f"pretty must be a bool, got {type(self.pretty).__name__}")
        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be a str, got {type(self.indent).__name__}")

        for name in ("depth", "limit_depth", "max_complexity"):
            val = getattr(self, name)
            if val is None and name != "depth":
                continue
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f"{name} must be an int, got {type(val).__name__}")
            if val < 0:
                raise ValueError(f"{name} must be >= 0, but got {val}")

        if self.max_complexity is not None and self.max_complexity < 1:
            raise ValueError(f"max_complexity must be >= 1, but got {self.max_complexity}")
        if not callable(self.style):
            raise TypeError(f"style must be callable, got {type(self.style).__name__}")

    # Class Methods ------------------------------------

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the names of all recognized options."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def compact(cls) -> Self:
        """Single-line output, no styling."""
        return cls(pretty=False)

    @classmethod
    def pretty_options(cls) -> Self:
        """Multi-line output for structures of complexity 3 or more."""
        return cls(pretty=True)

    @classmethod
    def debug(cls) -> Self:
        """Multi-line output for every non-trivial structure, elided below depth 8."""
        return cls(pretty=True, max_complexity=2, limit_depth=8)

    @classmethod
    def preset(cls, name: Preset) -> Self:
        """
        Create options from a preset name.

        Raises:
            ValueError: If the preset is unknown.
        """
        presets = {
            "default": cls,
            "compact": cls.compact,
            "pretty": cls.pretty_options,
            "debug": cls.debug,
        }
        if name not in presets:
            raise ValueError(f"unknown preset {name!r}, expected one of: {', '.join(presets)}")
        return presets[name]()

    # Methods and Properties ---------------------

    @property
    def effective_max_complexity(self) -> int | None:
        """Complexity threshold actually applied when flushing."""
        if not self.pretty:
            return None
        return 3 if self.max_complexity is None else self.max_complexity

    def merge(self, options: abc.Mapping[str, Any] | None = None, /, **overrides: Any) -> Self:
        """
        Return a copy of these options with some of them replaced.

        Args:
            options: A mapping of option names to values.
            **overrides: Option values, applied after `options`.

        Raises:
            TypeError: If any name is not a recognized option.
        """
        changes = dict(options or {})
        changes.update(overrides)
        check_names(changes)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return options as a dictionary."""
        return {name: getattr(self, name) for name in self.names()}


# Module defaults ------------------------------------------------------------------------------------------------------

_options = FormatOptions()


# Methods --------------------------------------------------------------------------------------------------------------


def check_names(options: abc.Mapping[str, Any]) -> None:
    """
    Ensure all keys of a mapping are recognized option names.

    Raises:
        TypeError: Listing every unrecognized name.
    """
    known = FormatOptions.names()
    invalid = [str(name) for name in options if name not in known]
    if invalid:
        raise TypeError("Invalid options to Formatter: " + ", ".join(invalid))


def configure(preset: Preset | None = None, **overrides: Any) -> FormatOptions:
    """
    Change module-wide default options.

    Args:
        preset: If given, start from this preset instead of the current defaults.
        **overrides: Individual option values.

    Returns:
        The new default options.

    Raises:
        TypeError: If an option name is not recognized or has an invalid type.
        ValueError: If the preset is unknown or an option has an invalid value.
    """
    global _options

    base = FormatOptions.preset(preset) if preset is not None else _options
    _options = base.merge(**overrides)
    return _options


def get_options() -> FormatOptions:
    """Return module-wide default options."""
    return _options


def reset() -> FormatOptions:
    """Restore module-wide default options to FormatOptions()."""
    global _options

    _options = FormatOptions()
    return _options

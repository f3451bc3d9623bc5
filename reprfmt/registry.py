"""
Registry of custom representers.

A representer is a callable receiving the value and the active formatter, which
writes the value's representation through the formatter API:

    >>> @represents(Point)                                  # doctest: +SKIP
    ... def format_point(point, fmt):
    ...     fmt.write("Point(", str(point.x), ", ", str(point.y), ")")

Classes may also declare a representer themselves, as a method with the reserved
name `__represent__` taking the formatter as sole argument:

    >>> class Money:                                        # doctest: +SKIP
    ...     def __represent__(self, fmt):
    ...         fmt.write(f"{self.amount} {self.currency}")

The hook may also be a static method or a class method taking the formatter; it
is then bound to the value before the call.

The registry is process-wide. Representers are meant to be registered once, at
import time, and looked up by every formatting session.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .formatter import Formatter

logger = logging.getLogger(__name__)

# Constants ------------------------------------------------------------------------------------------------------------

REPRESENT = "__represent__"

Representer = Callable[[Any, "Formatter"], None]

_REGISTRY: dict[type, Representer] = {}


# Methods --------------------------------------------------------------------------------------------------------------


def register(typ: type, representer: Representer) -> Representer:
    """
    Register or override the representer of a type.

    The representer applies to instances of `typ` and of its subclasses, unless
    a subclass has a representer of its own.

    Args:
        typ: The type to represent.
        representer: A callable receiving (value, formatter).

    Returns:
        The representer, to allow use in decorators.

    Raises:
        TypeError: If typ is not a type or representer is not callable.
    """
    if not isinstance(typ, type):
        raise TypeError(f"typ must be a type, got {type(typ).__name__}")
    if not callable(representer):
        raise TypeError(f"representer must be callable, got {type(representer).__name__}")

    if typ in _REGISTRY:
        logger.debug("Overriding representer of %s", typ.__qualname__)
    else:
        logger.debug("Registering representer of %s", typ.__qualname__)

    _REGISTRY[typ] = representer
    return representer


def represents(*types: type) -> Callable[[Representer], Representer]:
    """
    Decorator registering a function as the representer of one or more types.

    Examples:
        >>> @represents(Celsius, Fahrenheit)                 # doctest: +SKIP
        ... def format_temperature(value, fmt):
        ...     fmt.write(str(value.degrees), "°")
    """

    def decorator(representer: Representer) -> Representer:
        for typ in types:
            register(typ, representer)
        return representer

    return decorator


def unregister(typ: type) -> Representer | None:
    """
    Remove the representer registered for exactly `typ`.

    Returns:
        The removed representer, or None if there was none.
    """
    if not isinstance(typ, type):
        raise TypeError(f"typ must be a type, got {type(typ).__name__}")

    representer = _REGISTRY.pop(typ, None)
    if representer is not None:
        logger.debug("Unregistered representer of %s", typ.__qualname__)
    return representer


def get_representer(cls: type) -> Representer | None:
    """
    Get the representer for instances of a class.

    Walks the class MRO, except `object` itself. For each class, a `__represent__`
    method defined in its body wins over a representer registered for it; the
    first class with either decides.

    Returns:
        A callable receiving (value, formatter), or None if there is none.
    """
    for base in cls.__mro__:
        if base is object:
            break

        hook = base.__dict__.get(REPRESENT)
        if isinstance(hook, (staticmethod, classmethod)):
            return _bind_hook(hook, cls)
        if callable(hook):
            return hook

        representer = _REGISTRY.get(base)
        if representer is not None:
            return representer

    return None


def registered_types() -> tuple[type, ...]:
    """Return all types with a registered representer, in registration order."""
    return tuple(_REGISTRY)


# Private Methods ------------------------------------------------------------------------------------------------------


def _bind_hook(hook: staticmethod | classmethod, owner: type) -> Representer:
    def represent(value: Any, fmt: "Formatter") -> None:
        hook.__get__(value, owner)(fmt)

    return represent

"""
Reference tracking for cycle-safe formatting.

Each composite value visited during a single formatting session is recorded by
identity. The first visit writes a source marker, which stays empty unless the
value is encountered again; every further visit writes a back-reference instead
of expanding the value a second time:

    >>> a = []
    >>> a.append(a)
    >>> format(a)                                   # doctest: +SKIP
    '#0 = [ #0# ]'

Reference numbers are assigned on the first repeated encounter, from a counter
owned by the tracker, so they are stable within a session and start from zero
in every session.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .fragments import Deferred, Styled
from .styles import Style

# Classes --------------------------------------------------------------------------------------------------------------


class Reference:
    """
    Reference entry of a single composite value.

    Attributes:
        count: How many times the value was encountered again after its first visit.
        number: Reference number, assigned on the first repeated encounter.
    """

    __slots__ = ("_tracker", "count", "number")

    def __init__(self, tracker: "ReferenceTracker") -> None:
        self._tracker = tracker
        self.count = 0
        self.number: int | None = None

    def __repr__(self) -> str:
        return f"Reference(count={self.count}, number={self.number})"

    @property
    def source(self) -> Deferred:
        """
        Fragment to write in front of the value's first representation.

        Resolves to `#<n> = ` if the value was referenced again before the buffer
        is flushed, or to nothing otherwise.
        """
        return Deferred(self._source)

    def add_ref(self) -> Styled:
        """Record another encounter and return the back-reference fragment."""
        self.count += 1
        if self.number is None:
            self.number = self._tracker.next_number()
        return Styled(Style.HINT, f"#{self.number}#")

    def _source(self) -> list:
        if self.count == 0:
            return []
        return [Styled(Style.HINT, f"#{self.number}"), " = "]


class ReferenceTracker:
    """
    Identity map of composite values visited during one formatting session.

    Values are tracked by `id()`, and kept alive by the tracker for the duration
    of the session so that identities cannot be reused.
    """

    __slots__ = ("_seen", "_counter")

    def __init__(self) -> None:
        self._seen: dict[int, tuple[Any, Reference]] = {}
        self._counter = 0

    def __contains__(self, value: Any) -> bool:
        return id(value) in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def get(self, value: Any) -> Reference | None:
        """Return the reference entry of a value, or None if not yet visited."""
        entry = self._seen.get(id(value))
        return entry[1] if entry is not None else None

    def visit(self, value: Any) -> tuple[Reference, bool]:
        """
        Record a visit of a composite value.

        Returns:
            A (reference, first_visit) pair. On the first visit the caller should
            write `reference.source` and format the value's contents; otherwise it
            should write `reference.add_ref()` instead.
        """
        ref = self.get(value)
        if ref is not None:
            return ref, False

        ref = Reference(self)
        self._seen[id(value)] = (value, ref)
        return ref, True

    def next_number(self) -> int:
        """Take the next reference number of this session."""
        number = self._counter
        self._counter += 1
        return number

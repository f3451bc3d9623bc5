"""
Buffers hold intermediate results of formatting.

A buffer contains not a formatted string itself, but rather all information
required to construct said string. This allows a single buffer to output its
contents in multiple ways depending on context.

Contents of a buffer are a sequence of fragments (see reprfmt.fragments). When
building a formatted string those fragments are concatenated. Some fragments
have multiple representations, from which one is selected based on context and
options.

Buffers may be nested. Nested buffers are flushed independently, but may affect
the layout of their parent buffer: a multi-line child makes its parent
multi-line, and children complexities add up in the parent.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .fragments import Fragment, HardBreak, SoftBreak, Styled, iter_lines
from .styles import StyleProcessor, no_style

# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class FlushOptions:
    """
    Options controlling how a buffer is flushed.

    Attributes:
        depth: How deeply nested is the flushed buffer. Line breaks embedded in
            literal text are indented to this depth.
        indent: String used for a single level of indentation.
        max_complexity: Complexity at or above which a buffer is rendered over
            multiple lines. None means unbounded.
        style: Style processor resolving styled fragments to markup.
    """

    depth: int = 0
    indent: str = "  "
    max_complexity: int | float | None = None
    style: StyleProcessor = field(default=no_style)


@dataclass(frozen=True)
class FlushResult:
    """
    Result of flushing a buffer.

    Attributes:
        text: Formatted contents of the buffer.
        complexity: 1 plus the sum of complexities of directly nested buffers.
        multiline: Whether the buffer was rendered over multiple lines.
    """

    text: str
    complexity: int
    multiline: bool


class Buffer:
    """
    An ordered, append-only sequence of fragments.

    Examples:
        >>> buf = Buffer()
        >>> buf.push("{")
        >>> buf.push(SoftBreak(" ", 1))
        >>> buf.push("a: 1")
        >>> buf.push(SoftBreak(" ", 0))
        >>> buf.push("}")
        >>> buf.flush().text
        '{ a: 1 }'
        >>> buf.flush(FlushOptions(max_complexity=0)).text
        '{\\n  a: 1\\n}'
    """

    __slots__ = ("_fragments",)

    def __init__(self) -> None:
        self._fragments: list[Fragment] = []

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        return f"<Buffer: {len(self._fragments)} fragments>"

    def push(self, fragment: Fragment) -> None:
        """Push a fragment at the end of this buffer."""
        self._fragments.append(fragment)

    def extend(self, fragments: Any) -> None:
        """Push several fragments at the end of this buffer."""
        self._fragments.extend(fragments)

    def flush(self, options: FlushOptions | None = None) -> FlushResult:
        """
        Resolve this buffer into text.

        Fragments are walked depth-first, left to right. Nested buffers are
        flushed first, one level deeper, and spliced in as opaque text; deferred
        fragments are called and their results processed in place; styled
        fragments are wrapped in markup from the style processor. Only once the
        whole content is known is the single-line or multi-line layout decided,
        and breaks rendered accordingly.

        Args:
            options: Flush options. Defaults to FlushOptions().

        Returns:
            FlushResult with the text, complexity and layout of this buffer.

        Raises:
            TypeError: If a fragment of unsupported type was pushed.
        """
        opt = options or FlushOptions()
        pieces: list[str | HardBreak | SoftBreak] = []
        complexity = 0
        multiline = False

        def process(fragment: Any) -> None:
            nonlocal complexity, multiline

            if isinstance(fragment, str):
                for line, has_break in iter_lines(fragment):
                    if line:
                        pieces.append(line)
                    if has_break:
                        pieces.append(HardBreak(opt.depth))
                        multiline = True
            elif isinstance(fragment, Buffer):
                result = fragment.flush(replace(opt, depth=opt.depth + 1))
                complexity += result.complexity
                multiline = multiline or result.multiline
                pieces.append(result.text)
            elif isinstance(fragment, (list, tuple)):
                for item in fragment:
                    process(item)
            elif isinstance(fragment, Styled):
                enter, leave = opt.style(fragment.style)
                pieces.append(enter)
                process(fragment.value)
                pieces.append(leave)
            elif isinstance(fragment, HardBreak):
                multiline = True
                pieces.append(fragment)
            elif isinstance(fragment, SoftBreak):
                pieces.append(fragment)
            elif callable(fragment):
                process(fragment())
            elif fragment is None:
                return
            else:
                raise TypeError(f"unsupported fragment type: {type(fragment).__name__}")

        process(self._fragments)

        if _is_finite(opt.max_complexity) and complexity >= opt.max_complexity:
            multiline = True

        out: list[str] = []
        for piece in pieces:
            if isinstance(piece, str):
                out.append(piece)
            elif multiline:
                out.append("\n" + opt.indent * piece.indent)
            elif isinstance(piece, SoftBreak):
                out.append(piece.text)

        return FlushResult(text="".join(out), complexity=complexity + 1, multiline=multiline)


# Private Methods ------------------------------------------------------------------------------------------------------


def _is_finite(value: int | float | None) -> bool:
    return value is not None and not math.isinf(value)

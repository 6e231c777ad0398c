"""Span records produced by the qmdspan scanners.

All records are frozen dataclasses with slots. They are read-only
projections of one text snapshot: once the text changes, every span from
the old scan is stale and a fresh scan is required.

Record Hierarchy:
TextSpan (half-open character range)
├── CodeBlock        fenced code block + language tag
├── ContainerMarker  ::: line with weight and opener/closer flag
├── MatchedPair      opener/closer pair with nesting depth
├── UnmatchedMarker  marker without a structural partner
├── MathSpan         inline or display math
├── HeaderSpan       header line with level
└── FrontmatterSpan  leading metadata block
ScanResult (all categories for one snapshot)

Thread Safety:
All records are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Half-open ``[start, end)`` character range into a source text.

    Examples:
        >>> span = TextSpan(4, 9)
        >>> span.slice("### Hello")
        'Hello'
        >>> len(span)
        5

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            msg = f"span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"span end {self.end} precedes start {self.start}"
            raise ValueError(msg)

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """Return True if ``start <= offset <= end``.

        The end is inclusive so a cursor sitting just after the last
        character of a block still counts as inside it.
        """
        return self.start <= offset <= self.end

    def overlaps(self, other: "TextSpan") -> bool:
        """Return True if the two half-open ranges share any character."""
        return self.start < other.end and other.start < self.end

    def slice(self, text: str) -> str:
        """Return the covered text."""
        return text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code block.

    Markdown: ```{python} (interactive) or ```python (passive)

    Attributes:
        span: Opening fence line start to closing fence line end, or to
            end-of-document when unclosed
        language: Raw language tag, case preserved
        interactive: True for the braced attribute form
        body: Lines strictly between the fence lines
        closed: False when the block runs to end-of-document

    """

    span: TextSpan
    language: str
    interactive: bool
    body: TextSpan
    closed: bool = True


@dataclass(frozen=True, slots=True)
class ContainerMarker:
    """Container marker line such as ``::: {.callout-note}`` or ``:::``.

    ``weight`` is the glyph run length; only equal weights can pair.

    """

    line_span: TextSpan
    weight: int
    is_opening: bool


@dataclass(frozen=True, slots=True)
class MatchedPair:
    """An opener and the closer that matched it.

    ``depth`` is the nesting depth when the opener was pushed (0 = outermost).

    """

    opener_line: TextSpan
    closer_line: TextSpan
    weight: int
    depth: int

    @property
    def span(self) -> TextSpan:
        """Range from the opener line start to the closer line end."""
        return TextSpan(self.opener_line.start, self.closer_line.end)


@dataclass(frozen=True, slots=True)
class UnmatchedMarker:
    """Container marker with no structural partner.

    Either a closer with no compatible opener on top of the stack, or an
    opener still open at end-of-document.

    """

    line_span: TextSpan
    weight: int
    is_opening: bool
    reason: Literal["unmatched"] = "unmatched"


class MathKind(Enum):
    """Math span flavour."""

    INLINE = "inline"  # $...$
    DISPLAY = "display"  # $$...$$


@dataclass(frozen=True, slots=True)
class MathSpan:
    """Math span including its delimiters."""

    span: TextSpan
    kind: MathKind


@dataclass(frozen=True, slots=True)
class HeaderSpan:
    """Header line; ``level`` is the number of leading header glyphs."""

    span: TextSpan
    level: int


@dataclass(frozen=True, slots=True)
class FrontmatterSpan:
    """Frontmatter block.

    Attributes:
        span: Opening delimiter line start to the start of the line after
            the closing delimiter
        body: Text between the two delimiter lines

    """

    span: TextSpan
    body: TextSpan


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Every structural category recovered from one text snapshot.

    All tuples are in ascending start order except ``pairs`` (closing order)
    and ``unmatched`` (unmatched closers first, then unclosed openers).

    """

    source_length: int
    code_blocks: tuple[CodeBlock, ...] = ()
    markers: tuple[ContainerMarker, ...] = ()
    pairs: tuple[MatchedPair, ...] = ()
    unmatched: tuple[UnmatchedMarker, ...] = ()
    math: tuple[MathSpan, ...] = ()
    headers: tuple[HeaderSpan, ...] = ()
    frontmatter: FrontmatterSpan | None = None

    @property
    def interactive_blocks(self) -> tuple[CodeBlock, ...]:
        """Code blocks that can be sent to a session."""
        return tuple(block for block in self.code_blocks if block.interactive)


__all__ = [
    "CodeBlock",
    "ContainerMarker",
    "FrontmatterSpan",
    "HeaderSpan",
    "MatchedPair",
    "MathKind",
    "MathSpan",
    "ScanResult",
    "TextSpan",
    "UnmatchedMarker",
]

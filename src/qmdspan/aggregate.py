"""Code aggregation for bulk dispatch.

Collects the bodies of code blocks before or after a cursor and joins them
per language, so "run everything above point" becomes one payload per
session.

Example:
    >>> from qmdspan.scanners import scan_code_blocks
    >>> text = "```{python}\\na\\n```\\n\\n```{python}\\nb\\n```\\n"
    >>> code = aggregate_code(text, scan_code_blocks(text))
    >>> code.sources, code.counts
    ({'python': 'a\\nb'}, {'python': 2})

"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from qmdspan.spans import CodeBlock


class Position(Enum):
    """Where a block sits relative to a reference offset."""

    BEFORE = "before"  # block ends strictly before the offset
    AFTER = "after"  # block starts strictly after the offset

    def accepts(self, block: CodeBlock, offset: int) -> bool:
        if self is Position.BEFORE:
            return block.span.end < offset
        return block.span.start > offset


@dataclass(frozen=True, slots=True)
class AggregatedCode:
    """Combined code per language.

    Attributes:
        sources: Language -> block bodies joined with a newline, languages in
            first-seen order
        counts: Language -> number of blocks combined

    """

    sources: dict[str, str] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.sources)

    def languages(self) -> tuple[str, ...]:
        return tuple(self.sources)

    @property
    def total_blocks(self) -> int:
        return sum(self.counts.values())


def block_text(text: str, block: CodeBlock) -> str:
    """Return the lines strictly between the block's fence lines."""
    return block.body.slice(text)


def blocks_relative_to(
    blocks: Iterable[CodeBlock], offset: int, position: Position
) -> Iterator[CodeBlock]:
    """Yield blocks strictly before or strictly after ``offset``."""
    return (block for block in blocks if position.accepts(block, offset))


def aggregate_code(
    text: str,
    blocks: Iterable[CodeBlock],
    *,
    offset: int | None = None,
    position: Position | None = None,
    key: Callable[[str], str] | None = None,
) -> AggregatedCode:
    """Group block bodies by language, in document order.

    Args:
        text: The text the blocks were scanned from
        blocks: CodeBlocks in document order
        offset: Reference offset for ``position`` filtering
        position: Keep only blocks before/after ``offset``; all blocks if None
        key: Maps a block's language tag to its group (the raw tag if None).
            Tags sharing a key are joined together in document order.

    Returns:
        AggregatedCode with joined sources and per-language counts.

    Raises:
        ValueError: If only one of ``offset`` and ``position`` is given.
    """
    if (offset is None) != (position is None):
        msg = "offset and position must be given together"
        raise ValueError(msg)
    if position is not None and offset is not None:
        blocks = blocks_relative_to(blocks, offset, position)

    grouped: dict[str, list[str]] = {}
    for block in blocks:
        language = key(block.language) if key is not None else block.language
        grouped.setdefault(language, []).append(block_text(text, block))

    return AggregatedCode(
        sources={language: "\n".join(bodies) for language, bodies in grouped.items()},
        counts={language: len(bodies) for language, bodies in grouped.items()},
    )


__all__ = [
    "AggregatedCode",
    "Position",
    "aggregate_code",
    "block_text",
    "blocks_relative_to",
]

"""Code block lookup by cursor offset."""

from collections.abc import Iterable

from qmdspan.spans import CodeBlock


def find_block_at(blocks: Iterable[CodeBlock], offset: int) -> CodeBlock | None:
    """Return the code block containing ``offset``, or None.

    Containment is inclusive at both ends of the block span. Blocks from
    one scan never overlap; should a caller pass overlapping blocks anyway,
    the last one in iteration order wins.

    Example:
        >>> from qmdspan.scanners import scan_code_blocks
        >>> text = "intro\\n```{r}\\nx <- 1\\n```\\n"
        >>> find_block_at(scan_code_blocks(text), 14).language
        'r'
        >>> find_block_at(scan_code_blocks(text), 2) is None
        True
    """
    found: CodeBlock | None = None
    for block in blocks:
        if block.span.contains(offset):
            found = block
    return found


def find_interactive_block_at(blocks: Iterable[CodeBlock], offset: int) -> CodeBlock | None:
    """Like find_block_at, restricted to blocks that can go to a session."""
    return find_block_at((block for block in blocks if block.interactive), offset)


__all__ = ["find_block_at", "find_interactive_block_at"]

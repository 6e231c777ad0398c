"""Tests for the block locator."""

from qmdspan.locator import find_block_at, find_interactive_block_at
from qmdspan.scanners import scan_code_blocks
from qmdspan.spans import CodeBlock, TextSpan

TEXT = "intro\n```{python}\nx = 1\n```\nmiddle\n```r\ny\n```\n"


class TestFindBlockAt:
    def test_inside_body(self) -> None:
        blocks = scan_code_blocks(TEXT)
        offset = TEXT.index("x = 1")
        block = find_block_at(blocks, offset)
        assert block is not None
        assert block.language == "python"

    def test_boundaries_are_inclusive(self) -> None:
        blocks = scan_code_blocks(TEXT)
        first = blocks[0]
        assert find_block_at(blocks, first.span.start) is first
        assert find_block_at(blocks, first.span.end) is first

    def test_outside_any_block(self) -> None:
        blocks = scan_code_blocks(TEXT)
        assert find_block_at(blocks, 0) is None
        assert find_block_at(blocks, TEXT.index("middle") + 2) is None

    def test_no_blocks(self) -> None:
        assert find_block_at((), 3) is None

    def test_last_match_wins(self) -> None:
        a = CodeBlock(TextSpan(0, 10), "python", True, TextSpan(2, 8))
        b = CodeBlock(TextSpan(5, 20), "r", True, TextSpan(7, 18))
        assert find_block_at([a, b], 7) is b
        assert find_block_at([b, a], 7) is a

    def test_unclosed_block_reaches_eof(self) -> None:
        text = "```{python}\nprint(1)\n"
        blocks = scan_code_blocks(text)
        assert find_block_at(blocks, len(text)) is blocks[0]


class TestFindInteractiveBlockAt:
    def test_passive_blocks_are_skipped(self) -> None:
        blocks = scan_code_blocks(TEXT)
        offset = TEXT.index("y\n")
        assert find_block_at(blocks, offset) is not None
        assert find_interactive_block_at(blocks, offset) is None

"""Tests for span records."""

import pytest

from qmdspan.spans import CodeBlock, MatchedPair, ScanResult, TextSpan


class TestTextSpan:
    def test_len_and_slice(self) -> None:
        span = TextSpan(4, 9)
        assert len(span) == 5
        assert span.slice("### Hello") == "Hello"

    def test_empty_span_is_valid(self) -> None:
        assert len(TextSpan(3, 3)) == 0

    @pytest.mark.parametrize("start,end", [(-1, 2), (5, 4)])
    def test_invalid_bounds(self, start: int, end: int) -> None:
        with pytest.raises(ValueError):
            TextSpan(start, end)

    def test_contains_is_inclusive(self) -> None:
        span = TextSpan(2, 5)
        assert span.contains(2)
        assert span.contains(5)
        assert not span.contains(1)
        assert not span.contains(6)

    def test_overlaps_is_half_open(self) -> None:
        assert TextSpan(0, 5).overlaps(TextSpan(4, 8))
        assert not TextSpan(0, 5).overlaps(TextSpan(5, 8))
        assert not TextSpan(0, 0).overlaps(TextSpan(0, 3))

    def test_frozen(self) -> None:
        span = TextSpan(0, 1)
        with pytest.raises(AttributeError):
            span.start = 3  # type: ignore[misc]


class TestRecords:
    def test_matched_pair_span(self) -> None:
        pair = MatchedPair(TextSpan(0, 8), TextSpan(20, 23), weight=3, depth=0)
        assert pair.span == TextSpan(0, 23)

    def test_code_block_defaults_closed(self) -> None:
        block = CodeBlock(TextSpan(0, 10), "python", True, TextSpan(4, 6))
        assert block.closed is True

    def test_scan_result_interactive_blocks(self) -> None:
        a = CodeBlock(TextSpan(0, 10), "python", True, TextSpan(4, 6))
        b = CodeBlock(TextSpan(11, 20), "sql", False, TextSpan(15, 16))
        result = ScanResult(source_length=20, code_blocks=(a, b))
        assert result.interactive_blocks == (a,)

"""Tests for container marker scanning and classification."""

import pytest

from qmdspan import ScanConfig
from qmdspan.classifier import classify_line, classify_marker, is_opening
from qmdspan.scanners import iter_marker_lines, scan_markers
from qmdspan.spans import TextSpan


class TestIsOpening:
    """Opener/closer decision from trailing content."""

    @pytest.mark.parametrize(
        "trailing",
        [
            " {.callout}",
            " {.callout-note title=\"Hi\"}",
            " columns",
            "{#fig-1}",
            " {}",
            " <!-- a --> {.b}",
            " <!-- a --> <!-- b -->",
        ],
    )
    def test_openers(self, trailing: str) -> None:
        assert is_opening(trailing) is True

    @pytest.mark.parametrize(
        "trailing",
        [
            "",
            "   ",
            "\t",
            " <!-- note -->",
            "<!--end-->",
            "  <!-- end of callout -->  ",
            " <!---->",
        ],
    )
    def test_closers(self, trailing: str) -> None:
        assert is_opening(trailing) is False

    def test_unterminated_comment_is_an_opener(self) -> None:
        assert is_opening(" <!-- note") is True


class TestClassifyLine:
    def test_comment_closer(self) -> None:
        marker = classify_line("::: <!-- note -->")
        assert marker is not None
        assert marker.is_opening is False
        assert marker.weight == 3

    def test_callout_opener(self) -> None:
        marker = classify_line("::: {.callout}")
        assert marker is not None
        assert marker.is_opening is True

    def test_weight_counts_the_whole_run(self) -> None:
        marker = classify_line("::::::")
        assert marker is not None
        assert marker.weight == 6
        assert marker.is_opening is False

    @pytest.mark.parametrize("line", ["::", ": : :", "text ::: {.a}", ""])
    def test_not_a_marker(self, line: str) -> None:
        assert classify_line(line) is None

    def test_span_is_relative_to_line(self) -> None:
        marker = classify_line(":::: {.columns}\n")
        assert marker is not None
        assert marker.line_span == TextSpan(0, 15)

    def test_classify_marker_does_not_look_at_neighbours(self) -> None:
        span = TextSpan(10, 13)
        assert classify_marker(span, 3, "").is_opening is False
        assert classify_marker(span, 3, " {.x}").is_opening is True


class TestScanMarkers:
    def test_document_order_and_spans(self) -> None:
        text = "::: {.a}\nbody\n:::: {.b}\n::::\n:::\n"
        markers = scan_markers(text)

        assert [(m.weight, m.is_opening) for m in markers] == [
            (3, True),
            (4, True),
            (4, False),
            (3, False),
        ]
        assert [m.line_span.slice(text) for m in markers] == [
            "::: {.a}",
            ":::: {.b}",
            "::::",
            ":::",
        ]

    def test_markers_must_start_the_line(self) -> None:
        assert scan_markers("  ::: {.a}\n:: \nx ::: y\n") == ()

    def test_trailing_text_is_reported(self) -> None:
        lines = list(iter_marker_lines("::: {.note} extra\n"))
        assert lines == [(TextSpan(0, 17), 3, " {.note} extra")]

    def test_last_line_without_newline(self) -> None:
        text = "::: {.a}\n:::"
        markers = scan_markers(text)
        assert markers[-1].line_span == TextSpan(9, 12)

    def test_custom_marker_glyph(self) -> None:
        config = ScanConfig(marker_glyph="%")
        markers = scan_markers("%%% {.a}\n::: {.b}\n%%%\n", config)
        assert [(m.weight, m.is_opening) for m in markers] == [(3, True), (3, False)]

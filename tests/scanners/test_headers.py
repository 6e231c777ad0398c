"""Tests for the header scanner."""

import pytest

from qmdspan.scanners import scan_headers


class TestScanHeaders:
    def test_levels(self) -> None:
        text = "# One\n\n## Two\n\n###### Six\n"
        headers = scan_headers(text)
        assert [h.level for h in headers] == [1, 2, 6]
        assert [h.span.slice(text) for h in headers] == ["# One", "## Two", "###### Six"]

    def test_level_is_not_capped(self) -> None:
        assert [h.level for h in scan_headers("######## Deep\n")] == [8]

    @pytest.mark.parametrize("line", ["#nospace", " # indented", "text # not", "#"])
    def test_not_headers(self, line: str) -> None:
        assert scan_headers(line) == ()

    def test_empty_title(self) -> None:
        headers = scan_headers("## \n")
        assert len(headers) == 1
        assert headers[0].level == 2

    def test_code_comments_are_reported(self) -> None:
        """The header pass does not know about code blocks."""
        text = "```{python}\n# comment\n```\n"
        assert [h.level for h in scan_headers(text)] == [1]

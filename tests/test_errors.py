"""Error hierarchy and malformed input handling.

Scanning is total: malformed markup produces data, never exceptions.
"""

import pytest

from qmdspan import scan
from qmdspan.errors import ConfigError, DispatchError, QmdspanError, UnknownLanguageError


class TestErrorFormatting:
    def test_config_error(self) -> None:
        err = ConfigError("depth_cycle", "must be >= 1")
        assert "depth_cycle" in str(err)
        assert err.field == "depth_cycle"
        assert isinstance(err, QmdspanError)

    def test_unknown_language_lists_known(self) -> None:
        err = UnknownLanguageError("cobol", ["r", "python"])
        assert "cobol" in str(err)
        assert "python, r" in str(err)
        assert err.known == ("python", "r")

    def test_unknown_language_without_known(self) -> None:
        assert str(UnknownLanguageError("cobol")) == "No session command for language 'cobol'"

    def test_dispatch_error(self) -> None:
        err = DispatchError("r", "pipe closed")
        assert str(err) == "Session 'r': pipe closed"
        assert isinstance(err, QmdspanError)


class TestMalformedInput:
    @pytest.mark.parametrize(
        "text",
        [
            "```{python",
            "```{}\n```",
            ":::\n:::\n:::",
            "::: {.a}\n:::: {.b}\n:::\n",
            "$$ never closed",
            "$",
            "---\n---\n---",
            "#",
            "\x00\x01:::\n",
            "```{python}\n```{r}\n",
        ],
    )
    def test_scan_never_raises(self, text: str) -> None:
        result = scan(text)
        assert result.source_length == len(text)

    def test_unbalanced_markers_are_data(self) -> None:
        result = scan(":::\n:::\n:::")
        assert result.pairs == ()
        assert len(result.unmatched) == 3

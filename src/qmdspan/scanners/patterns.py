"""Delimiter regexes, compiled once per ScanConfig.

All line-oriented patterns use ``re.MULTILINE`` so ``^``/``$`` anchor at line
boundaries. Searches resume at line starts, where ``^`` still matches.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from qmdspan.config import ScanConfig


@dataclass(frozen=True, slots=True)
class ScanPatterns:
    """Compiled patterns for one configuration.

    Attributes:
        code_open: Interactive (``ilang``) or passive (``plang``) fence opener
        code_close: Bare fence line
        marker_line: Container marker line (``glyphs``, ``trailing``)
        display_math: Doubled math glyph pair, non-greedy, spans lines
        inline_math: Single math glyph pair on one line
        header_line: Header line (``glyphs``)
        frontmatter_line: Frontmatter delimiter line

    """

    code_open: re.Pattern[str]
    code_close: re.Pattern[str]
    marker_line: re.Pattern[str]
    display_math: re.Pattern[str]
    inline_math: re.Pattern[str]
    header_line: re.Pattern[str]
    frontmatter_line: re.Pattern[str]


@lru_cache(maxsize=16)
def patterns_for(config: ScanConfig) -> ScanPatterns:
    """Compile (or fetch cached) patterns for ``config``."""
    fence = re.escape(config.fence_glyph)
    marker = re.escape(config.marker_glyph)
    math = re.escape(config.math_glyph)
    header = re.escape(config.header_glyph)
    delimiter = re.escape(config.frontmatter_delimiter)

    code_open = re.compile(
        rf"^{fence}{{3,}}"
        r"(?:"
        # ```{python} / ```{r echo=FALSE} / ```{python, eval=false}
        r"\{[ \t]*(?P<ilang>\w[^\s,}]*)[^}\n]*\}"
        r"|"
        # ```python / ```c++ title="x"
        r"(?P<plang>\w[\w+#.\-]*)(?:[ \t][^\n]*?)?"
        r")[ \t\r]*$",
        re.MULTILINE,
    )
    return ScanPatterns(
        code_open=code_open,
        code_close=re.compile(rf"^{fence}{{3,}}[ \t\r]*$", re.MULTILINE),
        marker_line=re.compile(
            rf"^(?P<glyphs>{marker}{{3,}})(?P<trailing>[^\n]*)$", re.MULTILINE
        ),
        display_math=re.compile(rf"{math}{math}(?P<body>.*?){math}{math}", re.DOTALL),
        inline_math=re.compile(
            rf"(?<!{math}){math}(?!{math})(?P<body>[^{math}\n]+){math}(?!{math})"
        ),
        header_line=re.compile(rf"^(?P<glyphs>{header}+) [^\n]*", re.MULTILINE),
        frontmatter_line=re.compile(rf"^{delimiter}[ \t\r]*$", re.MULTILINE),
    )


__all__ = ["ScanPatterns", "patterns_for"]

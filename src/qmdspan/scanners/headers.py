"""Header line scanner."""

from qmdspan.config import ScanConfig, resolve_config
from qmdspan.scanners.patterns import patterns_for
from qmdspan.spans import HeaderSpan, TextSpan


def scan_headers(text: str, config: ScanConfig | None = None) -> tuple[HeaderSpan, ...]:
    """Scan lines starting with 1+ header glyphs followed by a space.

    The level is the glyph count and is not capped. Lines inside code
    blocks are not excluded.

    Example:
        >>> [h.level for h in scan_headers("# Title\\n\\n### Part\\n#nope\\n")]
        [1, 3]
    """
    patterns = patterns_for(resolve_config(config))
    return tuple(
        HeaderSpan(TextSpan(match.start(), match.end()), len(match.group("glyphs")))
        for match in patterns.header_line.finditer(text)
    )


__all__ = ["scan_headers"]

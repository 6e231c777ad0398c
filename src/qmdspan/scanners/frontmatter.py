"""Frontmatter block scanner."""

from qmdspan.config import ScanConfig, resolve_config
from qmdspan.scanners.patterns import patterns_for
from qmdspan.spans import FrontmatterSpan, TextSpan


def scan_frontmatter(text: str, config: ScanConfig | None = None) -> FrontmatterSpan | None:
    """Find the frontmatter block at the start of the document.

    The first line after any leading whitespace must be exactly the
    delimiter (trailing whitespace allowed) and a later line must close it.
    Without a closing delimiter there is no frontmatter.

    Returns:
        FrontmatterSpan whose span ends at the start of the line after the
        closing delimiter, or None.

    Example:
        >>> fm = scan_frontmatter("---\\ntitle: x\\n---\\nBody\\n")
        >>> fm.span, fm.body
        (TextSpan(start=0, end=17), TextSpan(start=4, end=12))
    """
    config = resolve_config(config)
    patterns = patterns_for(config)
    text_len = len(text)

    start = text_len - len(text.lstrip())
    if start == text_len:
        return None

    # Leading whitespace on the delimiter line itself is not allowed
    line_start = text.rfind("\n", 0, start) + 1
    if line_start != start:
        return None

    opener = patterns.frontmatter_line.match(text, start)
    if opener is None or opener.end() >= text_len:
        return None

    body_start = opener.end() + 1
    closer = patterns.frontmatter_line.search(text, body_start)
    if closer is None:
        return None

    end = closer.end() + 1 if closer.end() < text_len else closer.end()
    body_end = max(body_start, closer.start() - 1)
    return FrontmatterSpan(span=TextSpan(start, end), body=TextSpan(body_start, body_end))


__all__ = ["scan_frontmatter"]

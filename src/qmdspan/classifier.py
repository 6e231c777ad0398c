"""Container marker classification.

A marker line is an opener when it carries trailing content, such as a class
list (``::: {.callout-note}``) or a bare class name (``::: columns``). A line
whose only trailing content is an HTML comment annotates a closing fence
(``::: <!-- end note -->``) and is a closer, as is a bare glyph run.

Classification looks at one line at a time and never at its neighbours.
"""

import re

from qmdspan.config import ScanConfig, resolve_config
from qmdspan.spans import ContainerMarker, TextSpan

_HTML_COMMENT_ONLY = re.compile(r"<!--(?:(?!-->).)*-->", re.DOTALL)


def is_opening(trailing: str) -> bool:
    """Return True if ``trailing`` (text after the glyph run) marks an opener.

    Examples:
        >>> is_opening(" {.callout}")
        True
        >>> is_opening("  <!-- note -->  ")
        False
        >>> is_opening("")
        False
    """
    content = trailing.strip()
    if not content:
        return False
    return _HTML_COMMENT_ONLY.fullmatch(content) is None


def classify_marker(line_span: TextSpan, weight: int, trailing: str) -> ContainerMarker:
    """Build a ContainerMarker for one scanned marker line."""
    return ContainerMarker(line_span=line_span, weight=weight, is_opening=is_opening(trailing))


def classify_line(line: str, config: ScanConfig | None = None) -> ContainerMarker | None:
    """Classify a single line, or return None if it is not a marker line.

    The returned span is relative to ``line``.

    Example:
        >>> classify_line(":::: {.columns}")
        ContainerMarker(line_span=TextSpan(start=0, end=15), weight=4, is_opening=True)
    """
    glyph = resolve_config(config).marker_glyph
    line = line.rstrip("\n")
    weight = len(line) - len(line.lstrip(glyph))
    if weight < 3:
        return None
    return classify_marker(TextSpan(0, len(line)), weight, line[weight:])


__all__ = ["classify_line", "classify_marker", "is_opening"]

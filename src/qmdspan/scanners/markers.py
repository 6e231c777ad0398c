"""Container marker line scanner.

Finds every line made of 3+ marker glyphs, optionally followed by arbitrary
trailing text, and classifies each one as it goes.
"""

from collections.abc import Iterator

from qmdspan.classifier import classify_marker
from qmdspan.config import ScanConfig, resolve_config
from qmdspan.scanners.patterns import patterns_for
from qmdspan.spans import ContainerMarker, TextSpan


def iter_marker_lines(
    text: str, config: ScanConfig | None = None
) -> Iterator[tuple[TextSpan, int, str]]:
    """Yield ``(line_span, weight, trailing)`` for each marker line.

    ``line_span`` excludes the line's newline.
    """
    patterns = patterns_for(resolve_config(config))
    for match in patterns.marker_line.finditer(text):
        yield (
            TextSpan(match.start(), match.end()),
            len(match.group("glyphs")),
            match.group("trailing"),
        )


def scan_markers(text: str, config: ScanConfig | None = None) -> tuple[ContainerMarker, ...]:
    """Scan and classify all container marker lines in document order.

    Example:
        >>> [m.is_opening for m in scan_markers("::: {.note}\\nBody\\n:::\\n")]
        [True, False]
    """
    return tuple(
        classify_marker(line_span, weight, trailing)
        for line_span, weight, trailing in iter_marker_lines(text, config)
    )


__all__ = ["iter_marker_lines", "scan_markers"]

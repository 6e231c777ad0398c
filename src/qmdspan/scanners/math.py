"""Math span scanners.

Display math (``$$...$$``) and inline math (``$...$``) are found by two
independent passes. By default an inline span inside a display span is
reported by both passes; set ``ScanConfig.mask_display_math`` to have the
inline pass drop candidates that overlap display math.
"""

from bisect import bisect_right

from qmdspan.config import ScanConfig, resolve_config
from qmdspan.scanners.patterns import patterns_for
from qmdspan.spans import MathKind, MathSpan, TextSpan


def scan_display_math(text: str, config: ScanConfig | None = None) -> tuple[MathSpan, ...]:
    """Scan ``$$...$$`` spans.

    The first ``$$`` opens and the next ``$$`` closes, across lines. A
    trailing unpaired ``$$`` produces nothing.
    """
    patterns = patterns_for(resolve_config(config))
    return tuple(
        MathSpan(TextSpan(match.start(), match.end()), MathKind.DISPLAY)
        for match in patterns.display_math.finditer(text)
    )


def scan_inline_math(
    text: str,
    config: ScanConfig | None = None,
    *,
    display: tuple[MathSpan, ...] | None = None,
) -> tuple[MathSpan, ...]:
    """Scan ``$...$`` spans that stay on one line.

    Args:
        text: Full document text
        config: Scan configuration (active context config if None)
        display: Display spans to mask when ``mask_display_math`` is set;
            scanned on demand if None

    Returns:
        Inline MathSpans in document order.
    """
    config = resolve_config(config)
    patterns = patterns_for(config)
    spans = [
        TextSpan(match.start(), match.end()) for match in patterns.inline_math.finditer(text)
    ]

    if config.mask_display_math:
        if display is None:
            display = scan_display_math(text, config)
        starts = [m.span.start for m in display]
        spans = [span for span in spans if not _inside_any(span, display, starts)]

    return tuple(MathSpan(span, MathKind.INLINE) for span in spans)


def scan_math(text: str, config: ScanConfig | None = None) -> tuple[MathSpan, ...]:
    """Scan both math kinds, merged in start order (display first on ties)."""
    config = resolve_config(config)
    display = scan_display_math(text, config)
    inline = scan_inline_math(text, config, display=display)
    return tuple(
        sorted(
            (*display, *inline),
            key=lambda m: (m.span.start, m.kind is MathKind.INLINE),
        )
    )


def _inside_any(span: TextSpan, display: tuple[MathSpan, ...], starts: list[int]) -> bool:
    # Display spans are sorted and disjoint; only neighbours of the
    # insertion point can overlap.
    index = bisect_right(starts, span.start) - 1
    for candidate in display[max(index, 0) : index + 2]:
        if candidate.span.overlaps(span):
            return True
    return False


__all__ = ["scan_display_math", "scan_inline_math", "scan_math"]

"""Single-pass span scanners.

Each scanner is a pure function of ``(text, config)`` returning records in
ascending start order.

Scanners:
- code: fenced code blocks (interactive and passive)
- markers: container marker lines, classified
- math: display and inline math
- headers: header lines with level
- frontmatter: leading metadata block

"""

from qmdspan.scanners.code import iter_code_blocks, scan_code_blocks
from qmdspan.scanners.frontmatter import scan_frontmatter
from qmdspan.scanners.headers import scan_headers
from qmdspan.scanners.markers import iter_marker_lines, scan_markers
from qmdspan.scanners.math import scan_display_math, scan_inline_math, scan_math
from qmdspan.scanners.patterns import ScanPatterns, patterns_for

__all__ = [
    "ScanPatterns",
    "iter_code_blocks",
    "iter_marker_lines",
    "patterns_for",
    "scan_code_blocks",
    "scan_display_math",
    "scan_frontmatter",
    "scan_headers",
    "scan_inline_math",
    "scan_markers",
    "scan_math",
]

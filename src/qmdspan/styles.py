"""Style annotations for the decoration layer.

Turns a ScanResult into a flat, immutable list of annotations. The consumer
(an editor plugin) maps each annotation's ``face`` to a visual style and owns
applying it. Instead of mutating overlays in place, a consumer keeps the
previous annotation list, diffs it against a fresh one after each scan, and
clears/reapplies only what changed, keyed by category.

Example:
    >>> from qmdspan import scan
    >>> [a.face for a in annotate(scan("# Title\\n::: {.note}\\n:::\\n"))]
    ['qmd-header-1', 'qmd-div-0', 'qmd-div-0']

"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from qmdspan.config import get_scan_config
from qmdspan.spans import MathKind, ScanResult, TextSpan


class StyleCategory(Enum):
    """Decoration category; also the key for clearing a category at once."""

    FRONTMATTER = "frontmatter"
    CODE_BLOCK = "code"
    DIV = "div"
    DIV_UNMATCHED = "div-unmatched"
    MATH_INLINE = "math-inline"
    MATH_DISPLAY = "math-display"
    HEADER = "header"


@dataclass(frozen=True, slots=True)
class StyleAnnotation:
    """One styled range.

    Attributes:
        span: Range to style
        category: Decoration category
        variant: Header level, div depth bucket, or 0
        face: Style name ``qmd-<category>[-<variant>]``

    """

    span: TextSpan
    category: StyleCategory
    variant: int = 0

    @property
    def face(self) -> str:
        if self.category in (StyleCategory.HEADER, StyleCategory.DIV):
            return f"qmd-{self.category.value}-{self.variant}"
        return f"qmd-{self.category.value}"


def annotate(result: ScanResult, *, depth_cycle: int | None = None) -> tuple[StyleAnnotation, ...]:
    """Build style annotations for every category of a scan.

    Args:
        result: Fresh scan of the current text
        depth_cycle: Number of div depth styles before they repeat
            (``ScanConfig.depth_cycle`` if None)

    Returns:
        Annotations sorted by span start, then category order.
    """
    if depth_cycle is None:
        depth_cycle = get_scan_config().depth_cycle
    if depth_cycle < 1:
        msg = f"depth_cycle must be >= 1, got {depth_cycle}"
        raise ValueError(msg)

    annotations: list[StyleAnnotation] = []

    if result.frontmatter is not None:
        annotations.append(StyleAnnotation(result.frontmatter.span, StyleCategory.FRONTMATTER))

    annotations.extend(
        StyleAnnotation(block.span, StyleCategory.CODE_BLOCK) for block in result.code_blocks
    )

    for pair in result.pairs:
        bucket = pair.depth % depth_cycle
        annotations.append(StyleAnnotation(pair.opener_line, StyleCategory.DIV, bucket))
        annotations.append(StyleAnnotation(pair.closer_line, StyleCategory.DIV, bucket))

    annotations.extend(
        StyleAnnotation(marker.line_span, StyleCategory.DIV_UNMATCHED)
        for marker in result.unmatched
    )

    for math in result.math:
        category = (
            StyleCategory.MATH_DISPLAY if math.kind is MathKind.DISPLAY else StyleCategory.MATH_INLINE
        )
        annotations.append(StyleAnnotation(math.span, category))

    annotations.extend(
        StyleAnnotation(header.span, StyleCategory.HEADER, header.level)
        for header in result.headers
    )

    order = {category: index for index, category in enumerate(StyleCategory)}
    annotations.sort(key=lambda a: (a.span.start, order[a.category], a.span.end))
    return tuple(annotations)


def group_by_category(
    annotations: Iterable[StyleAnnotation],
) -> dict[StyleCategory, tuple[StyleAnnotation, ...]]:
    """Group annotations by category, keeping order within each group."""
    grouped: dict[StyleCategory, list[StyleAnnotation]] = {}
    for annotation in annotations:
        grouped.setdefault(annotation.category, []).append(annotation)
    return {category: tuple(items) for category, items in grouped.items()}


def diff_annotations(
    old: Iterable[StyleAnnotation], new: Iterable[StyleAnnotation]
) -> tuple[tuple[StyleAnnotation, ...], tuple[StyleAnnotation, ...]]:
    """Compute what to clear and what to apply after a rescan.

    Returns:
        ``(removed, added)``: annotations only in ``old`` and only in ``new``,
        each in input order.
    """
    old = tuple(old)
    new = tuple(new)
    old_set = set(old)
    new_set = set(new)
    removed = tuple(a for a in old if a not in new_set)
    added = tuple(a for a in new if a not in old_set)
    return removed, added


__all__ = [
    "StyleAnnotation",
    "StyleCategory",
    "annotate",
    "diff_annotations",
    "group_by_category",
]

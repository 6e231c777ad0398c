"""Nesting matcher for container markers.

Pairs openers with closers using one forward pass over the classified
markers and an explicit stack.

Algorithm:
    opener  -> push (marker index, depth); depth += 1
    closer  -> if the top frame has the same weight: pop, depth -= 1, emit
               a MatchedPair with the opener's depth at push time;
               otherwise the closer is unmatched and the stack is untouched
    EOF     -> every frame still on the stack is an unclosed opener

Matching is strictly LIFO by weight. A closer only ever looks at the top
frame; it never searches deeper, so ``:::`` cannot close a ``:::`` that sits
below an open ``::::``. Both stay open and are reported unmatched at EOF
unless closed properly.

Complexity:
    O(n) time, O(depth) extra space. Stack frames are integer indices into
    the marker tuple, so no marker records are copied.

"""

from collections.abc import Sequence
from dataclasses import dataclass

from qmdspan.spans import ContainerMarker, MatchedPair, UnmatchedMarker


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Output of the nesting matcher.

    Attributes:
        pairs: Matched pairs in the order their closers appear
        unmatched: Unmatched closers in document order, then unclosed
            openers in push order

    """

    pairs: tuple[MatchedPair, ...]
    unmatched: tuple[UnmatchedMarker, ...]

    @property
    def balanced(self) -> bool:
        """True when every marker found a partner."""
        return not self.unmatched

    def sorted_pairs(self) -> tuple[MatchedPair, ...]:
        """Pairs ordered by opener position (outermost first)."""
        return tuple(sorted(self.pairs, key=lambda pair: pair.opener_line.start))

    def max_depth(self) -> int:
        """Deepest matched nesting level, or -1 without pairs."""
        return max((pair.depth for pair in self.pairs), default=-1)


def match_markers(markers: Sequence[ContainerMarker]) -> MatchResult:
    """Pair classified markers given in document order.

    Args:
        markers: ContainerMarkers in document order

    Returns:
        MatchResult with pairs and unmatched markers.

    Example:
        >>> from qmdspan.scanners import scan_markers
        >>> result = match_markers(scan_markers("::: {.a}\\n:::: {.b}\\n::::\\n:::\\n"))
        >>> [(p.weight, p.depth) for p in result.pairs]
        [(4, 1), (3, 0)]
    """
    stack: list[int] = []
    depths: list[int] = []
    depth = 0
    pairs: list[MatchedPair] = []
    unmatched: list[UnmatchedMarker] = []

    for index, marker in enumerate(markers):
        if marker.is_opening:
            stack.append(index)
            depths.append(depth)
            depth += 1
            continue

        if stack and markers[stack[-1]].weight == marker.weight:
            opener = markers[stack.pop()]
            opened_at = depths.pop()
            depth -= 1
            pairs.append(
                MatchedPair(
                    opener_line=opener.line_span,
                    closer_line=marker.line_span,
                    weight=marker.weight,
                    depth=opened_at,
                )
            )
        else:
            unmatched.append(_unmatched(marker))

    unmatched.extend(_unmatched(markers[index]) for index in stack)
    return MatchResult(pairs=tuple(pairs), unmatched=tuple(unmatched))


def _unmatched(marker: ContainerMarker) -> UnmatchedMarker:
    return UnmatchedMarker(
        line_span=marker.line_span,
        weight=marker.weight,
        is_opening=marker.is_opening,
    )


__all__ = ["MatchResult", "match_markers"]

"""
qmdspan: structural span scanner for Quarto-flavoured Markdown

Recovers the structure an editor needs to decorate a ``.qmd`` buffer and to
send its code to interactive sessions: fenced code blocks with language tags,
``:::`` container markers paired by weight with nesting depth, inline and
display math, headers, and frontmatter. It is not a Markdown parser: there is
no AST, only spans into the text.

Quick Start:
    >>> from qmdspan import scan, find_block_at
    >>> result = scan("::: {.note}\\n```{python}\\nprint(1)\\n```\\n:::\\n")
    >>> result.code_blocks[0].language
    'python'
    >>> [(pair.weight, pair.depth) for pair in result.pairs]
    [(3, 0)]

    >>> # Or use the high-level Scanner class with its own config
    >>> from qmdspan import Scanner, ScanConfig
    >>> scanner = Scanner(ScanConfig(mask_display_math=True))
    >>> len(scanner.scan("$$ a $b$ $$").math)
    1

Every operation is a pure function of the text snapshot (and config); scan
again after the text changes.
"""

from qmdspan.aggregate import AggregatedCode, Position, aggregate_code, block_text
from qmdspan.cache import DictScanCache, ScanCache, hash_config, hash_content
from qmdspan.classifier import classify_line, classify_marker, is_opening
from qmdspan.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    resolve_config,
    scan_config_context,
    set_scan_config,
)
from qmdspan.dispatch import DispatchRequest, Dispatcher, LanguageTable, Session
from qmdspan.errors import ConfigError, DispatchError, QmdspanError, UnknownLanguageError
from qmdspan.locator import find_block_at, find_interactive_block_at
from qmdspan.matcher import MatchResult, match_markers
from qmdspan.scanners import (
    scan_code_blocks,
    scan_display_math,
    scan_frontmatter,
    scan_headers,
    scan_inline_math,
    scan_markers,
    scan_math,
)
from qmdspan.serialization import to_dict, to_json
from qmdspan.spans import (
    CodeBlock,
    ContainerMarker,
    FrontmatterSpan,
    HeaderSpan,
    MatchedPair,
    MathKind,
    MathSpan,
    ScanResult,
    TextSpan,
    UnmatchedMarker,
)
from qmdspan.styles import StyleAnnotation, StyleCategory, annotate, diff_annotations
from qmdspan.templates import Template, code_block_template, div_template, style_template
from qmdspan.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def scan(
    text: str,
    *,
    config: ScanConfig | None = None,
    cache: ScanCache | None = None,
) -> ScanResult:
    """Scan every structural category of a document.

    Args:
        text: Full document text
        config: Scan configuration (active context config if None)
        cache: Optional content-addressed scan cache. On a hit the cached
            result is returned without rescanning.

    Returns:
        ScanResult for this text snapshot

    Example:
        >>> result = scan("::: {.a}\\n::::\\n")
        >>> [(m.weight, m.is_opening) for m in result.unmatched]
        [(4, False), (3, True)]
    """
    config = resolve_config(config)

    if cache is not None:
        content_hash = hash_content(text)
        config_hash = hash_config(config)
        cached = cache.get(content_hash, config_hash)
        if cached is not None:
            logger.debug("Scan cache hit (%d chars)", len(text))
            return cached

    markers = scan_markers(text, config)
    matched = match_markers(markers)
    result = ScanResult(
        source_length=len(text),
        code_blocks=scan_code_blocks(text, config),
        markers=markers,
        pairs=matched.pairs,
        unmatched=matched.unmatched,
        math=scan_math(text, config),
        headers=scan_headers(text, config),
        frontmatter=scan_frontmatter(text, config),
    )
    logger.debug(
        "Scanned %d chars: %d code blocks, %d pairs, %d unmatched markers",
        len(text),
        len(result.code_blocks),
        len(result.pairs),
        len(result.unmatched),
    )

    if cache is not None:
        cache.put(content_hash, config_hash, result)
    return result


class Scanner:
    """High-level scanner bound to one configuration.

    Usage:
        >>> scanner = Scanner()
        >>> result = scanner.scan("# Title")
        >>> scanner.annotate("# Title")[0].face
        'qmd-header-1'

    Thread Safety:
        Holds only immutable config and an optional cache. Safe to share
        between threads when the cache is (or is None).
    """

    __slots__ = ("_cache", "_config")

    def __init__(
        self,
        config: ScanConfig | None = None,
        *,
        cache: ScanCache | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            config: Scan configuration (defaults if None)
            cache: Optional scan cache shared by all calls
        """
        self._config = config or ScanConfig()
        self._cache = cache

    @property
    def config(self) -> ScanConfig:
        return self._config

    def scan(self, text: str) -> ScanResult:
        """Scan ``text`` with this scanner's config."""
        return scan(text, config=self._config, cache=self._cache)

    def annotate(self, text: str) -> tuple[StyleAnnotation, ...]:
        """Scan ``text`` and return its style annotations."""
        return annotate(self.scan(text), depth_cycle=self._config.depth_cycle)

    def block_at(self, text: str, offset: int) -> CodeBlock | None:
        """Return the code block under ``offset``, or None."""
        return find_block_at(self.scan(text).code_blocks, offset)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Entry points
    "scan",
    "Scanner",
    # Data model
    "CodeBlock",
    "ContainerMarker",
    "FrontmatterSpan",
    "HeaderSpan",
    "MatchedPair",
    "MathKind",
    "MathSpan",
    "ScanResult",
    "TextSpan",
    "UnmatchedMarker",
    # Scanners
    "scan_code_blocks",
    "scan_display_math",
    "scan_frontmatter",
    "scan_headers",
    "scan_inline_math",
    "scan_markers",
    "scan_math",
    # Classification and matching
    "classify_line",
    "classify_marker",
    "is_opening",
    "MatchResult",
    "match_markers",
    # Locator and aggregation
    "find_block_at",
    "find_interactive_block_at",
    "AggregatedCode",
    "Position",
    "aggregate_code",
    "block_text",
    # Dispatch
    "DispatchRequest",
    "Dispatcher",
    "LanguageTable",
    "Session",
    # Styles and templates
    "StyleAnnotation",
    "StyleCategory",
    "annotate",
    "diff_annotations",
    "Template",
    "code_block_template",
    "div_template",
    "style_template",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "resolve_config",
    "scan_config_context",
    "set_scan_config",
    # Cache and serialization
    "DictScanCache",
    "ScanCache",
    "hash_config",
    "hash_content",
    "to_dict",
    "to_json",
    # Errors
    "ConfigError",
    "DispatchError",
    "QmdspanError",
    "UnknownLanguageError",
]

"""Fenced code block scanner.

Recognizes two opener forms in one forward pass:

- interactive: ```` ```{python} ```` (braced attributes, first token is the
  language; these blocks can be sent to a session)
- passive: ```` ```python ```` (bare language tag, decoration only)

Both close at the next bare fence line. A block with no closing fence runs
to end-of-document. Scanning resumes after each block, so an opener-looking
line inside a block is content and blocks never overlap.
"""

from collections.abc import Iterator

from qmdspan.config import ScanConfig, resolve_config
from qmdspan.scanners.patterns import patterns_for
from qmdspan.spans import CodeBlock, TextSpan


def iter_code_blocks(text: str, config: ScanConfig | None = None) -> Iterator[CodeBlock]:
    """Yield code blocks lazily in document order.

    Args:
        text: Full document text
        config: Scan configuration (active context config if None)

    Yields:
        CodeBlock records with ascending, non-overlapping spans.
    """
    patterns = patterns_for(resolve_config(config))
    text_len = len(text)
    pos = 0

    while pos <= text_len:
        opener = patterns.code_open.search(text, pos)
        if opener is None:
            return

        interactive = opener.group("ilang") is not None
        language = opener.group("ilang") if interactive else opener.group("plang")

        # Body starts on the line after the opener
        body_start = opener.end()
        if body_start < text_len and text[body_start] == "\n":
            body_start += 1

        closer = patterns.code_close.search(text, body_start) if body_start < text_len else None

        if closer is None:
            body_end = text_len
            if body_end > body_start and text.endswith("\n"):
                body_end -= 1
            if body_end > body_start and text[body_end - 1] == "\r":
                body_end -= 1
            yield CodeBlock(
                span=TextSpan(opener.start(), text_len),
                language=language,
                interactive=interactive,
                body=TextSpan(body_start, body_end),
                closed=False,
            )
            return

        # Exclude the line ending (LF or CRLF) of the last body line
        body_end = max(body_start, closer.start() - 1)
        if body_end > body_start and text[body_end - 1] == "\r":
            body_end -= 1
        yield CodeBlock(
            span=TextSpan(opener.start(), closer.end()),
            language=language,
            interactive=interactive,
            body=TextSpan(body_start, body_end),
        )
        pos = closer.end() + 1


def scan_code_blocks(text: str, config: ScanConfig | None = None) -> tuple[CodeBlock, ...]:
    """Scan all fenced code blocks.

    Example:
        >>> blocks = scan_code_blocks("```{python}\\nprint(1)\\n```\\n")
        >>> blocks[0].language, blocks[0].interactive
        ('python', True)
    """
    return tuple(iter_code_blocks(text, config))


__all__ = ["iter_code_blocks", "scan_code_blocks"]

"""Insertion templates for new blocks.

Each helper returns the text to insert plus the offset (relative to that
text) where the editor should leave the cursor. Templates follow the active
config's glyphs, so what they produce scans back as the intended block.

Example:
    >>> template = code_block_template("python")
    >>> template.text
    '```{python}\\n\\n```\\n'
    >>> template.text[: template.cursor]
    '```{python}\\n'

"""

from collections.abc import Sequence
from dataclasses import dataclass

from qmdspan.config import ScanConfig, resolve_config


@dataclass(frozen=True, slots=True)
class Template:
    """Text to insert and the cursor offset inside it."""

    text: str
    cursor: int


def code_block_template(
    language: str,
    *,
    interactive: bool = True,
    fence_length: int = 3,
    config: ScanConfig | None = None,
) -> Template:
    """Template for an empty code block, cursor on the body line.

    Raises:
        ValueError: If the language is blank or the fence is too short.
    """
    language = language.strip()
    if not language or any(ch.isspace() for ch in language):
        msg = f"language must be a single non-blank token, got {language!r}"
        raise ValueError(msg)
    if fence_length < 3:
        msg = f"fence_length must be >= 3, got {fence_length}"
        raise ValueError(msg)

    fence = resolve_config(config).fence_glyph * fence_length
    opener = f"{fence}{{{language}}}\n" if interactive else f"{fence}{language}\n"
    return Template(text=f"{opener}\n{fence}\n", cursor=len(opener))


def div_template(
    classes: Sequence[str] = (),
    *,
    weight: int = 3,
    body: str = "",
    config: ScanConfig | None = None,
) -> Template:
    """Template for a container block with optional classes.

    Without classes the opener gets an empty attribute block (``{}``) so it
    still classifies as an opener. The cursor lands at the end of ``body``.

    Example:
        >>> div_template(["callout-note"], weight=4).text
        ':::: {.callout-note}\\n\\n::::\\n'
    """
    if weight < 3:
        msg = f"weight must be >= 3, got {weight}"
        raise ValueError(msg)

    markers = resolve_config(config).marker_glyph * weight
    attributes = " ".join(f".{name.lstrip('.')}" for name in classes)
    opener = f"{markers} {{{attributes}}}\n"
    body_line = body.rstrip("\n")
    return Template(
        text=f"{opener}{body_line}\n{markers}\n",
        cursor=len(opener) + len(body_line),
    )


def style_template(css: str = "", *, config: ScanConfig | None = None) -> Template:
    """Template for a raw HTML ``<style>`` block.

    The raw block form (``{=html}``) passes through rendering untouched and
    is never sent to a session.
    """
    fence = resolve_config(config).fence_glyph * 3
    head = f"{fence}{{=html}}\n<style>\n"
    css_line = css.rstrip("\n")
    return Template(
        text=f"{head}{css_line}\n</style>\n{fence}\n",
        cursor=len(head) + len(css_line),
    )


__all__ = ["Template", "code_block_template", "div_template", "style_template"]

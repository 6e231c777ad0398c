"""ContextVar-based scan configuration for qmdspan.

Provides context-local configuration using Python's ContextVars (PEP 567).
Scanners take an explicit ``config`` argument; when it is omitted they read
the active config from the current context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from qmdspan.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(mask_display_math=True)):
        result = scan(text)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from qmdspan.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Frozen (and therefore hashable) so compiled patterns can be cached
    per config.

    Attributes:
        fence_glyph: Character repeated 3+ times to fence code blocks
        marker_glyph: Character repeated 3+ times for container markers
        math_glyph: Math delimiter character (doubled for display math)
        header_glyph: Character repeated 1+ times to open a header line
        frontmatter_delimiter: Line that opens and closes the frontmatter block
        mask_display_math: Skip inline math candidates inside display math
        depth_cycle: Number of distinct nesting styles before they repeat

    """

    fence_glyph: str = "`"
    marker_glyph: str = ":"
    math_glyph: str = "$"
    header_glyph: str = "#"
    frontmatter_delimiter: str = "---"
    mask_display_math: bool = False
    depth_cycle: int = 4

    def __post_init__(self) -> None:
        for name in ("fence_glyph", "marker_glyph", "math_glyph", "header_glyph"):
            glyph = getattr(self, name)
            if not isinstance(glyph, str) or len(glyph) != 1 or glyph.isspace():
                raise ConfigError(name, f"expected a single non-space character, got {glyph!r}")
        if not self.frontmatter_delimiter.strip():
            raise ConfigError("frontmatter_delimiter", "must not be blank")
        if "\n" in self.frontmatter_delimiter:
            raise ConfigError("frontmatter_delimiter", "must be a single line")
        if self.depth_cycle < 1:
            raise ConfigError("depth_cycle", f"must be >= 1, got {self.depth_cycle}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Useful when settings come from an editor's settings file. Only keys
        that are ScanConfig fields are used; unknown keys are ignored.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({
            ...     "mask_display_math": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.mask_display_math
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (context-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to the default configuration singleton."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with scan_config_context(ScanConfig(marker_glyph="%")):
        ...     markers = scan_markers("%%% {.note}\\n%%%")
        >>> # Automatically restored to the previous config

    Thread Safety:
        Only affects the current context. Restores the previous config even
        if an exception is raised.

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


def resolve_config(config: ScanConfig | None) -> ScanConfig:
    """Return ``config`` or, when None, the active context config."""
    return config if config is not None else _scan_config.get()


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "resolve_config",
    "scan_config_context",
]

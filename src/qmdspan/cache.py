"""Content-addressed scan cache for qmdspan.

Provides (content_hash, config_hash) -> ScanResult caching. Scans are pure
functions of text and config, so a hit is always a valid result; editors that
rescan on every idle tick skip the work when nothing changed (or an edit was
undone).

Thread Safety:
    DictScanCache is not thread-safe. Wrap it with a lock when sharing it
    between threads.

Example:
    >>> from qmdspan import scan, DictScanCache
    >>> cache = DictScanCache()
    >>> first = scan("# Hello", cache=cache)
    >>> scan("# Hello", cache=cache) is first  # Cache hit, no rescan
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from qmdspan.utils.hashing import hash_str

if TYPE_CHECKING:
    from qmdspan.config import ScanConfig
    from qmdspan.spans import ScanResult


class ScanCache(Protocol):
    """Protocol for content-addressed scan caches.

    ScanResult is immutable, safe to share across threads.
    """

    def get(self, content_hash: str, config_hash: str) -> ScanResult | None:
        """Return cached ScanResult if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, result: ScanResult) -> None:
        """Store ScanResult in cache."""
        ...


class DictScanCache:
    """In-memory scan cache using a dict, optionally bounded.

    With ``max_entries`` set, the oldest entry is evicted first.
    """

    __slots__ = ("_data", "_max_entries")

    def __init__(self, max_entries: int | None = None) -> None:
        self._data: dict[tuple[str, str], ScanResult] = {}
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._data)

    def get(self, content_hash: str, config_hash: str) -> ScanResult | None:
        """Return cached ScanResult if present, else None."""
        return self._data.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, result: ScanResult) -> None:
        """Store ScanResult in cache."""
        key = (content_hash, config_hash)
        self._data.pop(key, None)
        self._data[key] = result
        if self._max_entries is not None:
            while len(self._data) > self._max_entries:
                del self._data[next(iter(self._data))]

    def clear(self) -> None:
        self._data.clear()


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key."""
    return hash_str(source)


def hash_config(config: ScanConfig) -> str:
    """Compute hash of ScanConfig for cache key.

    Every field affects scan output, so every field is part of the key.
    """
    parts = (
        config.fence_glyph,
        config.marker_glyph,
        config.math_glyph,
        config.header_glyph,
        config.frontmatter_delimiter,
        str(config.mask_display_math),
        str(config.depth_cycle),
    )
    return hash_str("|".join(parts))


__all__ = [
    "DictScanCache",
    "ScanCache",
    "hash_config",
    "hash_content",
]

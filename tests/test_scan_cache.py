"""Tests for the content-addressed scan cache."""

import logging

import pytest

from qmdspan import (
    DictScanCache,
    ScanConfig,
    ScanResult,
    Scanner,
    hash_config,
    hash_content,
    scan,
)


class TestDictScanCache:
    def test_get_returns_none_when_empty(self) -> None:
        assert DictScanCache().get("abc", "cfg") is None

    def test_put_then_get(self) -> None:
        cache = DictScanCache()
        result = ScanResult(source_length=0)
        cache.put("abc", "cfg", result)
        assert cache.get("abc", "cfg") is result
        assert cache.get("abc", "other") is None
        assert cache.get("xyz", "cfg") is None

    def test_bounded_cache_evicts_oldest(self) -> None:
        cache = DictScanCache(max_entries=2)
        for key in ("a", "b", "c"):
            cache.put(key, "cfg", ScanResult(source_length=0))
        assert len(cache) == 2
        assert cache.get("a", "cfg") is None
        assert cache.get("c", "cfg") is not None

    def test_reput_refreshes_entry(self) -> None:
        cache = DictScanCache(max_entries=2)
        cache.put("a", "cfg", ScanResult(source_length=0))
        cache.put("b", "cfg", ScanResult(source_length=0))
        cache.put("a", "cfg", ScanResult(source_length=1))
        cache.put("c", "cfg", ScanResult(source_length=0))
        assert cache.get("a", "cfg") is not None
        assert cache.get("b", "cfg") is None

    def test_clear(self) -> None:
        cache = DictScanCache()
        cache.put("a", "cfg", ScanResult(source_length=0))
        cache.clear()
        assert len(cache) == 0


class TestHashHelpers:
    def test_hash_content_deterministic(self) -> None:
        assert hash_content("# Hello") == hash_content("# Hello")
        assert hash_content("# Hello") != hash_content("# World")

    def test_hash_config_covers_every_field(self) -> None:
        base = hash_config(ScanConfig())
        assert hash_config(ScanConfig()) == base
        assert hash_config(ScanConfig(mask_display_math=True)) != base
        assert hash_config(ScanConfig(marker_glyph="%")) != base
        assert hash_config(ScanConfig(depth_cycle=3)) != base


class TestScanWithCache:
    def test_lone_surrogate_text_is_cacheable(self) -> None:
        cache = DictScanCache()
        text = "# a\ud800b\n"
        result = scan(text, cache=cache)
        assert result == scan(text)
        assert scan(text, cache=cache) is result

    def test_hit_returns_same_result(self) -> None:
        cache = DictScanCache()
        first = scan("::: {.a}\n:::\n", cache=cache)
        second = scan("::: {.a}\n:::\n", cache=cache)
        assert second is first

    def test_config_change_misses(self) -> None:
        cache = DictScanCache()
        text = "$$ $a$ $$"
        plain = scan(text, cache=cache)
        masked = scan(text, cache=cache, config=ScanConfig(mask_display_math=True))
        assert len(plain.math) == 2
        assert len(masked.math) == 1

    def test_hit_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        cache = DictScanCache()
        scan("# x", cache=cache)
        with caplog.at_level(logging.DEBUG, logger="qmdspan"):
            scan("# x", cache=cache)
        assert any("cache hit" in record.getMessage() for record in caplog.records)

    def test_scanner_uses_cache(self) -> None:
        cache = DictScanCache()
        scanner = Scanner(cache=cache)
        assert scanner.scan("# a") is scanner.scan("# a")
        assert len(cache) == 1

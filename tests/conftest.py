"""Shared test fixtures."""

from __future__ import annotations

import pytest

from circlepaint.colors.allocator import PaintAllocator
from circlepaint.colors.backend import MemoryBackend
from circlepaint.colors.cache import ColorListCache
from circlepaint.colors.resolver import ColorResolver
from circlepaint.config import Settings


# Small color tables

BASIC_COLORS = {
    "red": "255,0,0",
    "green": "0,255,0",
    "blue": "0,0,255",
    "black": "0,0,0",
    "white": "255,255,255",
    "grey": "128,128,128",
    "rose": "red",
    "flower": "rose",
    "sky": "hsv(240,1,1)",
}

CHROMOSOME_COLORS = {
    "chr1": "153,102,0",
    "chr2": "102,102,0",
    "chr10": "153,153,30",
    "chrx": "153,153,153",
    "chromosomes": "chr\\d+",
    "chromosomes_rev": "rev(chr(\\d+))",
    "all_chr": "chr(\\d+),chrx",
    "favourite": "chromosomes_rev",
}

# Sequential color-brewer style palette: names with a numeric index
BREWER_COLORS = {
    "blues-3-seq-1": "222,235,247",
    "blues-3-seq-2": "158,202,225",
    "blues-3-seq-3": "49,130,189",
    "blues": "blues-3-seq-(\\d+)",
    "blues_rev": "rev(blues-3-seq-(\\d+))",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(color_cache_dir=tmp_path)


@pytest.fixture
def alpha_settings(tmp_path) -> Settings:
    return Settings(color_cache_dir=tmp_path, auto_alpha_colors=True, auto_alpha_steps=4)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def allocator(backend) -> PaintAllocator:
    return PaintAllocator(backend)


@pytest.fixture
def cache(tmp_path) -> ColorListCache:
    return ColorListCache(tmp_path / "colors.cache.json")


def build_resolver(colors, settings, cache=None, source_mtime=None, backend=None) -> ColorResolver:
    resolver = ColorResolver(
        colors,
        PaintAllocator(backend if backend is not None else MemoryBackend()),
        settings=settings,
        cache=cache,
        source_mtime=source_mtime,
    )
    resolver.build()
    return resolver


@pytest.fixture
def basic_resolver(settings) -> ColorResolver:
    return build_resolver(BASIC_COLORS, settings)


@pytest.fixture
def chromosome_resolver(settings, cache) -> ColorResolver:
    return build_resolver(CHROMOSOME_COLORS, settings, cache=cache)

"""RenderContext: everything one render pass owns, built and torn down together.

Color handles are only meaningful for the backend that issued them, so the
backend, its allocator, the resolved table and the drawing surface live and
die with one context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from circlepaint.colors.allocator import PaintAllocator
from circlepaint.colors.backend import ColorBackend, MemoryBackend
from circlepaint.colors.cache import ColorListCache, default_cache_path
from circlepaint.colors.resolver import ColorResolver, ColorTable, RawColorTable
from circlepaint.config import Settings
from circlepaint.svg.draw import SvgCanvas
from circlepaint.svg.style import StyleBuilder

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    settings: Settings
    backend: ColorBackend
    allocator: PaintAllocator
    resolver: ColorResolver
    styles: StyleBuilder
    canvas: SvgCanvas

    @property
    def table(self) -> ColorTable:
        return self.resolver.table

    @classmethod
    def create(
        cls,
        colors: RawColorTable,
        settings: Settings | None = None,
        backend: ColorBackend | None = None,
        config_path: Path | str | None = None,
        width: float = 3000.0,
        height: float = 3000.0,
    ) -> RenderContext:
        """Resolve ``colors`` on a fresh (or given) backend and set up a canvas.

        ``config_path`` is the file the color table came from; its mtime
        decides whether a non-static list cache is still fresh.
        """
        settings = settings or Settings()
        backend = backend if backend is not None else MemoryBackend()
        allocator = PaintAllocator(backend)

        source_mtime = None
        if config_path is not None:
            try:
                source_mtime = Path(config_path).stat().st_mtime
            except OSError as e:
                logger.warning("Cannot stat color config %s: %s", config_path, e)

        cache = None
        if settings.color_lists_use:
            cache = ColorListCache(
                default_cache_path(settings.color_cache_file, settings.color_cache_dir)
            )

        resolver = ColorResolver(
            colors, allocator, settings=settings, cache=cache, source_mtime=source_mtime
        )
        resolver.build()
        styles = StyleBuilder(resolver, default_color=settings.default_color)
        canvas = SvgCanvas(styles, width, height, settings=settings)
        return cls(
            settings=settings,
            backend=backend,
            allocator=allocator,
            resolver=resolver,
            styles=styles,
            canvas=canvas,
        )

"""circlepaint: color table resolution and circular wedge geometry for circular plots."""

from circlepaint.colors.backend import ColorBackend, MemoryBackend
from circlepaint.colors.resolver import ColorResolver, ColorTable
from circlepaint.config import Settings
from circlepaint.context import RenderContext
from circlepaint.svg.arc_path import ArcPathBuilder, WedgePath, WedgeSpec
from circlepaint.svg.style import StyleBuilder, StyleRecord

__all__ = [
    "ColorBackend",
    "MemoryBackend",
    "ColorResolver",
    "ColorTable",
    "Settings",
    "RenderContext",
    "ArcPathBuilder",
    "WedgePath",
    "WedgeSpec",
    "StyleBuilder",
    "StyleRecord",
]

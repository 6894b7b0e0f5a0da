"""StyleBuilder: stroke/fill/opacity/line-cap/text-anchor as a paint-style record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from circlepaint.colors.resolver import ColorResolver


def style_string(**attrs: Any) -> str:
    """``key:value`` pairs joined by ';'. None values are dropped; '_' in keys becomes '-'."""
    return ";".join(
        f"{k.replace('_', '-')}:{v}" for k, v in attrs.items() if v is not None
    )


@dataclass(frozen=True)
class StyleRecord:
    """Backend-agnostic paint style. ``fill`` of None means an explicit ``fill:none``."""

    stroke_width: float | None = None
    stroke: tuple[int, int, int] | None = None
    stroke_opacity: float = 1.0
    line_cap: str | None = None
    fill: tuple[int, int, int] | None = None
    fill_opacity: float = 1.0
    text_anchor: str | None = None

    @property
    def has_stroke(self) -> bool:
        return self.stroke_width is not None

    @property
    def has_fill(self) -> bool:
        return self.fill is not None

    def to_css(self) -> str:
        parts = []
        if self.text_anchor:
            parts.append(f"text-anchor:{self.text_anchor}")
        if self.stroke_width is not None and self.stroke is not None:
            parts.append(f"stroke-width:{self.stroke_width:.1f}")
            parts.append("stroke:rgb({},{},{})".format(*self.stroke))
            if self.stroke_opacity < 1:
                parts.append(f"stroke-opacity:{self.stroke_opacity:.2f}")
        if self.line_cap:
            parts.append(f"stroke-linecap:{self.line_cap}")
        if self.fill is not None:
            parts.append("fill:rgb({},{},{})".format(*self.fill))
            if self.fill_opacity < 1:
                parts.append(f"fill-opacity:{self.fill_opacity:.2f}")
        else:
            parts.append("fill:none")
        return ";".join(parts) + ";"


class StyleBuilder:
    def __init__(self, resolver: ColorResolver, default_color: str = "black") -> None:
        self.resolver = resolver
        self.default_color = default_color

    def build(
        self,
        thickness: float | None = None,
        color: str | None = None,
        fill_color: str | None = None,
        linecap: str | None = None,
        text_anchor: str | None = None,
    ) -> StyleRecord:
        """Stroke only when thickness is set and nonzero; fill only when fill_color is given.

        Opacity comes from the color name's ``_aN`` suffix.
        """
        stroke_width = stroke = None
        stroke_opacity = 1.0
        if thickness:
            stroke_width = float(thickness)
            stroke = self.resolver.rgb(color or self.default_color)
            stroke_opacity = self.resolver.opacity(color)
        fill = None
        fill_opacity = 1.0
        if fill_color:
            fill = self.resolver.rgb(fill_color)
            fill_opacity = self.resolver.opacity(fill_color)
        return StyleRecord(
            stroke_width=stroke_width,
            stroke=stroke,
            stroke_opacity=stroke_opacity,
            line_cap=linecap or None,
            fill=fill,
            fill_opacity=fill_opacity,
            text_anchor=text_anchor or None,
        )

    def css(self, **kwargs: Any) -> str:
        return self.build(**kwargs).to_css()

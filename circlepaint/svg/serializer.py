"""Write an SVG 1.1 document from drawn element definitions."""

from __future__ import annotations

from typing import Any

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8" standalone="no"?>'
SVG11_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;")


def serialize_element(elem: dict[str, Any]) -> str:
    """One element dict -> markup. ``tag`` names the element, ``text`` is its content."""
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "text")}
    attr_str = " ".join(f'{k}="{v}"' for k, v in attrs.items())
    if "text" in elem:
        return f"<{tag} {attr_str}>{escape_text(str(elem['text']))}</{tag}>"
    return f"<{tag} {attr_str}/>"


def serialize_svg(
    elements: list[dict[str, Any]],
    width: float,
    height: float,
    title: str = "",
) -> str:
    lines = [
        XML_DECLARATION,
        SVG11_DOCTYPE,
        f'<svg width="{width:g}px" height="{height:g}px" version="1.1"'
        f' xmlns="http://www.w3.org/2000/svg">',
    ]
    if title:
        lines.append(f"  <title>{escape_text(title)}</title>")
    for elem in elements:
        lines.append("  " + serialize_element(elem))
    lines.append("</svg>")
    return "\n".join(lines)

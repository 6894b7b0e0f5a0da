"""Transparency tier naming: ``<base>_a<N>`` for N in 0..auto_alpha_steps.

Tier N of ``steps`` has opacity ``1 - N/(steps+1)``; tier 0 is an opaque
synonym of the base color.
"""

from __future__ import annotations

import re

from circlepaint.errors import TransparencyDisabledError, UndefinedColorError

TIER_RE = re.compile(r"(.+)_a(\d+)$")


def split_tier(name: str) -> tuple[str, int | None]:
    """(base name, tier step) for a tier name, (name, None) otherwise."""
    m = TIER_RE.match(name)
    if m:
        return m.group(1), int(m.group(2))
    return name, None


def is_tier_name(name: str) -> bool:
    return TIER_RE.match(name) is not None


def tier_name(base: str, step: int) -> str:
    return f"{base}_a{step}"


def tier_transparency(step: int, steps: int) -> float:
    """Transparency fraction of a tier; this is what the backend alpha channel receives."""
    return step / (steps + 1)


def tier_opacity(step: int, steps: int) -> float:
    return 1.0 - tier_transparency(step, steps)


def name_opacity(name: str | None, enabled: bool, steps: int) -> float:
    """Opacity implied by a color name's tier suffix; 1 without a suffix."""
    if name is None:
        return 1.0
    _, step = split_tier(name.lower())
    if step is None:
        return 1.0
    if not enabled:
        raise TransparencyDisabledError(
            f"transparent color [{name}] requested but auto_alpha_colors is not set",
            name=name,
        )
    if step > steps:
        raise UndefinedColorError(
            f"transparent color [{name}] is past the last tier (auto_alpha_steps={steps})",
            name=name,
        )
    return tier_opacity(step, steps)

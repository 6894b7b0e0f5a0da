"""Parse raw color definition strings into ``ColorDefinition`` variants.

Accepted literal forms:
    r,g,b            integers 0..255
    r,g,b,a          a is a fraction 0..1 or an integer 0..127 (transparency)
    hsv(h,s,v[,a])   h in degrees 0..360, s and v in 0..1

Anything else is an alias (when it names a configured color) or a list of
regex patterns matched against the allocated color names.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence

from circlepaint.colors.convert import hsv_to_rgb255
from circlepaint.errors import ColorDefinitionError
from circlepaint.models.color import AliasColor, ListPattern, LiteralColor, PatternTerm
from circlepaint.utils.math_helpers import all_numbers, is_number, str_to_list

_HSV_RE = re.compile(r"hsv\s*\(\s*(.+?)\s*\)", re.IGNORECASE)
_REV_RE = re.compile(r"rev\((.+)\)")
_CHANNEL_SPLIT_RE = re.compile(r"\s*,\s*")

# GD convention: alpha channel 0 = opaque, 127 = fully transparent.
MAX_ALPHA_CHANNEL = 127

Channels = tuple[float, ...]


def _check_alpha(name: str | None, alpha: str | float) -> float:
    if is_number(alpha, "real", lo=0, hi=1):
        return float(alpha)
    if is_number(alpha, "integer", lo=0, hi=MAX_ALPHA_CHANNEL):
        return float(int(str(alpha).strip()))
    raise ColorDefinitionError(
        f"color [{name}] has alpha [{alpha}] outside 0..1 (fraction) or 0..{MAX_ALPHA_CHANNEL}",
        name=name,
        value=alpha,
    )


def _split(definition: str | Sequence) -> list[str]:
    if isinstance(definition, str):
        text = definition.strip()
        return _CHANNEL_SPLIT_RE.split(text) if "," in text else []
    return [str(c) for c in definition]


def validate_rgb(
    definition: str | Sequence, strict: bool = False, name: str | None = None
) -> Channels | None:
    """Channels of an ``r,g,b[,a]`` definition, or None if it is not one.

    A fourth channel that is present but out of range always raises.
    """
    parts = _split(definition)
    if len(parts) in (3, 4) and all(
        is_number(c, "integer", lo=0, hi=255) for c in parts[:3]
    ):
        rgb = tuple(int(c) for c in parts[:3])
        if len(parts) == 4:
            return (*rgb, _check_alpha(name, parts[3]))
        return rgb
    if strict:
        raise ColorDefinitionError(
            f"color [{name}] has malformed RGB definition [{','.join(parts)}]",
            name=name,
            value=definition,
        )
    return None


def validate_hsv(
    definition: str | Sequence, strict: bool = False, name: str | None = None
) -> Channels | None:
    """(h, s, v[, a]) of an ``hsv(...)`` definition, or None if it is not one."""
    parts: list[str] = []
    if isinstance(definition, str):
        m = _HSV_RE.search(definition)
        if m:
            parts = _CHANNEL_SPLIT_RE.split(m.group(1))
    else:
        parts = [str(c) for c in definition]
    if (
        len(parts) in (3, 4)
        and is_number(parts[0], "real", lo=0, hi=360)
        and is_number(parts[1], "real", lo=0, hi=1)
        and is_number(parts[2], "real", lo=0, hi=1)
    ):
        hsv = tuple(float(c) for c in parts[:3])
        if len(parts) == 4:
            return (*hsv, _check_alpha(name, parts[3]))
        return hsv
    if strict:
        raise ColorDefinitionError(
            f"color [{name}] has malformed HSV definition [{','.join(parts)}]",
            name=name,
            value=definition,
        )
    return None


def alpha_to_opacity(alpha: float | None) -> float:
    """Transparency channel (fraction < 1, else 0..127) to opacity in [0,1]."""
    if alpha is None:
        return 1.0
    if alpha < 1:
        return 1.0 - alpha
    return 1.0 - alpha / MAX_ALPHA_CHANNEL


def literal_from_channels(channels: Channels) -> LiteralColor:
    r, g, b = (int(c) for c in channels[:3])
    alpha = channels[3] if len(channels) == 4 else None
    return LiteralColor(r=r, g=g, b=b, alpha=alpha_to_opacity(alpha))


def parse_channels(definition: str, name: str | None = None) -> Channels | None:
    """Backend channels (r, g, b[, alpha]) for an RGB or HSV string, None for anything else."""
    hsv = validate_hsv(definition, name=name)
    if hsv is not None:
        r, g, b = hsv_to_rgb255(*hsv[:3])
        return (r, g, b, *hsv[3:])
    rgb = validate_rgb(definition, name=name)
    if rgb is not None:
        return rgb
    # numeric lists that failed validation are typos, not regexes
    parts = _split(definition)
    if len(parts) in (3, 4) and all_numbers(parts):
        validate_rgb(definition, strict=True, name=name)
    return None


def parse_literal(definition: str, name: str | None = None) -> LiteralColor | None:
    channels = parse_channels(definition, name=name)
    return literal_from_channels(channels) if channels is not None else None


def parse_pattern_terms(definition: str, name: str | None = None) -> list[PatternTerm]:
    terms = []
    for raw in str_to_list(definition.strip()):
        m = _REV_RE.fullmatch(raw)
        pattern, reverse = (m.group(1), True) if m else (raw, False)
        try:
            re.compile(pattern)
        except re.error as e:
            raise ColorDefinitionError(
                f"color [{name}] has invalid list pattern [{raw}]: {e}",
                name=name,
                value=definition,
            ) from e
        terms.append(PatternTerm(pattern=pattern, reversed=reverse))
    return terms


def parse_definition(
    definition: str,
    names: Collection[str],
    name: str | None = None,
) -> LiteralColor | AliasColor | ListPattern:
    """Classify one definition. ``names`` is the set of configured (lowercase) names."""
    if not isinstance(definition, str):
        raise ColorDefinitionError(
            f"color [{name}] has malformed structure of type [{type(definition).__name__}]",
            name=name,
            value=definition,
        )
    literal = parse_literal(definition, name=name)
    if literal is not None:
        return literal
    target = definition.strip().lower()
    if target in names:
        return AliasColor(target=target)
    return ListPattern(terms=parse_pattern_terms(definition, name=name))

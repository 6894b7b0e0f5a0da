"""List pattern resolution: regex over color names, sorted by captured groups.

``rev(chr(\\d+))`` over {chr1, chr2, chr10} gives chr10, chr2, chr1: the
captures 1, 2, 10 sort numerically and ``rev`` flips the result.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from circlepaint.errors import NoMatchError
from circlepaint.models.color import ListPattern, PatternTerm
from circlepaint.utils.math_helpers import is_number

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple[str | int, ...]:
    """Sort key comparing digit runs as numbers, so chr2 sorts before chr10."""
    parts = _DIGITS_RE.split(name)
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


@dataclass(frozen=True)
class Capture:
    """One captured group, tagged as a number when it reads as one."""

    text: str
    number: float | None = None

    @classmethod
    def parse(cls, text: str) -> Capture:
        if is_number(text, "real"):
            # leading zeros are ignored, an all-zero capture is 0
            stripped = text.strip().lstrip("0")
            return cls(text=text, number=float(stripped) if stripped.strip(".") else 0.0)
        return cls(text=text)


def compare_capture(a: Capture, b: Capture) -> int:
    if a.number is not None and b.number is not None:
        return (a.number > b.number) - (a.number < b.number)
    return (a.text > b.text) - (a.text < b.text)


def compare_captures(
    left: Sequence[Capture | None], right: Sequence[Capture | None]
) -> int:
    """First nonzero pairwise comparison; stops at the first missing capture."""
    result = 0
    for i, a in enumerate(left):
        b = right[i] if i < len(right) else None
        if a is None or b is None:
            return result
        if not result:
            result = compare_capture(a, b)
    return result


@dataclass
class _Match:
    item: str
    captures: tuple[Capture | None, ...]


def sample_list(term: PatternTerm, candidates: Iterable[str]) -> list[str]:
    """Candidates that fully match the term's regex, ordered by their captures."""
    rx = re.compile(term.pattern)
    matches = []
    for item in candidates:
        m = rx.fullmatch(item)
        if m:
            captures = tuple(None if g is None else Capture.parse(g) for g in m.groups())
            matches.append(_Match(item=item, captures=captures))
    matches.sort(key=functools.cmp_to_key(lambda x, y: compare_captures(x.captures, y.captures)))
    result = [m.item for m in matches]
    if term.reversed:
        result.reverse()
    return result


def resolve_term(
    term: PatternTerm, universe: Sequence[str], color_name: str | None = None
) -> list[str]:
    """Coarse ``search`` pre-filter over the universe, then the full anchored match."""
    rx = re.compile(term.pattern)
    early = [c for c in universe if rx.search(c)]
    matches = sample_list(term, early) if early else []
    if not matches:
        raise NoMatchError(
            f"list color [{color_name}] has pattern [{term.text}] that matches no defined color",
            name=color_name,
            value=term.text,
        )
    return matches


def resolve_list(
    definition: ListPattern | PatternTerm,
    universe: Sequence[str],
    color_name: str | None = None,
) -> list[str]:
    """Ordered, de-duplicated candidates for every term of a list definition."""
    terms = [definition] if isinstance(definition, PatternTerm) else definition.terms
    resolved: list[str] = []
    seen: set[str] = set()
    for term in terms:
        for name in resolve_term(term, universe, color_name):
            if name not in seen:
                seen.add(name)
                resolved.append(name)
    logger.debug("color list %s = %s", color_name, " ".join(resolved))
    return resolved

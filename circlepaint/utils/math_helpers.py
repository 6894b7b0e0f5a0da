"""Math helpers: clamping, range remap, interval distance, number validation. No color imports."""

from __future__ import annotations

import math
import re
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

_REAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_NUMBER_PATTERNS = {"real": _REAL_RE, "integer": _INTEGER_RE}


def put_between(x: float, lo: float, hi: float) -> float:
    """Clamp x into [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def remap(value: float, lo: float, hi: float, remap_lo: float, remap_hi: float) -> float:
    """Linearly map value from [lo, hi] onto [remap_lo, remap_hi], clamping at the ends."""
    if value <= lo:
        return remap_lo
    if value >= hi:
        return remap_hi
    if lo == hi:
        if remap_lo == remap_hi:
            return remap_lo
        raise ValueError(
            f"cannot remap from empty range [{lo},{hi}] onto [{remap_lo},{remap_hi}]"
        )
    f = (value - lo) / (hi - lo)
    return remap_lo + f * (remap_hi - remap_lo)


def remap_array(
    values: ArrayLike, lo: float, hi: float, remap_lo: float, remap_hi: float
) -> NDArray[np.float64]:
    """Vectorized remap. Same clamping as ``remap``."""
    arr = np.asarray(values, dtype=np.float64)
    if hi == lo:
        if remap_lo != remap_hi:
            raise ValueError(
                f"cannot remap from empty range [{lo},{hi}] onto [{remap_lo},{remap_hi}]"
            )
        return np.full_like(arr, remap_lo)
    f = np.clip((arr - lo) / (hi - lo), 0.0, 1.0)
    return remap_lo + f * (remap_hi - remap_lo)


def round_half_up(x: float) -> int:
    """Round half away from zero (``round()`` in Python rounds half to even)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def remap_int(*args: float) -> int:
    return int(remap(*args))


def remap_round(*args: float) -> int:
    return round_half_up(remap(*args))


def round_custom(x: float, round_type: str | None = None) -> int:
    """Round with an explicit strategy: None truncates, else round/floor/ceil."""
    if round_type is None:
        return int(x)
    if round_type == "round":
        return round_half_up(x)
    if round_type == "floor":
        return math.floor(x)
    if round_type == "ceil":
        return math.ceil(x)
    raise ValueError(f"unknown rounding type [{round_type}]")


def round_up(value: float) -> float:
    if value > int(value):
        return 1 + int(value)
    return value


def is_number(
    x: Any,
    kind: str = "real",
    strict: bool = False,
    lo: float | None = None,
    hi: float | None = None,
) -> bool:
    """True if x reads as a number of the given kind and lies within [lo, hi].

    With ``strict`` a failed check raises ValueError instead of returning False.
    """
    pattern = _NUMBER_PATTERNS.get(kind)
    if pattern is None:
        raise ValueError(f"no number pattern for kind [{kind}]")
    text = str(x).strip()
    if not pattern.fullmatch(text):
        if strict:
            raise ValueError(f"value [{x}] is not a number of type [{kind}]")
        return False
    value = float(text)
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        if strict:
            lo_text = lo if lo is not None else "("
            hi_text = hi if hi is not None else ")"
            raise ValueError(f"value [{x}] of type [{kind}] is outside range [{lo_text},{hi_text}]")
        return False
    return True


def is_integer(x: float) -> bool:
    return x == int(x)


def is_num_equal(x: float | None, y: float | None) -> bool:
    if x is None or y is None:
        return False
    return x == y


def is_num_notequal(x: float | None, y: float | None) -> bool | None:
    """None if both are missing, True if exactly one is, else x != y."""
    if x is None and y is None:
        return None
    if x is None or y is None:
        return True
    return x != y


def pairwise_or(a: Any, b: Any, x: Any, y: Any) -> bool:
    """(a, b) equals (x, y) in either order."""
    if a is None or b is None or x is None or y is None:
        raise ValueError(f"pairwise_or needs four defined values, got {a}, {b}, {x}, {y}")
    return (a == x and b == y) or (a == y and b == x)


def pairwise_and(a: Any, b: Any, x: Any, y: Any) -> bool:
    if a is None or b is None or x is None or y is None:
        raise ValueError(f"pairwise_and needs four defined values, got {a}, {b}, {x}, {y}")
    return a == x and b == y


def span_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Distance between intervals [x1,y1] and [x2,y2]; negative overlap length if they overlap."""
    if x1 > y1:
        x1, y1 = y1, x1
    if x2 > y2:
        x2, y2 = y2, x2
    if x1 > x2:
        x1, y1, x2, y2 = x2, y2, x1, y1
    if x2 >= y1:
        return x2 - y1
    if y2 >= y1:
        return -(y1 - x2)
    # second interval inside the first
    return -(y2 - x2)


def first_defined(*values: Any) -> Any:
    for v in values:
        if v is not None:
            return v
    return None


def str_to_list(text: str) -> list[str]:
    """Split on commas, trimming whitespace around each comma."""
    return re.split(r"\s*,\s*", text)


def parse_csv(text: str) -> list[str]:
    """Comma split that ignores commas nested inside parentheses.

    Parentheses themselves are dropped from the output.
    """
    params: list[str] = []
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and not depth:
            params.append("")
        else:
            if not params:
                params.append("")
            params[-1] += ch
    if depth:
        raise ValueError(f"unbalanced parentheses in [{text}] (depth {depth})")
    return params


def parse_options(text: str | None) -> dict[str, str]:
    """Parse ``k1=v1,k2=v2`` into a dict. Malformed pairs are ignored."""
    options: dict[str, str] = {}
    for pair in (text or "").split(","):
        m = re.match(r"^([^=]+)=(.+)$", pair)
        if m:
            options[m.group(1)] = m.group(2)
    return options


def add_thousands_separator(text: str | float, sep: str = ",") -> str:
    text = str(text)
    if "." in text:
        return re.sub(r"(?<=\d)(?=(\d{3})+\.)", sep, text)
    return re.sub(r"(?<=\d)(?=(\d{3})+$)", sep, text)


def extract_number(text: str) -> str:
    """First run of digits with leading zeros stripped, or '' if there is none."""
    m = re.search(r"0*(\d+)", text)
    return m.group(1) if m else ""


def log10(x: float) -> float | None:
    return math.log10(x) if x > 0 else None


def all_numbers(values: Iterable[Any], kind: str = "real") -> bool:
    return all(is_number(v, kind) for v in values)

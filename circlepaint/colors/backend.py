"""Drawing backend color interface and an in-memory palette implementation.

A backend hands out opaque color handles. The allocator only needs four
operations: exact-match lookup of an opaque color, opaque allocation,
alpha allocation and channel readback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class ColorBackend(Protocol):
    def color_exact(self, r: int, g: int, b: int) -> Any | None:
        """Handle of an already-allocated opaque color with these channels, else None."""
        ...

    def color_allocate(self, r: int, g: int, b: int) -> Any: ...

    def color_allocate_alpha(self, r: int, g: int, b: int, alpha: int) -> Any: ...

    def rgb(self, handle: Any) -> tuple[int, int, int]: ...


class BackendExhaustedError(RuntimeError):
    """The backend has no free color slots left."""


@dataclass
class MemoryBackend:
    """Palette of (r, g, b, alpha) slots; the handle is the slot index.

    ``capacity`` of None means unlimited (true color). A palette image
    would use 256.
    """

    capacity: int | None = None
    slots: list[tuple[int, int, int, int]] = field(default_factory=list)

    def _check_channels(self, *channels: int) -> None:
        for c in channels:
            if not isinstance(c, int) or not 0 <= c <= 255:
                raise ValueError(f"channel value {c!r} is not an integer in 0..255")

    def _append(self, slot: tuple[int, int, int, int]) -> int:
        if self.capacity is not None and len(self.slots) >= self.capacity:
            raise BackendExhaustedError(f"palette full ({self.capacity} colors)")
        self.slots.append(slot)
        return len(self.slots) - 1

    def color_exact(self, r: int, g: int, b: int) -> int | None:
        for idx, slot in enumerate(self.slots):
            if slot == (r, g, b, 0):
                return idx
        return None

    def color_allocate(self, r: int, g: int, b: int) -> int:
        self._check_channels(r, g, b)
        return self._append((r, g, b, 0))

    def color_allocate_alpha(self, r: int, g: int, b: int, alpha: int) -> int:
        self._check_channels(r, g, b)
        if not 0 <= alpha <= 127:
            raise ValueError(f"alpha {alpha!r} outside 0..127")
        return self._append((r, g, b, int(alpha)))

    def rgb(self, handle: int) -> tuple[int, int, int]:
        r, g, b, _ = self.slots[handle]
        return (r, g, b)

    def alpha(self, handle: int) -> int:
        return self.slots[handle][3]

    @property
    def count(self) -> int:
        return len(self.slots)

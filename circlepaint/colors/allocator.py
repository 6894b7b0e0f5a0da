"""PaintAllocator: resolved RGB(A) channels -> backend color handle."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from circlepaint.colors.backend import ColorBackend
from circlepaint.colors.parse import MAX_ALPHA_CHANNEL, literal_from_channels
from circlepaint.colors.transparency import is_tier_name
from circlepaint.errors import AllocationError, ColorDefinitionError
from circlepaint.models.color import AllocatedColor

logger = logging.getLogger(__name__)


class PaintAllocator:
    """Allocates named colors on a backend and remembers them for the pass.

    Opaque colors reuse an existing backend slot with the same channels.
    Alpha colors always get a fresh slot.
    """

    def __init__(self, backend: ColorBackend) -> None:
        self.backend = backend
        self.colors: dict[str, AllocatedColor] = {}

    def allocate(self, name: str, channels: Sequence[float] | str) -> AllocatedColor:
        if isinstance(channels, str):
            channels = [float(c) for c in channels.split(",")]
        channels = tuple(channels)
        if len(channels) == 3:
            handle = self._allocate_opaque(name, channels)
        elif len(channels) == 4:
            handle = self._allocate_alpha(name, channels)
        else:
            raise ColorDefinitionError(
                f"color [{name}] needs 3 or 4 channels, got {list(channels)}",
                name=name,
                value=channels,
            )
        allocated = AllocatedColor(
            name=name, handle=handle, definition=literal_from_channels(channels)
        )
        self.colors[name] = allocated
        logger.debug(
            "allocated color %s %s -> %r (%d colors)", name, channels, handle, len(self.colors)
        )
        return allocated

    def alias(self, name: str, allocated: AllocatedColor) -> AllocatedColor:
        """Register ``name`` as another name for an existing allocation."""
        synonym = allocated.model_copy(update={"name": name})
        self.colors[name] = synonym
        return synonym

    def _allocate_opaque(self, name: str, channels: tuple[float, ...]) -> object:
        if is_tier_name(name):
            raise ColorDefinitionError(
                f"color [{name}] ends in _aN, which is reserved for transparent colors; "
                f"give it an alpha channel or rename it",
                name=name,
                value=channels,
            )
        r, g, b = (int(c) for c in channels)
        try:
            handle = self.backend.color_exact(r, g, b)
            if handle is None:
                handle = self.backend.color_allocate(r, g, b)
        except Exception as e:
            raise AllocationError(
                f"cannot allocate color [{name}] = {r},{g},{b}: {e}", name=name, value=channels
            ) from e
        return handle

    def _allocate_alpha(self, name: str, channels: tuple[float, ...]) -> object:
        alpha = channels[3]
        if alpha < 0 or alpha > MAX_ALPHA_CHANNEL:
            raise ColorDefinitionError(
                f"color [{name}] alpha [{alpha}] outside 0..{MAX_ALPHA_CHANNEL}",
                name=name,
                value=channels,
            )
        if alpha < 1:
            alpha *= MAX_ALPHA_CHANNEL
        r, g, b = (int(c) for c in channels[:3])
        try:
            return self.backend.color_allocate_alpha(r, g, b, int(alpha))
        except Exception as e:
            raise AllocationError(
                f"cannot allocate color [{name}] = {r},{g},{b},{alpha}: {e}",
                name=name,
                value=channels,
            ) from e

    def get(self, name: str) -> AllocatedColor | None:
        return self.colors.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.colors

    def __len__(self) -> int:
        return len(self.colors)

"""Error taxonomy for color resolution and allocation.

Every fatal configuration or lookup problem is a ``ColorError``; callers that
only care about "the render cannot proceed" catch the base class.
"""

from __future__ import annotations


class ColorError(ValueError):
    """Base class for fatal color errors. Carries the offending name and value."""

    def __init__(self, message: str, name: str | None = None, value: object = None) -> None:
        super().__init__(message)
        self.name = name
        self.value = value
        self.message = message

    def __str__(self) -> str:
        return self.message


class ColorDefinitionError(ColorError):
    """Malformed, conflicting or out-of-range color definition."""


class CycleError(ColorError):
    """An alias chain revisits a name."""


class UndefinedColorError(ColorError):
    """A requested color is neither configured nor an inline RGB/HSV literal."""


class NoMatchError(ColorError):
    """A list pattern matched none of the allocated color names."""


class AllocationError(ColorError):
    """The drawing backend refused or could not allocate a color."""


class TransparencyDisabledError(ColorError):
    """A transparency tier (``_aN``) was requested but auto-transparency is off."""

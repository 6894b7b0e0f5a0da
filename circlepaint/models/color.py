"""Color definition models: a tagged union resolved once at table construction."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class LiteralColor(BaseModel):
    """Concrete color. ``alpha`` is opacity: 1 = opaque, 0 = fully transparent."""

    model_config = {"frozen": True}

    kind: Literal["literal"] = "literal"
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def is_opaque(self) -> bool:
        return self.alpha >= 1.0


class AliasColor(BaseModel):
    """A definition that names another configured color."""

    model_config = {"frozen": True}

    kind: Literal["alias"] = "alias"
    target: str


class PatternTerm(BaseModel):
    """One regex of a list definition, optionally wrapped in ``rev(...)``."""

    model_config = {"frozen": True}

    pattern: str
    reversed: bool = False

    @property
    def text(self) -> str:
        return f"rev({self.pattern})" if self.reversed else self.pattern


class ListPattern(BaseModel):
    """Comma separated regexes matched against the allocated color names."""

    model_config = {"frozen": True}

    kind: Literal["list"] = "list"
    terms: list[PatternTerm] = Field(default_factory=list)

    @property
    def pattern(self) -> str:
        return ",".join(t.text for t in self.terms)


ColorDefinition = Annotated[
    Union[LiteralColor, AliasColor, ListPattern],
    Field(discriminator="kind"),
]


class AllocatedColor(BaseModel):
    """Backend handle plus the literal it was allocated from. Valid for one render pass."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    handle: Any
    definition: LiteralColor

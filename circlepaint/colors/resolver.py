"""ColorResolver: builds the color table of one render pass and answers lookups.

Passes run in a fixed order, each over names in lexicographic order:

    literal       RGB/HSV definitions are allocated on the backend
    alias         alias chains are followed to the literal they end at
    transparency  <name>_a0 .. <name>_aN tiers for every allocated color
    lists         list patterns are matched against the allocated names

Later passes read what earlier ones allocated, so the order cannot change.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from circlepaint.colors.allocator import PaintAllocator
from circlepaint.colors.cache import ColorListCache, namespace_hash
from circlepaint.colors.lists import natural_key, resolve_list
from circlepaint.colors.parse import (
    literal_from_channels,
    parse_channels,
    parse_definition,
    validate_rgb,
)
from circlepaint.colors.transparency import (
    is_tier_name,
    name_opacity,
    split_tier,
    tier_name,
    tier_transparency,
)
from circlepaint.config import Settings
from circlepaint.errors import (
    ColorDefinitionError,
    CycleError,
    TransparencyDisabledError,
    UndefinedColorError,
)
from circlepaint.models.cache import ColorListCacheEntry
from circlepaint.models.color import (
    AliasColor,
    AllocatedColor,
    ListPattern,
    LiteralColor,
)

logger = logging.getLogger(__name__)

RawColorTable = Mapping[str, Any]

_EXPAND_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass
class ColorTable:
    """Resolved colors: name -> allocation, and list name -> ordered candidate names."""

    colors: dict[str, AllocatedColor] = field(default_factory=dict)
    lists: dict[str, list[str]] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.colors or name in self.lists

    def get(self, name: str) -> AllocatedColor | list[str] | None:
        if name in self.colors:
            return self.colors[name]
        return self.lists.get(name)

    def names(self) -> list[str]:
        return sorted(set(self.colors) | set(self.lists))


def normalize_table(colors: RawColorTable) -> dict[str, str]:
    """Lowercase names and collapse repeated definitions.

    Identical repeats only warn; distinct definitions for one name are fatal.
    """
    merged: dict[str, list[Any]] = {}
    for raw_name, value in colors.items():
        name = str(raw_name).strip().lower()
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        merged.setdefault(name, []).extend(values)

    table: dict[str, str] = {}
    for name in sorted(merged):
        values = merged[name]
        for v in values:
            if not isinstance(v, str):
                raise ColorDefinitionError(
                    f"color [{name}] has malformed structure of type [{type(v).__name__}]",
                    name=name,
                    value=v,
                )
        unique = list(dict.fromkeys(v.strip() for v in values))
        if len(unique) > 1:
            raise ColorDefinitionError(
                f"color [{name}] has multiple distinct definitions: "
                + " ".join(f"[{u}]" for u in unique),
                name=name,
                value=unique,
            )
        if len(values) > 1:
            logger.warning(
                "The color [%s] has multiple identical definitions: %s",
                name,
                " ".join(v.strip() for v in values),
            )
        table[name] = unique[0]
    return table


class ColorResolver:
    """Owns the color table of one render pass.

    Nothing here is global: the resolver, its allocator and its backend live
    exactly as long as the render pass that created them.
    """

    PASSES = ("literal", "alias", "transparency", "lists")

    def __init__(
        self,
        colors: RawColorTable,
        allocator: PaintAllocator,
        settings: Settings | None = None,
        cache: ColorListCache | None = None,
        source_mtime: float | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.allocator = allocator
        self.cache = cache
        self.source_mtime = source_mtime
        self.raw = normalize_table(colors)
        self.definitions = {
            name: parse_definition(value, self.raw, name=name) for name, value in self.raw.items()
        }
        self.table = ColorTable(colors=allocator.colors)
        # alias name -> list color name its chain ends at
        self._alias_lists: dict[str, str] = {}
        self.built = False

    @property
    def backend(self) -> Any:
        return self.allocator.backend

    # ------------------------------------------------------------------
    # Table construction
    # ------------------------------------------------------------------

    def build(self) -> ColorTable:
        start = time.perf_counter()
        for pass_name in self.PASSES:
            t0 = time.perf_counter()
            getattr(self, f"_{pass_name}_pass")()
            logger.debug(
                "  color pass %s completed in %.1fms", pass_name, (time.perf_counter() - t0) * 1000
            )
        self.built = True
        logger.info(
            "Color table: %d colors, %d lists in %.0fms",
            len(self.table.colors),
            len(self.table.lists),
            (time.perf_counter() - start) * 1000,
        )
        return self.table

    def _literal_pass(self) -> None:
        for name in sorted(self.definitions):
            if isinstance(self.definitions[name], LiteralColor):
                channels = parse_channels(self.raw[name], name=name)
                logger.debug("color %s parsed %s -> %s", name, self.raw[name], channels)
                self.allocator.allocate(name, channels)

    def _alias_pass(self) -> None:
        for name in sorted(self.definitions):
            definition = self.definitions[name]
            if not isinstance(definition, AliasColor):
                continue
            end, final = self._follow_alias(name, definition)
            if isinstance(final, LiteralColor):
                self.allocator.alias(name, self.table.colors[end])
            else:
                self._alias_lists[name] = end

    def _follow_alias(
        self, name: str, definition: AliasColor
    ) -> tuple[str, LiteralColor | ListPattern]:
        chain = [name]
        target = definition.target
        while True:
            if target in chain:
                raise CycleError(
                    f"color [{name}] has a circular definition: {' -> '.join(chain + [target])}",
                    name=name,
                    value=self.raw.get(name),
                )
            chain.append(target)
            logger.debug("color lookup %s -> %s", name, target)
            current = self.definitions[target]
            if isinstance(current, AliasColor):
                target = current.target
                continue
            return target, current

    def _transparency_pass(self) -> None:
        if not self.settings.auto_alpha_colors:
            return
        steps = self.settings.auto_alpha_steps
        for name in sorted(self.table.colors):
            if is_tier_name(name):
                continue
            allocated = self.table.colors[name]
            r, g, b = self.backend.rgb(allocated.handle)
            self.allocator.alias(tier_name(name, 0), allocated)
            for i in range(1, steps + 1):
                self.allocator.allocate(
                    tier_name(name, i), (r, g, b, tier_transparency(i, steps))
                )

    def _lists_pass(self) -> None:
        if not self.settings.color_lists_use:
            logger.debug("color lists disabled, skipping list resolution")
            return
        pending = [n for n in sorted(self.definitions) if isinstance(self.definitions[n], ListPattern)]
        if not pending:
            return

        target_hash = namespace_hash(self.definitions)
        entry = None
        if self.cache is not None:
            entry = self.cache.lookup(
                target_hash,
                static=self.settings.color_cache_static,
                rebuild=self.settings.color_cache_rebuild,
                source_mtime=self.source_mtime,
            )

        if entry is None:
            logger.debug("creating color list cache, hash %s", target_hash)
            entry = ColorListCacheEntry(
                namespace_hash=target_hash,
                lists=self._match_lists(pending),
            )
            if self.cache is not None:
                if self.settings.color_cache_create:
                    self.cache.store(entry)
                else:
                    logger.debug("skipping creating cache file [%s]", self.cache.path)
            lists = entry.lists
        else:
            lists = dict(entry.lists)
            missing = [n for n in pending if n not in lists]
            if missing:
                logger.debug("color lists %s not in cache, matching them now", missing)
                lists.update(self._match_lists(missing))

        self.table.lists.update(lists)
        for alias_name, target in sorted(self._alias_lists.items()):
            if target in self.table.lists:
                self.table.lists[alias_name] = self.table.lists[target]

    def _match_lists(self, names: Sequence[str]) -> dict[str, list[str]]:
        universe = sorted(self.table.colors, key=lambda n: (natural_key(n), n))
        return {
            name: resolve_list(self.definitions[name], universe, color_name=name)
            for name in names
        }

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _key(self, name: str) -> str:
        if name in self.table:
            return name
        lowered = name.lower()
        if lowered != name and lowered in self.table:
            logger.warning(
                "Colors should be lowercase. You have asked for color [%s] and it was interpreted as [%s]",
                name,
                lowered,
            )
            return lowered
        return name

    def _check_tier(self, name: str) -> None:
        base, step = split_tier(name.lower())
        if step is not None and base in self.table and not self.settings.auto_alpha_colors:
            raise TransparencyDisabledError(
                f"transparent color [{name}] requested but auto_alpha_colors is not set",
                name=name,
            )

    def resolve(self, name: str) -> LiteralColor:
        """Fully dereferenced literal for a configured name or an inline RGB/HSV string."""
        key = self._key(name)
        if key in self.table.colors:
            return self.table.colors[key].definition
        if key in self.table.lists:
            raise UndefinedColorError(
                f"color [{name}] is a color list, not a single color", name=name
            )
        self._check_tier(name)
        channels = parse_channels(name, name=name)
        if channels is not None:
            return literal_from_channels(channels)
        raise UndefinedColorError(f"color [{name}] is not defined", name=name)

    def fetch(self, name: str) -> Any:
        """Backend handle for a color, allocating inline RGB/HSV colors on first use."""
        key = self._key(name)
        if key in self.table.colors:
            return self.table.colors[key].handle
        if key in self.table.lists:
            raise UndefinedColorError(
                f"color [{name}] is a color list, not a single color", name=name
            )
        self._check_tier(name)
        rgb = validate_rgb(name, name=name)
        if rgb is not None and len(rgb) == 3:
            existing = self.name_for_rgb(*rgb, no_error=True)
            if existing is not None:
                return self.table.colors[existing].handle
        channels = rgb if rgb is not None else parse_channels(name, name=name)
        if channels is None:
            raise UndefinedColorError(f"color [{name}] is not defined", name=name)
        logger.debug("dynamic allocation %s -> %s", name, channels)
        return self.allocator.allocate(name, channels).handle

    def _require_tier(self, name: str) -> None:
        """Tier names are only valid for the tiers the transparency pass created."""
        self._check_tier(name)
        if self._key(name) not in self.table.colors:
            raise UndefinedColorError(f"transparent color [{name}] is not defined", name=name)

    def rgb(self, name: str) -> tuple[int, int, int]:
        """RGB channels of a color; tier suffixes are ignored."""
        base, step = split_tier(name.lower())
        if step is not None:
            self._require_tier(name)
            name = base
        return tuple(self.backend.rgb(self.fetch(name)))  # type: ignore[return-value]

    def opacity(self, name: str | None) -> float:
        if name is not None and is_tier_name(name.lower()) and self.settings.auto_alpha_colors:
            self._require_tier(name)
        return name_opacity(name, self.settings.auto_alpha_colors, self.settings.auto_alpha_steps)

    def transparency(self, name: str | None) -> float:
        return 1.0 - self.opacity(name)

    def name_for_rgb(self, r: int, g: int, b: int, no_error: bool = False) -> str | None:
        """First (lexicographic) non-tier color name with these channels."""
        for name in sorted(self.table.colors):
            if is_tier_name(name):
                continue
            if tuple(self.backend.rgb(self.table.colors[name].handle)) == (r, g, b):
                return name
        if no_error:
            return None
        raise UndefinedColorError(f"no color is defined with RGB value {r},{g},{b}", value=(r, g, b))

    def find_transparent(self) -> tuple[int, int, int]:
        """First RGB triple, stepping channels round-robin from black, that no color uses."""
        rgb = [0, 0, 0]
        idx = 0
        while True:
            rgb[idx % 3] += 1
            idx += 1
            if self.name_for_rgb(*rgb, no_error=True) is None:
                return (rgb[0], rgb[1], rgb[2])

    def expand(self, spec: str) -> list[str]:
        """Split a comma/space separated color string, expanding list colors in place."""
        expanded: list[str] = []
        for name in _EXPAND_SPLIT_RE.split(spec.strip()):
            if not name:
                continue
            if name in self.table.lists:
                expanded.extend(self.table.lists[name])
            else:
                expanded.append(name)
        return expanded

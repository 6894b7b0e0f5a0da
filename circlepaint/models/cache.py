"""Persisted color-list cache record."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ColorListCacheEntry(BaseModel):
    # md5 over the sorted configured color names (the namespace, not the values)
    namespace_hash: str
    # list color name -> ordered candidate color names
    lists: dict[str, list[str]] = Field(default_factory=dict)
    # trusted even when the namespace hash no longer matches
    static: bool = False

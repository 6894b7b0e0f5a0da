"""Render configuration from environment variables (prefix ``CIRCLEPAINT_``) and .env."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Automatic transparency tiers: <color>_a1 .. <color>_aN
    auto_alpha_colors: bool = False
    auto_alpha_steps: int = Field(default=5, ge=0)

    # List colors and their cache
    color_lists_use: bool = True
    color_cache_dir: Path | None = None
    color_cache_file: str = "circlepaint.colorlist"
    color_cache_static: bool = False
    color_cache_rebuild: bool = False
    color_cache_create: bool = True

    # Drawing defaults
    default_color: str = "black"
    default_fill_color: str | None = None
    default_font_color: str = "black"
    default_font_name: str = "Arial"
    svg_font_scale: float = 1.0

    model_config = {
        "env_prefix": "CIRCLEPAINT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()


def configure_logging(config: Settings | None = None) -> None:
    """Apply the default log format once. No-op if the root logger is already configured."""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

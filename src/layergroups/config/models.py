"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, layergroups.toml only contains
overrides. An empty (or absent) config file is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class StyleConfig(BaseModel):
    """[style] section."""

    model_config = {"frozen": True}

    path: Path = Path("style.json")
    indent: int | None = Field(default=2, ge=0)

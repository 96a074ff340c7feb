"""Output mode selection.

The CLI renders ServiceResult for humans (Rich tables and status lines),
for scripts (``--quiet``: ids only), or for machines (``--json``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from layergroups.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from layergroups.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags relevant to formatting."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult according to *settings* (JSON wins over quiet)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2, exclude={"mutated"})
    if settings.quiet:
        return render_quiet(result)
    return render_result(result)

"""Command: print the layer stack in paint order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layergroups.commands._base import LgCommand

if TYPE_CHECKING:
    from layergroups.commands._context import AppContext


@click.command(
    cls=LgCommand,
    examples="""\
  layergroups layers
  layergroups --style base.json layers
  layergroups --json layers""",
)
@click.pass_obj
def layers(app: AppContext) -> None:
    """List every layer with its index and group tag."""
    app.emit(app.groups.list_layers())

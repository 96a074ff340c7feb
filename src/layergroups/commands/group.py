"""Command group: create, move, remove, and inspect layer groups."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from layergroups.commands._base import LgGroup

if TYPE_CHECKING:
    from layergroups.commands._context import AppContext

_GROUP_EXAMPLES = """\
  layergroups group add roads road-major road-minor
  layergroups group add labels '{"id": "place-label", "type": "symbol"}' --before roads
  layergroups group add-layer roads road-path --before road-minor
  layergroups group move labels --before water
  layergroups group assign roads bridge
  layergroups group unassign roads bridge
  layergroups group show roads
  layergroups group list
  layergroups group remove labels"""


class LayerParamType(click.ParamType):
    """A layer given as a JSON object, or a bare id for ``{"id": <id>}``."""

    name = "layer"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> dict[str, Any]:
        if isinstance(value, dict):
            return value
        text = str(value).strip()
        if not text.startswith("{"):
            return {"id": text}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            self.fail(f"invalid layer JSON: {exc}", param, ctx)
        if not isinstance(data, dict):
            self.fail("layer JSON must be an object", param, ctx)
        return data


LAYER = LayerParamType()


@click.group(cls=LgGroup, examples=_GROUP_EXAMPLES)
@click.pass_obj
def group(app: AppContext) -> None:
    """Manage virtual layer groups in the style's layer stack."""


@group.command(
    examples="""\
  layergroups group add roads road-major road-minor
  layergroups group add roads road-service --before water
  layergroups group add labels '{"id": "poi", "type": "symbol"}' --before roads"""
)
@click.argument("group_id")
@click.argument("layers", nargs=-1, required=True, type=LAYER)
@click.option(
    "--before",
    "before_id",
    default=None,
    help="Layer or group id to insert before (default: top of the group, or end of stack).",
)
@click.pass_obj
def add(
    app: AppContext,
    group_id: str,
    layers: tuple[dict[str, Any], ...],
    before_id: str | None,
) -> None:
    """Add LAYERS to GROUP_ID as one contiguous run."""
    app.emit(app.groups.add_group(group_id, list(layers), before_id=before_id))


@group.command(
    name="add-layer",
    examples="""\
  layergroups group add-layer roads road-path
  layergroups group add-layer roads road-path --before road-minor""",
)
@click.argument("group_id")
@click.argument("layer", type=LAYER)
@click.option(
    "--before",
    "before_id",
    default=None,
    help="A layer of the same group to insert before (default: top of the group).",
)
@click.pass_obj
def add_layer(
    app: AppContext, group_id: str, layer: dict[str, Any], before_id: str | None
) -> None:
    """Add a single LAYER to GROUP_ID."""
    app.emit(app.groups.add_layer(group_id, layer, before_id=before_id))


@group.command(
    examples="""\
  layergroups group move labels --before water
  layergroups group move labels --before roads
  layergroups group move roads"""
)
@click.argument("group_id")
@click.option(
    "--before",
    "before_id",
    default=None,
    help="Layer or group id to move before (default: end of stack).",
)
@click.pass_obj
def move(app: AppContext, group_id: str, before_id: str | None) -> None:
    """Move every layer of GROUP_ID, compacting it into one run."""
    app.emit(app.groups.move_group(group_id, before_id=before_id))


@group.command(
    examples="""\
  layergroups group remove labels
  layergroups --quiet group remove labels"""
)
@click.argument("group_id")
@click.pass_obj
def remove(app: AppContext, group_id: str) -> None:
    """Remove GROUP_ID and all of its layers from the stack."""
    app.emit(app.groups.remove_group(group_id))


@group.command(
    examples="""\
  layergroups group assign roads bridge"""
)
@click.argument("group_id")
@click.argument("layer_id")
@click.pass_obj
def assign(app: AppContext, group_id: str, layer_id: str) -> None:
    """Tag LAYER_ID as a member of GROUP_ID without moving it."""
    app.emit(app.groups.assign(group_id, layer_id))


@group.command(
    examples="""\
  layergroups group unassign roads bridge"""
)
@click.argument("group_id")
@click.argument("layer_id")
@click.pass_obj
def unassign(app: AppContext, group_id: str, layer_id: str) -> None:
    """Clear LAYER_ID's tag if it belongs to GROUP_ID, without moving it."""
    app.emit(app.groups.unassign(group_id, layer_id))


@group.command(
    examples="""\
  layergroups group show roads
  layergroups --json group show roads"""
)
@click.argument("group_id")
@click.pass_obj
def show(app: AppContext, group_id: str) -> None:
    """Show the layers, bounds, and contiguity of GROUP_ID."""
    app.emit(app.groups.show_group(group_id))


@group.command(
    name="list",
    examples="""\
  layergroups group list
  layergroups --quiet group list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all groups in stack order."""
    app.emit(app.groups.list_groups())

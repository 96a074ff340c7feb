"""Group scan rules over a snapshot of the layer stack.

Every function takes the full ordered sequence and walks it linearly.
Nothing is cached: callers pass a fresh read of the stack on each call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layergroups.domain.layers import layer_group

if TYPE_CHECKING:
    from collections.abc import Sequence

    from layergroups.domain.layers import Layer


def first_index(layers: Sequence[Layer], group_id: str) -> int | None:
    """Index of the first layer tagged *group_id*, or None."""
    for index, layer in enumerate(layers):
        if layer_group(layer) == group_id:
            return index
    return None


def last_index(layers: Sequence[Layer], group_id: str) -> int | None:
    """Index of the last layer of the run that starts at :func:`first_index`.

    The run continues while a layer is tagged *group_id* or its own id
    equals *group_id* (a placeholder layer standing in for an empty group).
    Members outside the first run are not reached.
    """
    index = first_index(layers, group_id)
    if index is None:
        return None
    while index < len(layers) and (
        layers[index].id == group_id or layer_group(layers[index]) == group_id
    ):
        index += 1
    return index - 1


def id_at(layers: Sequence[Layer], index: int | None) -> str | None:
    """Map an index to a layer id; None and out-of-range map to None."""
    if index is None or not 0 <= index < len(layers):
        return None
    return layers[index].id


def member_ids(layers: Sequence[Layer], group_id: str) -> list[str]:
    """Ids of all layers tagged *group_id*, in stack order."""
    return [layer.id for layer in layers if layer_group(layer) == group_id]


def group_ids(layers: Sequence[Layer]) -> list[str]:
    """Distinct group tags in order of first appearance."""
    seen: dict[str, None] = {}
    for layer in layers:
        group = layer_group(layer)
        if group is not None:
            seen.setdefault(group, None)
    return list(seen)


def is_contiguous(layers: Sequence[Layer], group_id: str) -> bool:
    """Whether every member of *group_id* sits in one consecutive run.

    A group with no members is trivially contiguous.
    """
    positions = [i for i, layer in enumerate(layers) if layer_group(layer) == group_id]
    if not positions:
        return True
    return positions[-1] - positions[0] + 1 == len(positions)

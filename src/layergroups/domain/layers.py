"""Layer model and group-tag helpers.

A group is never stored as an entity. Membership is the value of
``metadata["group"]`` on each layer; a group exists while at least one
layer carries its tag.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

GROUP_KEY = "group"


class Layer(BaseModel):
    """One entry of the layer stack.

    Only ``id`` and ``metadata`` are interpreted here. Every other key of a
    style layer (``type``, ``source``, ``paint``, ...) is kept as an extra
    field so documents round-trip untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    metadata: dict[str, Any] | None = None

    def to_style(self) -> dict[str, Any]:
        """Plain dict for serialization. A ``None`` metadata is omitted."""
        data = self.model_dump()
        if data.get("metadata") is None:
            data.pop("metadata", None)
        return data


def layer_group(layer: Layer | None) -> str | None:
    """Return the group tag of *layer*, or None when untagged or empty.

    Only a non-empty string is a tag; any other value under ``group`` is
    treated as no membership.
    """
    if layer is None or not layer.metadata:
        return None
    group = layer.metadata.get(GROUP_KEY)
    if not isinstance(group, str) or not group:
        return None
    return group


def tag_layer(layer: Layer, group_id: str) -> Layer:
    """Return a copy of *layer* tagged with *group_id*.

    Existing metadata keys are preserved; the caller's object is untouched.
    """
    metadata = {**(layer.metadata or {}), GROUP_KEY: group_id}
    return layer.model_copy(update={"metadata": metadata})

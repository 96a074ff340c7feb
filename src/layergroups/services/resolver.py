"""GroupResolver: group index queries and placement over a host stack.

Groups are virtual: a group is the set of layers whose ``metadata.group``
equals its id. The resolver keeps no state of its own. Every call re-reads
the host's sequence, computes an anchor, and then issues primitive host
calls (insert / move / remove).

INVARIANT: add_group, add_layer_to_group and move_group leave the target
group as one contiguous run. move_layer_to_group and remove_layer_from_group
are metadata-only and may fragment a group; move_group compacts it again.

Batch operations are not transactional. A host failure mid-batch propagates
and leaves earlier host calls applied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layergroups.domain import scan
from layergroups.domain.errors import InvalidAnchorError
from layergroups.domain.layers import GROUP_KEY, layer_group, tag_layer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from layergroups.domain.layers import Layer
    from layergroups.infrastructure.stack import LayerStack

logger = logging.getLogger(__name__)


class GroupResolver:
    """Group Index & Placement Resolver bound to one host stack."""

    def __init__(self, stack: LayerStack) -> None:
        self._stack = stack

    # ------------------------------------------------------------------
    # Index queries
    # ------------------------------------------------------------------

    def first_index(self, group_id: str) -> int | None:
        return scan.first_index(self._stack.layers(), group_id)

    def last_index(self, group_id: str) -> int | None:
        return scan.last_index(self._stack.layers(), group_id)

    def first_id(self, group_id: str) -> str | None:
        layers = self._stack.layers()
        return scan.id_at(layers, scan.first_index(layers, group_id))

    def last_id(self, group_id: str) -> str | None:
        layers = self._stack.layers()
        return scan.id_at(layers, scan.last_index(layers, group_id))

    def group_of(self, layer_id: str) -> str | None:
        return layer_group(self._stack.get_layer(layer_id))

    def exists(self, group_id: str) -> bool:
        return self.first_index(group_id) is not None

    def layer_ids(self, group_id: str) -> list[str]:
        """All member ids of *group_id* in stack order, fragmented or not."""
        return scan.member_ids(self._stack.layers(), group_id)

    def list_groups(self) -> list[str]:
        return scan.group_ids(self._stack.layers())

    def is_contiguous(self, group_id: str) -> bool:
        return scan.is_contiguous(self._stack.layers(), group_id)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def resolve_anchor(self, before_id: str | None) -> str | None:
        """Turn "insert before X" into a concrete layer id (None = append).

        X may name a layer or a group. A group resolves to its first layer;
        a grouped layer resolves to the first layer of its group, so an
        insertion never lands inside another group's run.
        """
        if before_id is None:
            return None
        if self._stack.get_layer(before_id) is None:
            return self.first_id(before_id)
        group = self.group_of(before_id)
        if group is not None:
            return self.first_id(group)
        return before_id

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_group(
        self,
        group_id: str,
        layers: Iterable[Layer],
        before_id: str | None = None,
        *,
        prevent_update: bool = False,
    ) -> list[str]:
        """Tag *layers* with *group_id* and insert them as one run.

        Without *before_id* the batch goes in front of the group's current
        first layer, so repeated calls grow the group in place; a new group
        is appended to the end of the stack. Returns the inserted ids.
        """
        if before_id is None:
            anchor = self.first_id(group_id)
        else:
            anchor = self.resolve_anchor(before_id)

        inserted: list[str] = []
        for layer in layers:
            self.add_layer_to_group(
                group_id,
                layer,
                anchor,
                check_anchor=False,
                prevent_update=prevent_update,
            )
            inserted.append(layer.id)
        logger.debug("Added %d layers to group %s before %s", len(inserted), group_id, anchor)
        return inserted

    def add_layer_to_group(
        self,
        group_id: str,
        layer: Layer,
        before_id: str | None = None,
        *,
        check_anchor: bool = True,
        prevent_update: bool = False,
    ) -> str:
        """Tag *layer* with *group_id* and insert it.

        An explicit *before_id* must be a layer of the same group, otherwise
        :class:`InvalidAnchorError` is raised. Without one the layer becomes
        the group's new first layer. ``check_anchor=False`` skips both rules
        and inserts before *before_id* as given; :meth:`add_group` uses it
        after resolving its anchor once for the whole batch.
        """
        if check_anchor:
            if before_id is not None:
                if self._stack.get_layer(before_id) is None or self.group_of(before_id) != group_id:
                    raise InvalidAnchorError(group_id, before_id)
            else:
                before_id = self.first_id(group_id)

        self._stack.insert_before(
            tag_layer(layer, group_id), before_id, prevent_update=prevent_update
        )
        return layer.id

    def move_group(
        self,
        group_id: str,
        before_id: str | None = None,
        *,
        prevent_update: bool = False,
    ) -> list[str]:
        """Move every member of *group_id* before the resolved anchor.

        Members keep their relative order and end up contiguous, which also
        repairs a group fragmented by metadata-only edits. When the anchor
        is itself a member, the group is compacted in front of the first
        non-member that follows the anchor. Returns the moved ids.
        """
        layers = self._stack.layers()
        members = scan.member_ids(layers, group_id)
        if not members:
            return []

        anchor = self.resolve_anchor(before_id)
        if anchor in members:
            anchor = self._next_non_member(layers, anchor, group_id)

        for layer_id in members:
            self._stack.move_before(layer_id, anchor, prevent_update=prevent_update)
        logger.debug("Moved group %s (%d layers) before %s", group_id, len(members), anchor)
        return members

    def remove_group(self, group_id: str, *, prevent_update: bool = False) -> list[str]:
        """Remove every member of *group_id* from the stack.

        Ids are collected first and removed by id, so index shifts during
        removal cannot skip a member. Returns the removed ids.
        """
        members = self.layer_ids(group_id)
        for layer_id in members:
            self._stack.remove(layer_id, prevent_update=prevent_update)
        logger.debug("Removed group %s (%d layers)", group_id, len(members))
        return members

    def move_layer_to_group(self, group_id: str, layer_id: str) -> bool:
        """Retag a layer as a member of *group_id*. Metadata only.

        The layer is not repositioned, so the group may become fragmented.
        Returns False if the layer does not exist.
        """
        layer = self._stack.get_layer(layer_id)
        if layer is None:
            return False
        if layer.metadata is None:
            layer.metadata = {}
        layer.metadata[GROUP_KEY] = group_id
        return True

    def remove_layer_from_group(self, group_id: str, layer_id: str) -> bool:
        """Clear a layer's tag if it currently belongs to *group_id*. Metadata only.

        Returns True if the tag was cleared; a non-member is left alone.
        """
        layer = self._stack.get_layer(layer_id)
        if layer is None or layer_group(layer) != group_id:
            return False
        del layer.metadata[GROUP_KEY]
        return True

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _next_non_member(layers: list[Layer], anchor: str, group_id: str) -> str | None:
        start = next(i for i, layer in enumerate(layers) if layer.id == anchor)
        for layer in layers[start + 1 :]:
            if layer_group(layer) != group_id:
                return layer.id
        return None

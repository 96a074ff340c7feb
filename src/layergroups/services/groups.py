"""GroupService: ServiceResult adapter over :class:`GroupResolver`.

Converts raw layer payloads into :class:`Layer` models, runs the resolver,
and maps domain and host failures onto structured errors:

- ``INVALID_LAYER``: a layer payload failed validation.
- ``INVALID_ANCHOR``: explicit anchor outside the target group.
- ``NOT_FOUND``: an unknown layer or group id where one is required.
- ``DUPLICATE_LAYER``: an inserted id already exists in the stack.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from layergroups.domain.errors import InvalidAnchorError
from layergroups.domain.layers import Layer, layer_group
from layergroups.infrastructure.stack import DuplicateLayerError
from layergroups.services.base import BaseService
from layergroups.services.resolver import GroupResolver
from layergroups.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from layergroups.infrastructure.stack import LayerStack

log = structlog.get_logger(__name__)


def _failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )


class GroupService(BaseService):
    """Group operations for the CLI and other adapters."""

    def __init__(self, stack: LayerStack) -> None:
        super().__init__(stack)
        self._resolver = GroupResolver(stack)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_group(
        self,
        group_id: str,
        layers: list[dict[str, Any]],
        *,
        before_id: str | None = None,
    ) -> ServiceResult:
        op = "add_group"
        try:
            models = [Layer.model_validate(raw) for raw in layers]
        except ValidationError as exc:
            return _failure(op, "INVALID_LAYER", f"Invalid layer payload: {exc}")
        if not models:
            return _failure(op, "INVALID_LAYER", "At least one layer is required")

        try:
            inserted = self._resolver.add_group(group_id, models, before_id)
        except DuplicateLayerError as exc:
            return _failure(op, "DUPLICATE_LAYER", str(exc), layer_id=exc.layer_id)

        log.info("group.added", group_id=group_id, layers=len(inserted), before_id=before_id)
        return ServiceResult(
            ok=True,
            op=op,
            mutated=True,
            data={"group_id": group_id, "layer_ids": inserted, **self._bounds(group_id)},
        )

    def add_layer(
        self,
        group_id: str,
        layer: dict[str, Any],
        *,
        before_id: str | None = None,
    ) -> ServiceResult:
        op = "add_layer"
        try:
            model = Layer.model_validate(layer)
        except ValidationError as exc:
            return _failure(op, "INVALID_LAYER", f"Invalid layer payload: {exc}")

        try:
            layer_id = self._resolver.add_layer_to_group(group_id, model, before_id)
        except InvalidAnchorError as exc:
            return _failure(
                op, "INVALID_ANCHOR", str(exc), group_id=group_id, before_id=exc.before_id
            )
        except DuplicateLayerError as exc:
            return _failure(op, "DUPLICATE_LAYER", str(exc), layer_id=exc.layer_id)

        log.info("group.layer_added", group_id=group_id, layer_id=layer_id, before_id=before_id)
        return ServiceResult(
            ok=True,
            op=op,
            mutated=True,
            data={"group_id": group_id, "id": layer_id, **self._bounds(group_id)},
        )

    def move_group(self, group_id: str, *, before_id: str | None = None) -> ServiceResult:
        op = "move_group"
        moved = self._resolver.move_group(group_id, before_id)
        warnings: list[str] = []
        if not moved:
            warnings.append(f"Group {group_id!r} has no layers; nothing moved")
        log.info("group.moved", group_id=group_id, layers=len(moved), before_id=before_id)
        return ServiceResult(
            ok=True,
            op=op,
            mutated=bool(moved),
            warnings=warnings,
            data={"group_id": group_id, "layer_ids": moved, **self._bounds(group_id)},
        )

    def remove_group(self, group_id: str) -> ServiceResult:
        op = "remove_group"
        removed = self._resolver.remove_group(group_id)
        warnings: list[str] = []
        if not removed:
            warnings.append(f"Group {group_id!r} has no layers; nothing removed")
        log.info("group.removed", group_id=group_id, layers=len(removed))
        return ServiceResult(
            ok=True,
            op=op,
            mutated=bool(removed),
            warnings=warnings,
            data={"group_id": group_id, "layer_ids": removed},
        )

    def assign(self, group_id: str, layer_id: str) -> ServiceResult:
        """Retag a layer into *group_id* without moving it."""
        op = "assign"
        if not self._resolver.move_layer_to_group(group_id, layer_id):
            return _failure(op, "NOT_FOUND", f"No layer with id {layer_id!r}", layer_id=layer_id)

        warnings: list[str] = []
        contiguous = self._resolver.is_contiguous(group_id)
        if not contiguous:
            warnings.append(
                f"Group {group_id!r} is no longer contiguous; "
                f"run 'group move {group_id}' to compact it"
            )
        log.info("group.assigned", group_id=group_id, layer_id=layer_id, contiguous=contiguous)
        return ServiceResult(
            ok=True,
            op=op,
            mutated=True,
            warnings=warnings,
            data={"group_id": group_id, "id": layer_id, "contiguous": contiguous},
        )

    def unassign(self, group_id: str, layer_id: str) -> ServiceResult:
        """Clear a layer's tag if it belongs to *group_id*, without moving it."""
        op = "unassign"
        layer = self._stack.get_layer(layer_id)
        if layer is None:
            return _failure(op, "NOT_FOUND", f"No layer with id {layer_id!r}", layer_id=layer_id)

        cleared = self._resolver.remove_layer_from_group(group_id, layer_id)
        warnings: list[str] = []
        if not cleared:
            warnings.append(f"Layer {layer_id!r} is not in group {group_id!r}; unchanged")
        elif not self._resolver.is_contiguous(group_id):
            warnings.append(
                f"Group {group_id!r} is no longer contiguous; "
                f"run 'group move {group_id}' to compact it"
            )
        log.info("group.unassigned", group_id=group_id, layer_id=layer_id, cleared=cleared)
        return ServiceResult(
            ok=True,
            op=op,
            mutated=cleared,
            warnings=warnings,
            data={"group_id": group_id, "id": layer_id, "cleared": cleared},
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def show_group(self, group_id: str) -> ServiceResult:
        op = "show_group"
        if not self._resolver.exists(group_id):
            return _failure(op, "NOT_FOUND", f"No group with id {group_id!r}", group_id=group_id)

        layers = self._stack.layers()
        positions = {layer.id: index for index, layer in enumerate(layers)}
        items = [
            {"id": layer_id, "index": positions[layer_id]}
            for layer_id in self._resolver.layer_ids(group_id)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "group_id": group_id,
                "contiguous": self._resolver.is_contiguous(group_id),
                **self._bounds(group_id),
                "count": len(items),
                "items": items,
            },
        )

    def list_groups(self) -> ServiceResult:
        items = []
        for group_id in self._resolver.list_groups():
            items.append(
                {
                    "id": group_id,
                    "count": len(self._resolver.layer_ids(group_id)),
                    "first_id": self._resolver.first_id(group_id),
                    "last_id": self._resolver.last_id(group_id),
                    "contiguous": self._resolver.is_contiguous(group_id),
                }
            )
        return ServiceResult(ok=True, op="list_groups", data={"count": len(items), "items": items})

    def list_layers(self) -> ServiceResult:
        items = [
            {"id": layer.id, "index": index, "group": layer_group(layer)}
            for index, layer in enumerate(self._stack.layers())
        ]
        return ServiceResult(ok=True, op="list_layers", data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _bounds(self, group_id: str) -> dict[str, Any]:
        return {
            "first_id": self._resolver.first_id(group_id),
            "last_id": self._resolver.last_id(group_id),
        }

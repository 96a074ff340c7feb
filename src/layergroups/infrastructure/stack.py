"""Host layer stacks.

:class:`LayerStack` is the contract the group resolver relies on: the host
owns the ordered sequence and is the only thing that inserts, moves, or
removes layers. :class:`InMemoryLayerStack` is the list-backed host used by
the CLI and the test suite.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from layergroups.domain.layers import Layer

logger = logging.getLogger(__name__)


class StackError(Exception):
    """Base class for host stack failures."""


class LayerNotFoundError(StackError, KeyError):
    """A layer id (target or anchor) is not in the stack."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(layer_id)

    def __str__(self) -> str:
        return f"No layer with id {self.layer_id!r}"


class DuplicateLayerError(StackError, ValueError):
    """A layer with the same id already exists in the stack."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"Layer with id {layer_id!r} already exists")


class LayerStack(Protocol):
    """Host container contract.

    ``before_id=None`` always means "at the end of the stack".
    """

    def get_layer(self, layer_id: str) -> Layer | None: ...

    def layers(self) -> list[Layer]: ...

    def insert_before(
        self, layer: Layer, before_id: str | None = None, *, prevent_update: bool = False
    ) -> None: ...

    def move_before(
        self, layer_id: str, before_id: str | None = None, *, prevent_update: bool = False
    ) -> None: ...

    def remove(self, layer_id: str, *, prevent_update: bool = False) -> None: ...


class InMemoryLayerStack:
    """List-backed layer stack.

    Listeners registered via :meth:`subscribe` are called with
    ``(op, layer_id)`` after each mutation, unless the caller passes
    ``prevent_update=True``.
    """

    def __init__(self, layers: Iterable[Layer] = ()) -> None:
        self._layers: list[Layer] = []
        self._listeners: list[Callable[[str, str], None]] = []
        for layer in layers:
            self.insert_before(layer, prevent_update=True)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_layer(self, layer_id: str) -> Layer | None:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def layers(self) -> list[Layer]:
        """Fresh snapshot of the ordered sequence (layers are shared, not copied)."""
        return list(self._layers)

    def ids(self) -> list[str]:
        return [layer.id for layer in self._layers]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert_before(
        self, layer: Layer, before_id: str | None = None, *, prevent_update: bool = False
    ) -> None:
        if self.get_layer(layer.id) is not None:
            raise DuplicateLayerError(layer.id)
        position = self._position_of(before_id)
        self._layers.insert(position, layer)
        logger.debug("Inserted layer %s before %s", layer.id, before_id)
        self._notify("insert", layer.id, prevent_update=prevent_update)

    def move_before(
        self, layer_id: str, before_id: str | None = None, *, prevent_update: bool = False
    ) -> None:
        layer = self.get_layer(layer_id)
        if layer is None:
            raise LayerNotFoundError(layer_id)
        if before_id == layer_id:
            return
        # Validate the anchor before touching the list.
        self._position_of(before_id)
        self._layers.remove(layer)
        self._layers.insert(self._position_of(before_id), layer)
        logger.debug("Moved layer %s before %s", layer_id, before_id)
        self._notify("move", layer_id, prevent_update=prevent_update)

    def remove(self, layer_id: str, *, prevent_update: bool = False) -> None:
        layer = self.get_layer(layer_id)
        if layer is None:
            raise LayerNotFoundError(layer_id)
        self._layers.remove(layer)
        logger.debug("Removed layer %s", layer_id)
        self._notify("remove", layer_id, prevent_update=prevent_update)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[str, str], None]) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _position_of(self, before_id: str | None) -> int:
        if before_id is None:
            return len(self._layers)
        for index, layer in enumerate(self._layers):
            if layer.id == before_id:
                return index
        raise LayerNotFoundError(before_id)

    def _notify(self, op: str, layer_id: str, *, prevent_update: bool) -> None:
        if prevent_update:
            return
        for listener in list(self._listeners):
            listener(op, layer_id)

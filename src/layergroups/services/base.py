"""BaseService: shared foundation for services bound to a layer stack."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layergroups.infrastructure.stack import LayerStack


class BaseService:
    """Abstract base for service-layer classes.

    Every service receives the host :class:`LayerStack` at construction
    time and reads it fresh on each call.
    """

    def __init__(self, stack: LayerStack) -> None:
        self._stack = stack

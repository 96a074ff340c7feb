"""Style document I/O.

A style document is a JSON object with a ``layers`` array. The layers are
loaded into an :class:`InMemoryLayerStack`; every other top-level key is
carried through unchanged when the document is written back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from layergroups.domain.layers import Layer
from layergroups.infrastructure.stack import InMemoryLayerStack, StackError

logger = logging.getLogger(__name__)


class StyleFormatError(Exception):
    """The style file is not valid JSON or has no usable ``layers`` array."""


@dataclass
class StyleDocument:
    """A loaded style: its layer stack plus the remaining top-level keys."""

    path: Path
    stack: InMemoryLayerStack
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "layers": [layer.to_style() for layer in self.stack]}


def load_style(path: Path) -> StyleDocument:
    """Read *path* into a :class:`StyleDocument`.

    A missing file yields an empty document, so the first mutating command
    creates it.
    """
    if not path.exists():
        logger.debug("Style file %s not found, starting empty", path)
        return StyleDocument(path=path, stack=InMemoryLayerStack())

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise StyleFormatError(msg) from exc

    if not isinstance(data, dict) or not isinstance(data.get("layers", []), list):
        msg = f"{path} must contain a JSON object with a 'layers' array"
        raise StyleFormatError(msg)

    raw_layers = data.pop("layers", [])
    try:
        layers = [Layer.model_validate(raw) for raw in raw_layers]
        stack = InMemoryLayerStack(layers)
    except (ValidationError, StackError) as exc:
        msg = f"Invalid layers in {path}: {exc}"
        raise StyleFormatError(msg) from exc

    logger.debug("Loaded %d layers from %s", len(stack), path)
    return StyleDocument(path=path, stack=stack, extra=data)


def save_style(document: StyleDocument, *, indent: int | None = 2) -> None:
    """Write *document* back to its path (parent directories created)."""
    document.path.parent.mkdir(parents=True, exist_ok=True)
    rendered = json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)
    document.path.write_text(rendered + "\n", encoding="utf-8")
    logger.debug("Wrote %d layers to %s", len(document.stack), document.path)

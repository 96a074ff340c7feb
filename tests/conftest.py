"""Shared pytest fixtures and test helpers for layergroups tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from layergroups.domain.layers import Layer
from layergroups.infrastructure.stack import InMemoryLayerStack
from layergroups.services.resolver import GroupResolver


def make_layer(layer_id: str, group: str | None = None, **extra: Any) -> Layer:
    """Build a Layer, optionally pre-tagged with *group*."""
    metadata = {"group": group} if group is not None else None
    return Layer(id=layer_id, metadata=metadata, **extra)


def ids(stack: InMemoryLayerStack) -> list[str]:
    return [layer.id for layer in stack.layers()]


def read_style(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def stack() -> InMemoryLayerStack:
    """Three ungrouped layers: A, B, C."""
    return InMemoryLayerStack([make_layer("A"), make_layer("B"), make_layer("C")])


@pytest.fixture
def resolver(stack: InMemoryLayerStack) -> GroupResolver:
    return GroupResolver(stack)


@pytest.fixture
def style_file(tmp_path: Path) -> Path:
    """A style.json with layers A, B, C."""
    path = tmp_path / "style.json"
    path.write_text(
        json.dumps(
            {
                "version": 8,
                "sources": {},
                "layers": [
                    {"id": "A", "type": "background"},
                    {"id": "B", "type": "fill", "source": "s"},
                    {"id": "C", "type": "line", "source": "s"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def _isolated_style(style_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the style's directory so the CLI picks up style.json.

    Use via ``@pytest.mark.usefixtures("_isolated_style")`` on command test
    classes.
    """
    monkeypatch.delenv("LAYERGROUPS_CONFIG", raising=False)
    monkeypatch.chdir(style_file.parent)

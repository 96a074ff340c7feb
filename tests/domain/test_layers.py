"""Tests for the layer model and group-tag helpers."""

from __future__ import annotations

import pytest

from layergroups.domain.layers import GROUP_KEY, Layer, layer_group, tag_layer


class TestLayer:
    def test_extra_style_keys_round_trip(self) -> None:
        layer = Layer.model_validate(
            {"id": "roads", "type": "line", "paint": {"line-width": 2}}
        )
        assert layer.to_style() == {"id": "roads", "type": "line", "paint": {"line-width": 2}}

    def test_none_metadata_omitted(self) -> None:
        assert "metadata" not in Layer(id="a").to_style()

    def test_metadata_kept(self) -> None:
        layer = Layer(id="a", metadata={"group": "g", "note": 1})
        assert layer.to_style()["metadata"] == {"group": "g", "note": 1}


class TestLayerGroup:
    def test_tagged(self) -> None:
        assert layer_group(Layer(id="a", metadata={GROUP_KEY: "g"})) == "g"

    def test_no_metadata(self) -> None:
        assert layer_group(Layer(id="a")) is None

    def test_metadata_without_group(self) -> None:
        assert layer_group(Layer(id="a", metadata={"other": 1})) is None

    def test_empty_group_is_absent(self) -> None:
        assert layer_group(Layer(id="a", metadata={GROUP_KEY: ""})) is None

    def test_missing_layer(self) -> None:
        assert layer_group(None) is None

    @pytest.mark.parametrize("tag", [["a", "b"], {"name": "g"}, 7, True])
    def test_non_string_tag_is_absent(self, tag: object) -> None:
        assert layer_group(Layer(id="a", metadata={GROUP_KEY: tag})) is None


class TestTagLayer:
    def test_merges_existing_metadata(self) -> None:
        original = Layer(id="a", metadata={"source-layer": "roads"})
        tagged = tag_layer(original, "g")
        assert tagged.metadata == {"source-layer": "roads", GROUP_KEY: "g"}

    def test_does_not_mutate_original(self) -> None:
        original = Layer(id="a", metadata={"x": 1})
        tag_layer(original, "g")
        assert original.metadata == {"x": 1}

    def test_retags(self) -> None:
        tagged = tag_layer(Layer(id="a", metadata={GROUP_KEY: "old"}), "new")
        assert layer_group(tagged) == "new"

    def test_keeps_extra_fields(self) -> None:
        tagged = tag_layer(Layer.model_validate({"id": "a", "type": "fill"}), "g")
        assert tagged.to_style()["type"] == "fill"

"""Tests for Rich renderers and output mode selection."""

from __future__ import annotations

import json

from layergroups.output.formatters import OutputSettings, format_result
from layergroups.output.renderers import render_quiet, render_result
from layergroups.services.result import ServiceError, ServiceResult


def _groups_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="list_groups",
        data={
            "count": 2,
            "items": [
                {"id": "roads", "count": 2, "first_id": "r1", "last_id": "r2", "contiguous": True},
                {
                    "id": "labels",
                    "count": 3,
                    "first_id": "l1",
                    "last_id": "l1",
                    "contiguous": False,
                },
            ],
        },
    )


class TestRenderResult:
    def test_mutation(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_group",
            data={
                "group_id": "roads",
                "layer_ids": ["r1", "r2"],
                "first_id": "r1",
                "last_id": "r2",
            },
        )
        output = render_result(result)
        assert "OK" in output
        assert "add_group" in output
        assert "r1, r2" in output

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="add_layer",
            error=ServiceError(
                code="INVALID_ANCHOR", message="bad anchor", detail={"before_id": "A"}
            ),
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "bad anchor" in output
        assert "before_id: A" in output

    def test_groups_table(self) -> None:
        output = render_result(_groups_result())
        assert "roads" in output
        assert "labels" in output
        assert "fragmented" in output

    def test_empty_groups(self) -> None:
        result = ServiceResult(ok=True, op="list_groups", data={"count": 0, "items": []})
        assert render_result(result) == "No groups."

    def test_layers_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_layers",
            data={"count": 1, "items": [{"id": "road-major", "index": 0, "group": "roads"}]},
        )
        output = render_result(result)
        assert "road-major" in output
        assert "roads" in output

    def test_show_group(self) -> None:
        result = ServiceResult(
            ok=True,
            op="show_group",
            data={
                "group_id": "roads",
                "contiguous": True,
                "first_id": "r1",
                "last_id": "r1",
                "count": 1,
                "items": [{"id": "r1", "index": 4}],
            },
        )
        output = render_result(result)
        assert "roads" in output
        assert "r1" in output

    def test_markup_in_ids_is_literal(self) -> None:
        groups = ServiceResult(
            ok=True,
            op="list_groups",
            data={
                "count": 1,
                "items": [
                    {
                        "id": "poi[bold]",
                        "count": 2,
                        "first_id": "label[/en]",
                        "last_id": "x[red]",
                        "contiguous": True,
                    }
                ],
            },
        )
        output = render_result(groups)
        for text in ("poi[bold]", "label[/en]", "x[red]"):
            assert text in output

        shown = ServiceResult(
            ok=True,
            op="show_group",
            data={
                "group_id": "poi[bold]",
                "contiguous": False,
                "first_id": "label[/en]",
                "last_id": "label[/en]",
                "count": 1,
                "items": [{"id": "label[/en]", "index": 0}],
            },
        )
        assert render_result(shown).count("label[/en]") == 3

    def test_unknown_op_is_generic(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"answer": 42}))
        assert "answer: 42" in output


class TestRenderQuiet:
    def test_items(self) -> None:
        assert render_quiet(_groups_result()) == "roads\nlabels"

    def test_layer_ids(self) -> None:
        result = ServiceResult(ok=True, op="remove_group", data={"layer_ids": ["a", "b"]})
        assert render_quiet(result) == "a\nb"

    def test_single_id(self) -> None:
        result = ServiceResult(ok=True, op="assign", data={"id": "a", "group_id": "g"})
        assert render_quiet(result) == "a"

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="show_group", error=ServiceError(code="NOT_FOUND", message="missing")
        )
        assert render_quiet(result) == "ERROR: show_group: missing"


class TestFormatResult:
    def test_json_excludes_mutated(self) -> None:
        result = ServiceResult(ok=True, op="add_group", mutated=True)
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert "mutated" not in parsed

    def test_json_wins_over_quiet(self) -> None:
        result = ServiceResult(ok=True, op="list_groups", data={"items": []})
        output = format_result(result, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "list_groups"

    def test_default_is_human(self) -> None:
        assert format_result(ServiceResult(ok=True, op="custom")).startswith("OK")

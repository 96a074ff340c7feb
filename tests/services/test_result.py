"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from layergroups.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add_group", data={"group_id": "roads"})
        assert result.ok is True
        assert result.op == "add_group"
        assert result.data == {"group_id": "roads"}
        assert result.warnings == []
        assert result.error is None
        assert result.mutated is False

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="No group")
        result = ServiceResult(ok=False, op="show_group", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="list_groups", data={"count": 0, "items": []})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["items"] == []

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="INVALID_ANCHOR",
            message="bad anchor",
            detail={"group_id": "g", "before_id": "A"},
        )
        assert error.detail["before_id"] == "A"

    def test_default_detail(self) -> None:
        assert ServiceError(code="E", message="bad").detail == {}

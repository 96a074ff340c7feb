"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from layergroups.config.logging import bind_style, configure_logging, level_for


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lg = logging.getLogger("layergroups")
    lg_level = lg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lg.setLevel(lg_level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


def _ours(handlers: list[logging.Handler]) -> list[logging.Handler]:
    return [h for h in handlers if h.get_name() == "layergroups"]


class TestLevelFor:
    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_steps(self, verbosity: int, level: int) -> None:
        assert level_for(verbosity) == level


class TestConfigureLogging:
    def test_package_level_follows_verbosity(self) -> None:
        configure_logging(verbosity=2)
        assert logging.getLogger("layergroups").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_single_v_shows_events_not_host_calls(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbosity=1, log_json=True)
        structlog.get_logger("layergroups.services.groups").info("group.added", group_id="g")
        logging.getLogger("layergroups.infrastructure.stack").debug("Inserted layer X before A")
        lines = capfd.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["group.added"]

    def test_info_suppressed_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=0, log_json=True)
        structlog.get_logger("layergroups.services.groups").info("group.added", group_id="g")
        assert capfd.readouterr().err == ""

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=2, log_json=True)
        structlog.get_logger("layergroups.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert "timestamp" in parsed

    def test_logger_names_drop_package_prefix(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbosity=2, log_json=True)
        logging.getLogger("layergroups.services.resolver").debug("Moved group g")
        logging.getLogger("thirdparty").warning("untouched")
        first, second = (json.loads(line) for line in capfd.readouterr().err.strip().splitlines())
        assert first["logger"] == "services.resolver"
        assert first["level"] == "debug"
        assert second["logger"] == "thirdparty"

    def test_bound_style_on_every_record(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbosity=2, log_json=True)
        bind_style(tmp_path / "style.json")
        structlog.get_logger("layergroups.services.groups").info("group.moved", group_id="g")
        logging.getLogger("layergroups.infrastructure.style").debug("Wrote 3 layers")
        for line in capfd.readouterr().err.strip().splitlines():
            assert json.loads(line)["style"] == str(tmp_path / "style.json")

    def test_idempotent_calls(self) -> None:
        configure_logging(verbosity=2, log_json=False)
        configure_logging(verbosity=2, log_json=True)
        assert len(_ours(logging.getLogger().handlers)) == 1

    def test_foreign_handlers_kept(self) -> None:
        foreign = logging.NullHandler()
        logging.getLogger().addHandler(foreign)
        configure_logging()
        assert foreign in logging.getLogger().handlers

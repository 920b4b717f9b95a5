from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from vs_common.config import parse_bool_env, parse_choice_env, parse_path_env
from vs_common.logging import LogSettings, configure_logging

pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("1", True), ("Yes", True), (" on ", True), ("0", False), ("nope", False)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_parse_path_and_choice_env() -> None:
    assert parse_path_env("  ") is None
    assert parse_path_env("~/skills") == Path.home() / "skills"
    assert parse_choice_env(" Parent ", ("parent", "ancestors")) == "parent"
    assert parse_choice_env("sideways", ("parent", "ancestors")) is None


def test_configure_logging_writes_json_file(tmp_path: Path, restore_root_logger: logging.Logger) -> None:
    log_file = tmp_path / "logs" / "vs.log"

    configure_logging(LogSettings(level="INFO", log_file=log_file, json_output=True))
    logging.getLogger("vs_core.test").info("catalog loaded")
    for handler in restore_root_logger.handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "catalog loaded"
    assert record["level"] == "info"
    assert "timestamp" in record


@pytest.mark.parametrize(
    "env, level, json_output",
    [
        ({}, logging.WARNING, False),
        ({"VS_LOG_LEVEL": "debug", "VS_LOG_JSON": "yes"}, logging.DEBUG, True),
        ({"VS_LOG_LEVEL": "20"}, logging.INFO, False),
        ({"VS_LOG_LEVEL": "chatty"}, logging.WARNING, False),
    ],
)
def test_log_settings_from_env(env, level: int, json_output: bool) -> None:
    settings = LogSettings.from_env(env)

    assert settings.level == level
    assert settings.json_output is json_output
    assert settings.log_file is None


def test_configure_logging_reads_env_level(monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger) -> None:
    monkeypatch.setenv("VS_LOG_LEVEL", "debug")

    configure_logging()

    assert restore_root_logger.level == logging.DEBUG


def test_debug_flag_wins(restore_root_logger: logging.Logger) -> None:
    configure_logging(LogSettings(level="ERROR"), debug=True)

    assert restore_root_logger.level == logging.DEBUG


def test_reconfigure_replaces_only_own_handlers(restore_root_logger: logging.Logger) -> None:
    foreign = logging.NullHandler()
    restore_root_logger.addHandler(foreign)

    configure_logging(LogSettings())
    configure_logging(LogSettings())

    owned = [h for h in restore_root_logger.handlers if getattr(h, "_vs_owned", False)]
    assert len(owned) == 1
    assert foreign in restore_root_logger.handlers

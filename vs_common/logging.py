"""Logging for the ``vs`` CLI and services: stdlib loggers rendered by structlog."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
from pydantic import BaseModel, field_validator

from vs_common.config.env import parse_bool_env, parse_path_env

DEFAULT_LEVEL = logging.WARNING

# Marks handlers installed here so a second call replaces only those.
_OWNED_ATTR = "_vs_owned"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


class LogSettings(BaseModel):
    """Where and how log records are rendered."""

    level: int = DEFAULT_LEVEL
    json_output: bool = False
    log_file: Optional[Path] = None

    @field_validator("level", mode="before")
    @classmethod
    def _level_from_name(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        name = value.strip()
        if name.isdigit():
            return int(name)
        return logging.getLevelNamesMapping().get(name.upper(), DEFAULT_LEVEL)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "LogSettings":
        """Read ``VS_LOG_LEVEL``, ``VS_LOG_JSON`` and ``VS_LOG_FILE``."""
        env = os.environ if env is None else env
        values: dict[str, object] = {}
        level = env.get("VS_LOG_LEVEL")
        if level and level.strip():
            values["level"] = level
        json_output = parse_bool_env(env.get("VS_LOG_JSON"))
        if json_output is not None:
            values["json_output"] = json_output
        log_file = parse_path_env(env.get("VS_LOG_FILE"))
        if log_file is not None:
            values["log_file"] = log_file
        return cls.model_validate(values)


def _handlers(settings: LogSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    return handlers


def configure_logging(settings: LogSettings | None = None, *, debug: bool = False) -> None:
    """
    Route every ``vs_*`` logger through a structlog formatter.

    Commands print their results through the presenter, so records below
    WARNING stay hidden unless ``--debug`` or ``VS_LOG_LEVEL`` says otherwise.
    Calling this again swaps the handlers it installed and leaves foreign
    handlers alone.
    """
    settings = settings or LogSettings.from_env()

    renderer: structlog.types.Processor
    if settings.json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_SHARED_PROCESSORS)

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _OWNED_ATTR, False)]:
        root.removeHandler(handler)
        handler.close()
    for handler in _handlers(settings):
        handler.setFormatter(formatter)
        setattr(handler, _OWNED_ATTR, True)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else settings.level)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

"""Application settings resolved from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from vs_common.config import parse_bool_env, parse_choice_env, parse_path_env
from vs_common.errors import ConfigurationError, wrap_error
from vs_core.engine import PROPAGATION_MODES, PropagationMode

STORE_FILENAME = "store.json"


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    xdg = env.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "vs"


class AppSettings(BaseModel):
    """Runtime settings shared by the services and the CLI."""

    data_dir: Path = Field(default_factory=default_data_dir, description="Directory holding the record store")
    propagation: PropagationMode = Field(
        default="ancestors",
        description="How far auto-promote/demote climbs after a toggle",
    )
    prune_stale: bool = Field(
        default=False,
        description="Drop selected ids missing from the catalog when saving",
    )

    @property
    def store_path(self) -> Path:
        return self.data_dir / STORE_FILENAME

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        data_dir: Optional[Path] = None,
    ) -> "AppSettings":
        """Build settings from ``VS_*`` variables; explicit arguments win."""
        env = os.environ if env is None else env
        values: dict[str, object] = {}

        resolved_dir = data_dir or parse_path_env(env.get("VS_DATA_DIR"))
        values["data_dir"] = resolved_dir or default_data_dir(env)

        raw_mode = env.get("VS_PROPAGATION")
        if raw_mode and raw_mode.strip():
            mode = parse_choice_env(raw_mode, PROPAGATION_MODES)
            if mode is None:
                raise ConfigurationError(
                    f"Invalid VS_PROPAGATION value '{raw_mode}'",
                    context={"allowed": PROPAGATION_MODES},
                )
            values["propagation"] = mode

        prune = parse_bool_env(env.get("VS_PRUNE_STALE"))
        if prune is not None:
            values["prune_stale"] = prune

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise wrap_error(
                ConfigurationError,
                "Invalid application settings",
                context={"errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            ) from exc

"""Environment variable parsing utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_path_env(value: str | None) -> Path | None:
    """Parse a filesystem path, expanding ``~``.

    Returns None if value is None or blank.
    """
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def parse_choice_env(value: str | None, choices: Iterable[str]) -> str | None:
    """Return the lower-cased value when it is one of ``choices``.

    Returns None if value is None or not an allowed choice.
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized if normalized in set(choices) else None

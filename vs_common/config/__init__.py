"""Configuration helpers for vs_common."""

from .env import parse_bool_env, parse_choice_env, parse_path_env

__all__ = [
    "parse_bool_env",
    "parse_choice_env",
    "parse_path_env",
]

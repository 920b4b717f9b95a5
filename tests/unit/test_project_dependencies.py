"""Sanity checks for project metadata."""

from __future__ import annotations

from pathlib import Path
import tomllib

import pytest

pytestmark = pytest.mark.unit_common


def _load_pyproject() -> dict:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    return tomllib.loads(pyproject.read_text(encoding="utf-8"))


def _load_project_dependencies() -> list[str]:
    data = _load_pyproject()
    return list(data["project"]["dependencies"])


def test_runtime_stack_is_declared() -> None:
    deps = _load_project_dependencies()
    for name in ("pydantic", "typer", "rich", "prompt_toolkit", "rapidfuzz", "structlog", "PyYAML"):
        assert any(dep.startswith(name) for dep in deps), name


def test_pytest_is_test_only() -> None:
    data = _load_pyproject()
    assert not any(dep.startswith("pytest") for dep in data["project"]["dependencies"])
    assert any(dep.startswith("pytest") for dep in data["project"]["optional-dependencies"]["test"])


def test_bundled_catalog_is_packaged() -> None:
    package_data = _load_pyproject()["tool"]["setuptools"]["package-data"]
    assert "data/*.json" in package_data["vs_core"]


def test_markers_cover_test_packages() -> None:
    markers = _load_pyproject()["tool"]["pytest"]["ini_options"]["markers"]
    names = {marker.split(":", 1)[0] for marker in markers}
    assert names == {"unit_common", "unit_core", "unit_app", "unit_ui"}

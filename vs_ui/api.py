"""Stable UI API surface."""

from __future__ import annotations

from vs_ui.cli import app, ctx_store, main
from vs_ui.flows.selection import edit_selection, select_profile_skills, select_project_skills
from vs_ui.tui.system.components.tree_picker import PowerTreePicker, TreePickerConfig
from vs_ui.tui.system.headless import HeadlessUI, apply_tree_action
from vs_ui.tui.system.models import TableModel

__all__ = [
    "app",
    "main",
    "ctx_store",
    "edit_selection",
    "select_profile_skills",
    "select_project_skills",
    "PowerTreePicker",
    "TreePickerConfig",
    "HeadlessUI",
    "apply_tree_action",
    "TableModel",
]

"""
UI package providing Rich/prompt_toolkit and headless renderers.
"""

from vs_ui.tui.system.facade import TUI
from vs_ui.tui.system.headless import HeadlessUI
from vs_ui.tui.system.protocols import UI, Form, Presenter, Progress, TablePresenter, TreePicker

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "TreePicker",
    "TablePresenter",
    "Presenter",
    "Form",
    "Progress",
]

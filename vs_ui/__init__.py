"""UI facade for the skill picker CLI/TUI."""

from vs_ui.tui.system.facade import TUI
from vs_ui.tui.system.headless import HeadlessUI

__all__ = ["TUI", "HeadlessUI"]
